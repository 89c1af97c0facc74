"""
Cart Classifier: one pass over the cart, keyed off the normalized policy.

Each line is visited exactly once. What gets recorded depends on the policy
variant: buy/reward tallies for classic, target lines for volume, and
percentage-grouped complement lines for frequently-bought-together.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from bxgy_discount.models.domain import CartLine, Target
from bxgy_discount.models.policy import ClassicPolicy, ComplementPolicy, Policy, VolumePolicy


@dataclass
class CartClassification:
    """Aggregates collected during the scan."""

    # classic / tiered
    buy_quantity: int = 0
    get_candidates: list[Target] = field(default_factory=list)
    same_product: bool = False

    # volume
    volume_lines: list[Target] = field(default_factory=list)

    # complement
    trigger_present: bool = False
    complement_groups: dict[Decimal, list[Target]] = field(default_factory=dict)

    @property
    def volume_quantity(self) -> int:
        return sum(t.quantity for t in self.volume_lines)


def _classify_classic(line: CartLine, policy: ClassicPolicy, out: CartClassification) -> None:
    if policy.is_buy_match(line.product_id):
        out.buy_quantity += line.quantity
    if line.product_id == policy.get_product_id:
        out.get_candidates.append(Target(variant_id=line.variant_id, quantity=line.quantity))


def _classify_volume(line: CartLine, policy: VolumePolicy, out: CartClassification) -> None:
    if line.product_id == policy.target_product_id:
        out.volume_lines.append(Target(variant_id=line.variant_id, quantity=line.quantity))


def _classify_complement(line: CartLine, policy: ComplementPolicy, out: CartClassification) -> None:
    if policy.requires_trigger and line.product_id == policy.trigger_product_id:
        out.trigger_present = True

    complement = policy.complements.get(line.product_id)
    if complement is None:
        return
    quantity = min(line.quantity, complement.quantity)
    if quantity <= 0:
        return
    # Decimal keys compare exactly: 0.15 and 0.150 land in one group
    out.complement_groups.setdefault(complement.discount_pct, []).append(
        Target(variant_id=line.variant_id, quantity=quantity)
    )


def classify_cart(lines: Iterable[CartLine], policy: Policy) -> CartClassification:
    """Scan the cart once and collect what the policy's strategy needs."""
    out = CartClassification()
    if isinstance(policy, ClassicPolicy):
        out.same_product = policy.same_product
        visit = _classify_classic
    elif isinstance(policy, VolumePolicy):
        visit = _classify_volume
    elif isinstance(policy, ComplementPolicy):
        visit = _classify_complement
    else:
        raise TypeError(f"Unknown policy type: {type(policy).__name__}")

    for line in lines:
        visit(line, policy, out)
    return out
