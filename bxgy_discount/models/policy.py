"""Normalized discount policy.

A policy is exactly one of three strategy variants. The normalizer builds
it once per evaluation; every later stage dispatches on its type instead of
re-checking which optional configuration blocks were present.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BuyType(str, Enum):
    PRODUCT = "product"
    COLLECTION = "collection"


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Tier:
    """Classic combo tier: buy min_quantity, get up to max_reward discounted."""

    min_quantity: int
    max_reward: int
    discount_value: Decimal


@dataclass(frozen=True)
class VolumeTier:
    """Quantity break: qty or more units of the target product get discount_pct."""

    qty: int
    discount_pct: Decimal


@dataclass(frozen=True)
class ComplementProduct:
    """A frequently-bought-together product and its capped discount."""

    product_id: str
    discount_pct: Decimal
    quantity: int = 1


# ---------------------------------------------------------------------------
# Strategy variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ComplementPolicy:
    """Frequently-bought-together bundle. Keyed by complement product id."""

    complements: dict[str, ComplementProduct]
    trigger_product_id: Optional[str] = None

    @property
    def requires_trigger(self) -> bool:
        return bool(self.trigger_product_id)


@dataclass(frozen=True)
class VolumePolicy:
    """Quantity-break pricing on a single target product."""

    target_product_id: str
    tiers: tuple[VolumeTier, ...]


@dataclass(frozen=True)
class ClassicPolicy:
    """Classic buy-X-get-Y, optionally tiered."""

    buy_type: Optional[BuyType]
    get_product_id: str
    min_quantity: int
    max_reward: int
    discount_type: str
    discount_value: Decimal
    buy_product_id: Optional[str] = None
    buy_collection_ids: frozenset[str] = field(default_factory=frozenset)
    tiers: tuple[Tier, ...] = ()

    @property
    def same_product(self) -> bool:
        """Buy and reward units are drawn from one product's pool."""
        return self.buy_product_id is not None and self.buy_product_id == self.get_product_id

    def is_buy_match(self, product_id: str) -> bool:
        if self.buy_type is BuyType.PRODUCT:
            return self.buy_product_id is not None and product_id == self.buy_product_id
        if self.buy_type is BuyType.COLLECTION:
            return product_id in self.buy_collection_ids
        return False


Policy = Union[ComplementPolicy, VolumePolicy, ClassicPolicy]
