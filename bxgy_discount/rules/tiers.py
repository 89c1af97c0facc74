"""Tier resolution: pick the best qualifying tier.

Both classic combo tiers and volume tiers use the same rule: among the
tiers that qualify, the one with the highest threshold wins, and on equal
thresholds the tier configured first wins.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TypeVar

from bxgy_discount.models.policy import Tier, VolumeTier

T = TypeVar("T")


def best_tier(
    tiers: Iterable[T],
    threshold: Callable[[T], int],
    qualifies: Callable[[T], bool],
) -> Optional[T]:
    """Stable max-by-threshold over qualifying tiers.

    Only a strictly greater threshold replaces the current best, so the
    earliest tier in configuration order wins ties.
    """
    best: Optional[T] = None
    for tier in tiers:
        if not qualifies(tier):
            continue
        if best is None or threshold(tier) > threshold(best):
            best = tier
    return best


def combo_tier_qualifies(
    buy_quantity: int, min_quantity: int, max_reward: int, same_product: bool
) -> bool:
    """Buy units must be present on top of the reward units when both share a product."""
    if same_product:
        return buy_quantity >= min_quantity + max_reward
    return buy_quantity >= min_quantity


def resolve_combo_tier(
    tiers: Iterable[Tier], buy_quantity: int, same_product: bool
) -> Optional[Tier]:
    return best_tier(
        tiers,
        threshold=lambda t: t.min_quantity,
        qualifies=lambda t: combo_tier_qualifies(
            buy_quantity, t.min_quantity, t.max_reward, same_product
        ),
    )


def resolve_volume_tier(tiers: Iterable[VolumeTier], total_quantity: int) -> Optional[VolumeTier]:
    return best_tier(
        tiers,
        threshold=lambda t: t.qty,
        qualifies=lambda t: t.qty <= total_quantity,
    )
