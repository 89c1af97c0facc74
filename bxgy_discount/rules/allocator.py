"""Reward Allocator for the classic/tiered path."""

from __future__ import annotations

from typing import Iterable

from bxgy_discount.models.domain import Target


def max_discountable(
    max_reward: int, min_quantity: int, buy_quantity: int, same_product: bool
) -> int:
    """Size of the reward pool.

    When buy and reward units come from the same product, the paid units are
    never part of the pool: buy 2 get 3 on one SKU discounts at most total - 2.
    """
    if same_product:
        return min(max_reward, buy_quantity - min_quantity)
    return max_reward


def allocate_rewards(candidates: Iterable[Target], pool: int) -> list[Target]:
    """Spread the pool over candidate lines in cart order.

    Each line gets min(line quantity, what is left); lines that would get
    nothing are skipped and the walk stops once the pool is spent.
    """
    targets: list[Target] = []
    remaining = pool
    for candidate in candidates:
        if remaining <= 0:
            break
        quantity = min(candidate.quantity, remaining)
        if quantity > 0:
            targets.append(Target(variant_id=candidate.variant_id, quantity=quantity))
            remaining -= quantity
    return targets
