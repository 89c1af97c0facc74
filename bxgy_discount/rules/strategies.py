"""
Strategy evaluation.

Exactly one strategy runs per evaluation, chosen by the policy's variant:

A. Complement / frequently bought together -> one discount per percentage, ALL
B. Volume                                  -> one discount on every target line, FIRST
C. Classic BXGY / tiered combo             -> one capped reward discount, FIRST

Every unmet precondition returns the empty result.
"""
from __future__ import annotations

from bxgy_discount.config import FunctionSettings
from bxgy_discount.models.domain import Discount, PercentageValue, RunResult
from bxgy_discount.models.policy import ClassicPolicy, ComplementPolicy, Policy, VolumePolicy
from bxgy_discount.rules.allocator import allocate_rewards, max_discountable
from bxgy_discount.rules.assembler import (
    combined_discounts,
    discount_value,
    format_pct,
    single_discount,
)
from bxgy_discount.rules.classifier import CartClassification
from bxgy_discount.rules.tiers import combo_tier_qualifies, resolve_combo_tier, resolve_volume_tier
from bxgy_discount.utils.logger import get_logger

logger = get_logger("strategies")


# ---------------------------------------------------------------------------
# A. Complement / FBT
# ---------------------------------------------------------------------------

def evaluate_complement(
    policy: ComplementPolicy, cart: CartClassification, settings: FunctionSettings
) -> RunResult:
    if policy.requires_trigger and not cart.trigger_present:
        logger.debug("Complement: trigger product %s not in cart", policy.trigger_product_id)
        return RunResult.empty()

    discounts = [
        Discount(
            message=settings.messages.fbt_message(format_pct(pct)),
            targets=tuple(targets),
            value=PercentageValue(value=pct),
        )
        for pct, targets in cart.complement_groups.items()
        if pct > 0
    ]
    if not discounts:
        logger.debug("Complement: no discountable complement lines")
    return combined_discounts(discounts)


# ---------------------------------------------------------------------------
# B. Volume
# ---------------------------------------------------------------------------

def evaluate_volume(
    policy: VolumePolicy, cart: CartClassification, settings: FunctionSettings
) -> RunResult:
    if not cart.volume_lines:
        logger.debug("Volume: product %s not in cart", policy.target_product_id)
        return RunResult.empty()

    total = cart.volume_quantity
    tier = resolve_volume_tier(policy.tiers, total)
    if tier is None or tier.discount_pct <= 0:
        logger.debug("Volume: no discounting tier for quantity %d", total)
        return RunResult.empty()

    logger.debug("Volume: tier qty=%d pct=%s for quantity %d", tier.qty, tier.discount_pct, total)
    return single_discount(
        settings.messages.volume_message,
        cart.volume_lines,
        PercentageValue(value=tier.discount_pct),
    )


# ---------------------------------------------------------------------------
# C. Classic BXGY / tiered combo
# ---------------------------------------------------------------------------

def evaluate_classic(
    policy: ClassicPolicy, cart: CartClassification, settings: FunctionSettings
) -> RunResult:
    if policy.tiers:
        tier = resolve_combo_tier(policy.tiers, cart.buy_quantity, cart.same_product)
        if tier is None:
            logger.debug("Classic: no tier qualifies for buy quantity %d", cart.buy_quantity)
            return RunResult.empty()
        min_quantity, max_reward, amount = tier.min_quantity, tier.max_reward, tier.discount_value
    else:
        min_quantity, max_reward, amount = (
            policy.min_quantity,
            policy.max_reward,
            policy.discount_value,
        )
        if not combo_tier_qualifies(cart.buy_quantity, min_quantity, max_reward, cart.same_product):
            logger.debug(
                "Classic: buy quantity %d below minimum %d", cart.buy_quantity, min_quantity
            )
            return RunResult.empty()

    if not cart.get_candidates:
        logger.debug("Classic: reward product %s not in cart", policy.get_product_id)
        return RunResult.empty()

    if amount <= 0:
        logger.debug("Classic: discount value %s is not positive", amount)
        return RunResult.empty()

    value = discount_value(policy.discount_type, amount)
    if value is None:
        logger.debug("Classic: unknown discount type %r", policy.discount_type)
        return RunResult.empty()

    pool = max_discountable(max_reward, min_quantity, cart.buy_quantity, cart.same_product)
    targets = allocate_rewards(cart.get_candidates, pool)
    if not targets:
        logger.debug("Classic: reward pool of %d allocated nothing", pool)
    return single_discount(settings.messages.bxgy_message, targets, value)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def evaluate_strategy(
    policy: Policy, cart: CartClassification, settings: FunctionSettings
) -> RunResult:
    if isinstance(policy, ComplementPolicy):
        return evaluate_complement(policy, cart, settings)
    if isinstance(policy, VolumePolicy):
        return evaluate_volume(policy, cart, settings)
    if isinstance(policy, ClassicPolicy):
        return evaluate_classic(policy, cart, settings)
    raise TypeError(f"Unknown policy type: {type(policy).__name__}")
