"""Result Assembler: discount values, messages and the final RunResult."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from bxgy_discount.models.domain import (
    ApplicationStrategy,
    Discount,
    DiscountValue,
    FixedAmountValue,
    PercentageValue,
    RunResult,
    Target,
)
from bxgy_discount.models.policy import DiscountType


def discount_value(discount_type: str, amount: Decimal) -> Optional[DiscountValue]:
    """Value object for a configured discount type; None if the type is unknown."""
    if discount_type == DiscountType.PERCENTAGE.value:
        return PercentageValue(value=amount)
    if discount_type == DiscountType.FIXED.value:
        return FixedAmountValue(amount=amount, applies_to_each_item=False)
    return None


def format_pct(pct: Decimal) -> str:
    """Render a percentage without exponent or trailing zeros (15.0 -> "15")."""
    return format(pct.normalize(), "f")


def single_discount(
    message: str, targets: Iterable[Target], value: DiscountValue
) -> RunResult:
    targets = tuple(targets)
    if not targets:
        return RunResult.empty()
    return RunResult(
        discounts=(Discount(message=message, targets=targets, value=value),),
        application_strategy=ApplicationStrategy.FIRST,
    )


def combined_discounts(discounts: Iterable[Discount]) -> RunResult:
    """Independent discounts that all apply together."""
    discounts = tuple(d for d in discounts if d.targets)
    if not discounts:
        return RunResult.empty()
    return RunResult(discounts=discounts, application_strategy=ApplicationStrategy.ALL)
