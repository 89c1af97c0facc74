"""Cart snapshot and discount result types used inside the engine."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Union


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CartLine:
    """One product-variant line of the cart snapshot."""

    product_id: str
    variant_id: str
    quantity: int


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class ApplicationStrategy(str, Enum):
    FIRST = "FIRST"  # apply only the first (only) discount
    ALL = "ALL"      # apply every discount independently


@dataclass(frozen=True)
class Target:
    """A cart line and how many of its units receive the discount."""

    variant_id: str
    quantity: int


@dataclass(frozen=True)
class PercentageValue:
    value: Decimal


@dataclass(frozen=True)
class FixedAmountValue:
    amount: Decimal
    applies_to_each_item: bool = False


DiscountValue = Union[PercentageValue, FixedAmountValue]


@dataclass(frozen=True)
class Discount:
    message: str
    targets: tuple[Target, ...]
    value: DiscountValue


@dataclass(frozen=True)
class RunResult:
    """Outcome of one evaluation. No discounts means the cart is untouched."""

    discounts: tuple[Discount, ...] = ()
    application_strategy: ApplicationStrategy = ApplicationStrategy.FIRST

    @classmethod
    def empty(cls) -> "RunResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.discounts
