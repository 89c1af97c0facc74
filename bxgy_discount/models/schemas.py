"""Pydantic schemas for the function's wire formats.

Three payloads cross the function boundary:
- FunctionConfiguration: the merchant's JSON stored on the discount node
- FunctionRunInput: the cart snapshot plus that configuration
- FunctionRunResult: the discounts handed back to the host

Field names are camelCase on the wire; snake_case spellings are accepted on
input as well.
"""

from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

from bxgy_discount.models.domain import (
    ApplicationStrategy,
    CartLine,
    FixedAmountValue,
    PercentageValue,
    RunResult,
)


def _exact_decimal(value: Any) -> Any:
    # JSON numbers only: strings and booleans are type mismatches
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    # Go through the shortest repr so 0.15 stays 0.15 and not 0.1499999...
    if isinstance(value, float):
        return Decimal(repr(value))
    return value


ExactDecimal = Annotated[Decimal, BeforeValidator(_exact_decimal)]

# Counts are JSON integers in the signed 32-bit range; no string or float coercion
I32_MAX = 2**31 - 1
Count = Annotated[StrictInt, Field(ge=0, le=I32_MAX)]


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Function configuration
# ---------------------------------------------------------------------------

class TierConfig(WireModel):
    min_quantity: Count
    max_reward: Count
    discount_value: ExactDecimal


class VolumeTierConfig(WireModel):
    qty: Count
    discount_pct: ExactDecimal


class ComplementProductConfig(WireModel):
    product_id: str
    discount_pct: ExactDecimal
    quantity: Optional[Annotated[StrictInt, Field(le=I32_MAX)]] = None


class FunctionConfiguration(WireModel):
    """Discount node configuration as written by the admin screens."""

    buy_type: str
    buy_product_id: Optional[str] = None
    buy_collection_ids: Optional[list[str]] = None
    min_quantity: Count
    get_product_id: str
    discount_type: str
    discount_value: ExactDecimal
    max_reward: Count
    tiers: Optional[list[TierConfig]] = None

    volume_tiers: Optional[list[VolumeTierConfig]] = None

    complement_products: Optional[list[ComplementProductConfig]] = None
    trigger_product_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Run input
# ---------------------------------------------------------------------------

class ProductRef(WireModel):
    id: str


class Merchandise(WireModel):
    typename: Optional[str] = Field(None, alias="__typename")
    id: Optional[str] = None
    product: Optional[ProductRef] = None

    @property
    def is_product_variant(self) -> bool:
        if self.typename not in (None, "ProductVariant"):
            return False
        return self.id is not None and self.product is not None


class CartLineInput(WireModel):
    id: Optional[str] = None
    quantity: int = Field(..., ge=0)
    merchandise: Merchandise


class CartInput(WireModel):
    lines: list[CartLineInput] = Field(default_factory=list)


class Metafield(WireModel):
    value: Any = None


class DiscountNode(WireModel):
    metafield: Optional[Metafield] = None


class FunctionRunInput(WireModel):
    cart: CartInput
    discount_node: DiscountNode = Field(default_factory=DiscountNode)

    def cart_lines(self) -> list[CartLine]:
        """Product-variant lines in cart order; other merchandise is dropped."""
        return [
            CartLine(
                product_id=line.merchandise.product.id,
                variant_id=line.merchandise.id,
                quantity=line.quantity,
            )
            for line in self.cart.lines
            if line.merchandise.is_product_variant
        ]

    def configuration(self) -> Any:
        """Raw configuration payload, or None when no metafield is attached."""
        if self.discount_node.metafield is None:
            return None
        return self.discount_node.metafield.value


# ---------------------------------------------------------------------------
# Run result
# ---------------------------------------------------------------------------

class ProductVariantTarget(WireModel):
    id: str
    quantity: Optional[int] = None


class TargetOutput(WireModel):
    product_variant: ProductVariantTarget


class Percentage(WireModel):
    value: Decimal


class FixedAmount(WireModel):
    amount: Decimal
    applies_to_each_item: Optional[bool] = None


class ValueOutput(WireModel):
    percentage: Optional[Percentage] = None
    fixed_amount: Optional[FixedAmount] = None


class DiscountOutput(WireModel):
    message: Optional[str] = None
    targets: list[TargetOutput]
    value: ValueOutput


class FunctionRunResult(WireModel):
    discounts: list[DiscountOutput] = Field(default_factory=list)
    discount_application_strategy: ApplicationStrategy = ApplicationStrategy.FIRST

    @classmethod
    def from_result(cls, result: RunResult) -> "FunctionRunResult":
        discounts = []
        for discount in result.discounts:
            if isinstance(discount.value, PercentageValue):
                value = ValueOutput(percentage=Percentage(value=discount.value.value))
            elif isinstance(discount.value, FixedAmountValue):
                value = ValueOutput(
                    fixed_amount=FixedAmount(
                        amount=discount.value.amount,
                        applies_to_each_item=discount.value.applies_to_each_item,
                    )
                )
            else:
                raise TypeError(f"Unsupported discount value: {discount.value!r}")
            discounts.append(
                DiscountOutput(
                    message=discount.message,
                    targets=[
                        TargetOutput(
                            product_variant=ProductVariantTarget(
                                id=target.variant_id, quantity=target.quantity
                            )
                        )
                        for target in discount.targets
                    ],
                    value=value,
                )
            )
        return cls(
            discounts=discounts,
            discount_application_strategy=result.application_strategy,
        )

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys and unset branches omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
