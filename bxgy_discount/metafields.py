"""
Merchant-side configuration builders.

The admin screens describe bundles in their own terms (buy 2 get 3 free,
"Duo: 15% off", complements with a per-item cap). These pure functions turn
those descriptions into:
- the function configuration stored on the automatic discount node, which
  run_discount() consumes
- the storefront display payloads stored on products, which the theme reads

Nothing here talks to the network; callers write the returned payloads.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

from bxgy_discount.config import FunctionSettings
from bxgy_discount.models.policy import BuyType, DiscountType

PLACEHOLDER_PRODUCT_ID = "gid://shopify/Product/0"
# Inert classic fields: no cart can reach this buy quantity
UNREACHABLE_MIN_QUANTITY = 999999


# ---------------------------------------------------------------------------
# Admin-side bundle shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ComboTierInput:
    """One tiered-combo row: buy buy_qty, get free_qty at discount_pct."""
    buy_qty: int
    free_qty: int
    discount_pct: Decimal


@dataclass(frozen=True)
class VolumeTierInput:
    """One volume row, e.g. label="Duo", qty=2, discount_pct=15."""
    label: str
    qty: int
    discount_pct: Decimal
    popular: bool = False


@dataclass(frozen=True)
class ComplementInput:
    product_id: str
    discount_pct: Decimal
    quantity: int = 1
    title: str = ""
    handle: str = ""
    image: str = ""
    price: int = 0  # cents
    variant_id: str = ""
    group: int = 0


@dataclass(frozen=True)
class DesignConfig:
    """Storefront widget styling chosen in the admin."""
    accent_color: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    button_color: Optional[str] = None
    button_text_color: Optional[str] = None
    border_radius: Optional[int] = None
    header_text: Optional[str] = None
    gift_text: Optional[str] = None
    badge_text: Optional[str] = None
    card_layout: str = "vertical"

    def base_fields(self) -> dict[str, Any]:
        return {
            "designAccentColor": self.accent_color,
            "designBackgroundColor": self.background_color,
            "designTextColor": self.text_color,
            "designButtonColor": self.button_color,
            "designButtonTextColor": self.button_text_color,
            "designBorderRadius": self.border_radius,
            "designHeaderText": self.header_text,
        }


def _number(value: Decimal) -> Any:
    """Decimal -> int when whole, else float, for JSON payloads."""
    value = Decimal(value)
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _require_positive(name: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")


# ---------------------------------------------------------------------------
# Function configuration
# ---------------------------------------------------------------------------

def build_classic_configuration(
    buy_type: str,
    buy_reference: str,
    min_quantity: int,
    get_product_id: str,
    discount_type: str,
    discount_value: Decimal,
    max_reward: int,
) -> dict[str, Any]:
    """Classic BXGY: buy from a product or collection, get a reward product."""
    buy_type = BuyType(buy_type).value
    discount_type = DiscountType(discount_type).value
    if not get_product_id:
        raise ValueError("Reward product is required")
    if Decimal(discount_value) <= 0:
        raise ValueError("Discount value must be greater than 0")
    _require_positive("minQuantity", min_quantity)
    _require_positive("maxReward", max_reward)

    return {
        "buyType": buy_type,
        "buyProductId": buy_reference if buy_type == BuyType.PRODUCT.value else None,
        "buyCollectionIds": [buy_reference] if buy_type == BuyType.COLLECTION.value else None,
        "minQuantity": min_quantity,
        "getProductId": get_product_id,
        "discountType": discount_type,
        "discountValue": _number(discount_value),
        "maxReward": max_reward,
    }


def build_tiered_configuration(
    product_ids: Sequence[str],
    tiers: Sequence[ComboTierInput],
    trigger_type: str = "product",
    trigger_reference: Optional[str] = None,
) -> dict[str, Any]:
    """Tiered combo: the best tier the cart reaches decides the reward."""
    if not tiers:
        raise ValueError("At least one tier is required")
    for tier in tiers:
        _require_positive("buyQty", tier.buy_qty)
        _require_positive("freeQty", tier.free_qty)

    first_product = product_ids[0] if product_ids else None
    return {
        "buyType": trigger_type,
        "buyProductId": first_product,
        "buyCollectionIds": (
            [trigger_reference] if trigger_type == "collection" and trigger_reference else None
        ),
        "minQuantity": tiers[0].buy_qty,
        "getProductId": first_product or PLACEHOLDER_PRODUCT_ID,
        "discountType": DiscountType.PERCENTAGE.value,
        "discountValue": _number(tiers[0].discount_pct),
        "maxReward": max(t.free_qty for t in tiers),
        "tiers": [
            {
                "minQuantity": t.buy_qty,
                "maxReward": t.free_qty,
                "discountValue": _number(t.discount_pct),
            }
            for t in tiers
        ],
    }


def build_volume_configuration(
    product_ids: Sequence[str],
    volume_tiers: Sequence[VolumeTierInput],
    trigger_type: str = "product",
) -> dict[str, Any]:
    """Volume breaks on the first selected product."""
    if not volume_tiers:
        raise ValueError("At least one volume tier is required")
    for tier in volume_tiers:
        _require_positive("qty", tier.qty)

    first_product = product_ids[0] if product_ids else ""
    return {
        "buyType": "all" if trigger_type == "all" else BuyType.PRODUCT.value,
        "buyProductId": first_product,
        "buyCollectionIds": None,
        "minQuantity": 1,
        "getProductId": first_product,
        "discountType": DiscountType.PERCENTAGE.value,
        "discountValue": 0,
        "maxReward": 0,
        "volumeTiers": [
            {"qty": t.qty, "discountPct": _number(t.discount_pct)} for t in volume_tiers
        ],
    }


def build_complement_configuration(
    complements: Iterable[ComplementInput],
    trigger_type: str = "product",
    trigger_reference: Optional[str] = None,
) -> dict[str, Any]:
    """Frequently bought together.

    The classic fields point at a product that never exists and a minimum no
    cart reaches, so only the complement path can ever fire.
    """
    complements = list(complements)
    if not complements:
        raise ValueError("At least one complement product is required")

    return {
        "buyType": BuyType.PRODUCT.value,
        "buyProductId": None,
        "buyCollectionIds": None,
        "minQuantity": UNREACHABLE_MIN_QUANTITY,
        "getProductId": PLACEHOLDER_PRODUCT_ID,
        "discountType": DiscountType.PERCENTAGE.value,
        "discountValue": 0,
        "maxReward": 0,
        "complementProducts": [
            {
                "productId": c.product_id,
                "discountPct": _number(c.discount_pct),
                "quantity": c.quantity or 1,
            }
            for c in complements
        ],
        "triggerProductId": (
            trigger_reference if trigger_type == "product" and trigger_reference else None
        ),
    }


def function_metafield(
    configuration: dict[str, Any], settings: Optional[FunctionSettings] = None
) -> dict[str, Any]:
    """Metafield input attaching a configuration to the automatic discount."""
    settings = settings or FunctionSettings.default()
    return {
        "namespace": settings.metafields.function_namespace,
        "key": settings.metafields.function_key,
        "type": "json",
        "value": json.dumps(configuration),
    }


# ---------------------------------------------------------------------------
# Storefront display payloads
# ---------------------------------------------------------------------------

def build_tiered_display_value(
    bundle_name: str, tiers: Sequence[ComboTierInput], design: Optional[DesignConfig] = None
) -> str:
    design = design or DesignConfig()
    return json.dumps(
        {
            "bundleName": bundle_name,
            "tiers": [
                {
                    "buyQty": t.buy_qty,
                    "freeQty": t.free_qty,
                    "discountPct": _number(t.discount_pct),
                }
                for t in tiers
            ],
            **design.base_fields(),
            "designGiftText": design.gift_text,
            "designCardLayout": design.card_layout,
        }
    )


def build_volume_display_value(
    bundle_name: str, volume_tiers: Sequence[VolumeTierInput], design: Optional[DesignConfig] = None
) -> str:
    design = design or DesignConfig()
    return json.dumps(
        {
            "bundleName": bundle_name,
            "volumeTiers": [
                {
                    "label": t.label,
                    "qty": t.qty,
                    "discountPct": _number(t.discount_pct),
                    "popular": t.popular,
                }
                for t in volume_tiers
            ],
            **design.base_fields(),
            "designBadgeText": design.badge_text,
            "designCardLayout": design.card_layout,
        }
    )


def build_complement_display_value(
    bundle_name: str,
    complements: Iterable[ComplementInput],
    design: Optional[DesignConfig] = None,
    mode: str = "fbt",
    trigger_discount_pct: Decimal = Decimal(0),
) -> str:
    design = design or DesignConfig()
    return json.dumps(
        {
            "bundleName": bundle_name,
            "complements": [
                {
                    "productId": c.product_id,
                    "title": c.title,
                    "handle": c.handle,
                    "image": c.image,
                    "price": c.price,
                    "variantId": c.variant_id,
                    "discountPct": _number(c.discount_pct),
                    "quantity": c.quantity or 1,
                    "group": c.group,
                }
                for c in complements
            ],
            "mode": mode or "fbt",
            "triggerDiscountPct": _number(trigger_discount_pct),
            **design.base_fields(),
            "designCardLayout": design.card_layout,
        }
    )


def storefront_metafield(
    owner_id: str, bundle_kind: str, value: str, settings: Optional[FunctionSettings] = None
) -> dict[str, Any]:
    """metafieldsSet input for a product-level display payload.

    bundle_kind is "tiered", "volume" or "complement"; the key comes from
    settings.metafields.
    """
    settings = settings or FunctionSettings.default()
    return {
        "ownerId": owner_id,
        "namespace": settings.metafields.storefront_namespace,
        "key": settings.metafields.display_key(bundle_kind),
        "type": "json",
        "value": value,
    }
