"""
Configuration Normalizer: raw payload -> strategy-tagged Policy.

The payload is whatever the discount node carries: a JSON string, an
already-decoded mapping, or nothing. Anything that does not decode into the
configuration schema normalizes to None, which the engine turns into the
empty result. A merchant misconfiguration must never fail checkout.

Strategy priority is decided here and nowhere else:
complementProducts > volumeTiers > classic/tiered.
"""
from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from bxgy_discount.models.policy import (
    BuyType,
    ClassicPolicy,
    ComplementPolicy,
    ComplementProduct,
    Policy,
    Tier,
    VolumePolicy,
    VolumeTier,
)
from bxgy_discount.models.schemas import FunctionConfiguration
from bxgy_discount.utils.logger import get_logger

logger = get_logger("normalizer")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode_configuration(raw: Any) -> Optional[FunctionConfiguration]:
    """Decode the raw payload, or return None if it is absent or malformed."""
    if raw is None:
        return None

    try:
        if isinstance(raw, (str, bytes, bytearray)):
            raw = json.loads(raw, parse_float=Decimal)
        if not isinstance(raw, Mapping):
            logger.warning("Discount configuration is not an object (%s)", type(raw).__name__)
            return None
        return FunctionConfiguration.model_validate(dict(raw))
    except ValidationError as exc:
        logger.warning("Discount configuration failed validation (%d errors)", exc.error_count())
    except (TypeError, ValueError) as exc:
        # JSONDecodeError, UnicodeDecodeError and integer digit limits all land here
        logger.warning("Discount configuration could not be decoded: %s", exc)
    return None


# ---------------------------------------------------------------------------
# Strategy construction
# ---------------------------------------------------------------------------

def _non_empty(value: Optional[str]) -> Optional[str]:
    return value if value else None


def _complement_policy(config: FunctionConfiguration) -> ComplementPolicy:
    complements: dict[str, ComplementProduct] = {}
    for item in config.complement_products:
        # Later entries for the same product replace earlier ones
        complements[item.product_id] = ComplementProduct(
            product_id=item.product_id,
            discount_pct=item.discount_pct,
            quantity=item.quantity if item.quantity is not None else 1,
        )
    return ComplementPolicy(
        complements=complements,
        trigger_product_id=_non_empty(config.trigger_product_id),
    )


def _volume_policy(config: FunctionConfiguration) -> VolumePolicy:
    return VolumePolicy(
        target_product_id=_non_empty(config.buy_product_id) or config.get_product_id,
        tiers=tuple(VolumeTier(qty=t.qty, discount_pct=t.discount_pct) for t in config.volume_tiers),
    )


def _classic_policy(config: FunctionConfiguration) -> ClassicPolicy:
    try:
        buy_type: Optional[BuyType] = BuyType(config.buy_type)
    except ValueError:
        buy_type = None

    return ClassicPolicy(
        buy_type=buy_type,
        buy_product_id=config.buy_product_id,
        buy_collection_ids=frozenset(config.buy_collection_ids or ()),
        min_quantity=config.min_quantity,
        get_product_id=config.get_product_id,
        discount_type=config.discount_type,
        discount_value=config.discount_value,
        max_reward=config.max_reward,
        tiers=tuple(
            Tier(
                min_quantity=t.min_quantity,
                max_reward=t.max_reward,
                discount_value=t.discount_value,
            )
            for t in config.tiers or ()
        ),
    )


def build_policy(config: FunctionConfiguration) -> Policy:
    """Pick the strategy variant for a decoded configuration."""
    if config.complement_products:
        return _complement_policy(config)
    if config.volume_tiers:
        return _volume_policy(config)
    return _classic_policy(config)


def normalize(raw: Any) -> Optional[Policy]:
    """Raw payload -> Policy, or None when there is nothing usable."""
    config = decode_configuration(raw)
    if config is None:
        return None
    policy = build_policy(config)
    logger.debug("Normalized configuration to %s", type(policy).__name__)
    return policy
