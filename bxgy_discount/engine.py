"""Discount function entry point.

run_discount() is the whole function: normalize the configuration, classify
the cart, evaluate the one applicable strategy. It is pure and keeps no
state between calls, so the same cart and configuration always produce the
same result.

Example::

    result = run_discount(
        [CartLine(product_id="A", variant_id="A-1", quantity=3),
         CartLine(product_id="B", variant_id="B-1", quantity=2)],
        '{"buyType": "product", "buyProductId": "A", "minQuantity": 2, ...}',
    )
"""

from typing import Any, Iterable, Optional

from bxgy_discount.config import FunctionSettings
from bxgy_discount.models.domain import CartLine, RunResult
from bxgy_discount.models.schemas import FunctionRunInput, FunctionRunResult
from bxgy_discount.rules import classify_cart, evaluate_strategy, normalize
from bxgy_discount.utils.logger import get_logger

logger = get_logger("engine")

DEFAULT_SETTINGS = FunctionSettings.default()


def run_discount(
    lines: Iterable[CartLine],
    raw_config: Any,
    settings: Optional[FunctionSettings] = None,
) -> RunResult:
    """Evaluate a configuration against a cart snapshot."""
    settings = settings or DEFAULT_SETTINGS

    policy = normalize(raw_config)
    if policy is None:
        logger.debug("No usable configuration; returning empty result")
        return RunResult.empty()

    cart = classify_cart(lines, policy)
    result = evaluate_strategy(policy, cart, settings)
    logger.debug(
        "%s produced %d discount(s), strategy %s",
        type(policy).__name__,
        len(result.discounts),
        result.application_strategy.value,
    )
    return result


def run(payload: FunctionRunInput, settings: Optional[FunctionSettings] = None) -> FunctionRunResult:
    """Host contract: decoded function input in, wire result out."""
    result = run_discount(payload.cart_lines(), payload.configuration(), settings)
    return FunctionRunResult.from_result(result)
