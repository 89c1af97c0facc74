"""Discount function router.

POST /run accepts the same input document the host passes to the function
and returns the same result document. Configuration problems are not HTTP
errors: they come back as an empty discount list.
"""

from fastapi import APIRouter

from bxgy_discount.api.middleware import get_current_shop
from bxgy_discount.config import FunctionSettings
from bxgy_discount.engine import run
from bxgy_discount.models.schemas import FunctionRunInput, FunctionRunResult
from bxgy_discount.utils.logger import get_logger

logger = get_logger("api")

router = APIRouter()

settings = FunctionSettings.from_env()


@router.post(
    "/run",
    response_model=FunctionRunResult,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
def run_function(payload: FunctionRunInput):
    """Evaluate the attached discount configuration against the cart."""
    result = run(payload, settings)
    logger.info(
        "shop=%s lines=%d discounts=%d strategy=%s",
        get_current_shop(),
        len(payload.cart.lines),
        len(result.discounts),
        result.discount_application_strategy.value,
    )
    return result
