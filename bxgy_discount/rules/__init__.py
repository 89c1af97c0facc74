"""Discount decision rules: pure functions, no I/O.

normalizer -> classifier -> strategies (tiers, allocator) -> assembler
"""

from bxgy_discount.rules.classifier import CartClassification, classify_cart
from bxgy_discount.rules.normalizer import normalize
from bxgy_discount.rules.strategies import evaluate_strategy
from bxgy_discount.rules.tiers import best_tier

__all__ = [
    "CartClassification",
    "classify_cart",
    "normalize",
    "evaluate_strategy",
    "best_tier",
]
