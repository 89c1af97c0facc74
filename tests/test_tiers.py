"""Test tier resolution."""
from decimal import Decimal

from bxgy_discount.models.policy import Tier, VolumeTier
from bxgy_discount.rules.tiers import (
    best_tier,
    combo_tier_qualifies,
    resolve_combo_tier,
    resolve_volume_tier,
)


TIERS = (
    Tier(min_quantity=1, max_reward=1, discount_value=Decimal("1")),
    Tier(min_quantity=2, max_reward=3, discount_value=Decimal("1")),
    Tier(min_quantity=3, max_reward=6, discount_value=Decimal("1")),
)


def test_best_tier_none_when_nothing_qualifies():
    assert best_tier([1, 2, 3], threshold=lambda t: t, qualifies=lambda t: False) is None


def test_best_tier_first_wins_ties():
    tiers = [("a", 2), ("b", 5), ("c", 5), ("d", 1)]
    best = best_tier(tiers, threshold=lambda t: t[1], qualifies=lambda t: True)
    assert best == ("b", 5)


def test_combo_qualification():
    assert combo_tier_qualifies(2, 2, 3, same_product=False)
    assert not combo_tier_qualifies(4, 2, 3, same_product=True)
    assert combo_tier_qualifies(5, 2, 3, same_product=True)


def test_combo_tier_different_product():
    assert resolve_combo_tier(TIERS, 0, same_product=False) is None
    assert resolve_combo_tier(TIERS, 2, same_product=False) is TIERS[1]
    assert resolve_combo_tier(TIERS, 10, same_product=False) is TIERS[2]


def test_combo_tier_same_product_needs_reward_units_too():
    assert resolve_combo_tier(TIERS, 1, same_product=True) is None
    assert resolve_combo_tier(TIERS, 4, same_product=True) is TIERS[0]
    assert resolve_combo_tier(TIERS, 5, same_product=True) is TIERS[1]
    assert resolve_combo_tier(TIERS, 9, same_product=True) is TIERS[2]


def test_combo_tier_monotonic_in_buy_quantity():
    for same_product in (False, True):
        previous = -1
        qualified = False
        for buy_quantity in range(0, 15):
            tier = resolve_combo_tier(TIERS, buy_quantity, same_product)
            if tier is None:
                assert not qualified
                continue
            qualified = True
            assert tier.min_quantity >= previous
            previous = tier.min_quantity


def test_volume_tier_selection():
    tiers = (VolumeTier(3, Decimal("0.1")), VolumeTier(5, Decimal("0.2")))
    assert resolve_volume_tier(tiers, 2) is None
    assert resolve_volume_tier(tiers, 4) is tiers[0]
    assert resolve_volume_tier(tiers, 6) is tiers[1]


def test_volume_tier_order_independent_of_configuration_order():
    tiers = (VolumeTier(5, Decimal("0.2")), VolumeTier(3, Decimal("0.1")))
    assert resolve_volume_tier(tiers, 6) is tiers[0]
    assert resolve_volume_tier(tiers, 3) is tiers[1]


def test_volume_tier_tie_keeps_first():
    tiers = (VolumeTier(3, Decimal("0.1")), VolumeTier(3, Decimal("0.3")))
    assert resolve_volume_tier(tiers, 3) is tiers[0]
