"""Test configuration decoding and strategy selection."""
import json
from decimal import Decimal

import pytest

from bxgy_discount.models.policy import (
    BuyType,
    ClassicPolicy,
    ComplementPolicy,
    VolumePolicy,
)
from bxgy_discount.rules.normalizer import decode_configuration, normalize


CLASSIC = {
    "buyType": "product",
    "buyProductId": "A",
    "minQuantity": 2,
    "getProductId": "B",
    "discountType": "percentage",
    "discountValue": 0.5,
    "maxReward": 1,
}


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "not json",
        "[]",
        "42",
        json.dumps({"buyType": "product"}),
        json.dumps({**CLASSIC, "minQuantity": -1}),
        json.dumps({**CLASSIC, "maxReward": "lots"}),
        json.dumps({**CLASSIC, "discountValue": "abc"}),
        json.dumps({**CLASSIC, "tiers": [{"minQuantity": 2}]}),
        # wrong JSON types are not coerced
        json.dumps({**CLASSIC, "minQuantity": "2"}),
        json.dumps({**CLASSIC, "minQuantity": 2.0}),
        json.dumps({**CLASSIC, "maxReward": True}),
        json.dumps({**CLASSIC, "discountValue": "0.5"}),
        json.dumps({**CLASSIC, "discountValue": False}),
        json.dumps({**CLASSIC, "tiers": [{"minQuantity": "1", "maxReward": 1, "discountValue": 1}]}),
        json.dumps({**CLASSIC, "volumeTiers": [{"qty": 2, "discountPct": "10"}]}),
        json.dumps({**CLASSIC, "complementProducts": [{"productId": "P", "discountPct": 10, "quantity": 1.5}]}),
        # outside the 32-bit signed range
        json.dumps({**CLASSIC, "maxReward": 2**31}),
        # undecodable input
        json.dumps(CLASSIC)[:-1] + ', "minQuantity": 1' + "0" * 5000 + "}",
        b'{"buyType": "\xff"}',
        b"\xff\xfe",
    ],
)
def test_malformed_configuration_is_absent(raw):
    assert normalize(raw) is None


def test_classic_from_json_string():
    policy = normalize(json.dumps(CLASSIC))
    assert isinstance(policy, ClassicPolicy)
    assert policy.buy_type is BuyType.PRODUCT
    assert policy.buy_product_id == "A"
    assert policy.get_product_id == "B"
    assert policy.discount_value == Decimal("0.5")
    assert policy.tiers == ()
    assert not policy.same_product


def test_classic_from_mapping_keeps_float_exact():
    policy = normalize({**CLASSIC, "discountValue": 0.15})
    assert policy.discount_value == Decimal("0.15")


def test_snake_case_fields_accepted():
    config = {
        "buy_type": "collection",
        "buy_collection_ids": ["C1", "C2"],
        "min_quantity": 1,
        "get_product_id": "B",
        "discount_type": "fixed",
        "discount_value": 5.0,
        "max_reward": 2,
    }
    policy = normalize(config)
    assert isinstance(policy, ClassicPolicy)
    assert policy.buy_type is BuyType.COLLECTION
    assert policy.buy_collection_ids == frozenset({"C1", "C2"})


def test_unknown_fields_ignored():
    policy = normalize({**CLASSIC, "bundleName": "Summer", "mode": "fbt"})
    assert isinstance(policy, ClassicPolicy)


def test_unknown_buy_type_never_matches():
    policy = normalize({**CLASSIC, "buyType": "all"})
    assert policy.buy_type is None
    assert not policy.is_buy_match("A")


def test_complement_beats_volume_and_classic():
    config = {
        **CLASSIC,
        "tiers": [{"minQuantity": 1, "maxReward": 1, "discountValue": 1}],
        "volumeTiers": [{"qty": 2, "discountPct": 0.1}],
        "complementProducts": [{"productId": "P", "discountPct": 0.15}],
        "triggerProductId": "T",
    }
    policy = normalize(config)
    assert isinstance(policy, ComplementPolicy)
    assert policy.trigger_product_id == "T"
    assert policy.complements["P"].quantity == 1


def test_volume_beats_classic():
    config = {**CLASSIC, "volumeTiers": [{"qty": 2, "discountPct": 0.1}]}
    policy = normalize(config)
    assert isinstance(policy, VolumePolicy)
    assert policy.target_product_id == "A"  # buyProductId before getProductId


def test_empty_blocks_fall_through():
    config = {**CLASSIC, "complementProducts": [], "volumeTiers": []}
    assert isinstance(normalize(config), ClassicPolicy)


def test_volume_target_falls_back_to_get_product():
    config = {**CLASSIC, "buyProductId": "", "volumeTiers": [{"qty": 2, "discountPct": 0.1}]}
    assert normalize(config).target_product_id == "B"


def test_empty_trigger_means_no_trigger():
    config = {
        **CLASSIC,
        "complementProducts": [{"productId": "P", "discountPct": 0.15, "quantity": 2}],
        "triggerProductId": "",
    }
    policy = normalize(config)
    assert policy.trigger_product_id is None
    assert not policy.requires_trigger


def test_duplicate_complement_last_entry_wins():
    config = {
        **CLASSIC,
        "complementProducts": [
            {"productId": "P", "discountPct": 0.1},
            {"productId": "P", "discountPct": 0.2, "quantity": 3},
        ],
    }
    complement = normalize(config).complements["P"]
    assert complement.discount_pct == Decimal("0.2")
    assert complement.quantity == 3


def test_decode_keeps_tiers_in_order():
    config = decode_configuration(
        json.dumps(
            {
                **CLASSIC,
                "tiers": [
                    {"minQuantity": 3, "maxReward": 2, "discountValue": 1.0},
                    {"minQuantity": 1, "maxReward": 1, "discountValue": 0.5},
                ],
            }
        )
    )
    assert [t.min_quantity for t in config.tiers] == [3, 1]
