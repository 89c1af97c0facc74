"""Test the stdin/stdout runner."""
import io
import json

from bxgy_discount.__main__ import main


CONFIG = {
    "buyType": "product",
    "minQuantity": 999999,
    "getProductId": "gid://shopify/Product/0",
    "discountType": "percentage",
    "discountValue": 0,
    "maxReward": 0,
    "complementProducts": [{"productId": "gid://shopify/Product/5", "discountPct": 10}],
}


def _stdin(monkeypatch, text):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))


def test_cli_writes_result(monkeypatch, capsys):
    document = {
        "cart": {
            "lines": [
                {
                    "quantity": 4,
                    "merchandise": {
                        "__typename": "ProductVariant",
                        "id": "gid://shopify/ProductVariant/51",
                        "product": {"id": "gid://shopify/Product/5"},
                    },
                }
            ]
        },
        "discountNode": {"metafield": {"value": json.dumps(CONFIG)}},
    }
    _stdin(monkeypatch, json.dumps(document))

    assert main() == 0
    result = json.loads(capsys.readouterr().out)
    assert result["discountApplicationStrategy"] == "ALL"
    assert result["discounts"][0]["targets"] == [
        {"productVariant": {"id": "gid://shopify/ProductVariant/51", "quantity": 1}}
    ]
    assert result["discounts"][0]["message"] == "Bundle & Save 10% off"


def test_cli_rejects_invalid_input(monkeypatch, capsys):
    _stdin(monkeypatch, "{}")
    assert main() == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid function input" in captured.err
