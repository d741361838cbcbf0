from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from receipt_points.core.exceptions import InvalidReceiptFieldError, ReceiptError
from receipt_points.models.schemas import Item, Receipt
from receipt_points.services.normalizer import normalize


def test_normalize_target_receipt(target_raw):
    receipt = normalize(target_raw)

    assert receipt.retailer == "Target"
    assert receipt.purchased_at == dt.datetime(2022, 1, 1, 13, 1, tzinfo=dt.timezone.utc)
    assert receipt.total == Decimal("35.35")
    assert [item.short_description for item in receipt.items] == [
        "Mountain Dew 12PK",
        "Emils Cheese Pizza",
        "Knorr Creamy Chicken",
        "Doritos Nacho Cheese",
        "Klarbrunn 12-PK 12 FL OZ",
    ]
    assert receipt.items[-1].price == Decimal("12.00")


def test_normalize_trims_strings_and_amounts(make_raw):
    receipt = normalize(
        make_raw(
            retailer="  Walgreens ",
            total=" 2.65 ",
            items=[{"shortDescription": " Pepsi - 12-oz ", "price": " 1.25\n"}],
        )
    )
    assert receipt.retailer == "Walgreens"
    assert receipt.total == Decimal("2.65")
    assert receipt.items == (Item(short_description="Pepsi - 12-oz", price=Decimal("1.25")),)


def test_receipt_is_immutable(target_raw):
    receipt = normalize(target_raw)
    with pytest.raises(Exception):
        receipt.retailer = "Walmart"  # type: ignore[misc]
    assert isinstance(receipt.items, tuple)


def test_string_zero_total_is_accepted(make_raw):
    # "0.00" is a non-empty string and therefore present
    assert normalize(make_raw(total="0.00")).total == Decimal("0")


def test_normalize_round_trip(target_raw, corner_market_raw, make_raw):
    for raw in (target_raw, corner_market_raw, make_raw(purchaseTime="15:59:30")):
        receipt = normalize(raw)
        assert normalize(receipt.to_raw()) == receipt


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"retailer": None}, "retailer"),
        ({"retailer": ""}, "retailer"),
        ({"retailer": "   "}, "retailer"),
        ({"retailer": 42}, "retailer"),
        ({"purchaseDate": None}, "purchaseDate"),
        ({"purchaseTime": ""}, "purchaseTime"),
        ({"purchaseDate": 20220101}, "purchaseDate"),
        ({"purchaseTime": ["13:01"]}, "purchaseTime"),
        ({"purchaseDate": "2022-13-01"}, "purchaseDate"),
        ({"purchaseTime": "25:61"}, "purchaseTime"),
        ({"total": None}, "total"),
        ({"total": 0}, "total"),
        ({"total": 35.35}, "total"),
        ({"total": "thirty five"}, "total"),
        ({"total": "NaN"}, "total"),
        ({"items": None}, "items"),
        ({"items": []}, "items"),
        ({"items": "Gatorade"}, "items"),
        ({"items": [None]}, "items[0]"),
        ({"items": [["Gatorade", "2.25"]]}, "items[0]"),
        ({"items": [{"price": "2.25"}]}, "items[0].shortDescription"),
        ({"items": [{"shortDescription": "   ", "price": "2.25"}]}, "items[0].shortDescription"),
        ({"items": [{"shortDescription": 7, "price": "2.25"}]}, "items[0].shortDescription"),
        (
            {"items": [{"shortDescription": "Gatorade", "price": "2.25"}, {"shortDescription": "Gum"}]},
            "items[1].price",
        ),
        ({"items": [{"shortDescription": "Gatorade", "price": 2.25}]}, "items[0].price"),
        ({"items": [{"shortDescription": "Gatorade", "price": "two"}]}, "items[0].price"),
    ],
)
def test_normalize_rejects_invalid_fields(make_raw, overrides, field):
    with pytest.raises(InvalidReceiptFieldError) as exc_info:
        normalize(make_raw(**overrides))
    assert exc_info.value.field == field
    assert str(exc_info.value).startswith("Invalid field type for receipt.")


def test_missing_and_wrong_type_messages_differ(make_raw):
    with pytest.raises(InvalidReceiptFieldError, match="missing or empty"):
        normalize(make_raw(total=0))
    with pytest.raises(InvalidReceiptFieldError, match='to be type of "string"'):
        normalize(make_raw(total=12))
    with pytest.raises(InvalidReceiptFieldError, match="NaN"):
        normalize(make_raw(total="abc"))


def test_unparsable_date_message_names_both_inputs(make_raw):
    with pytest.raises(InvalidReceiptFieldError) as exc_info:
        normalize(make_raw(purchaseDate="2022-02-30", purchaseTime="13:01"))
    assert "2022-02-30" in exc_info.value.detail
    assert "13:01" in exc_info.value.detail


def test_first_failure_wins(make_raw):
    raw = make_raw(retailer="", total="abc", items=[])
    with pytest.raises(InvalidReceiptFieldError) as exc_info:
        normalize(raw)
    assert exc_info.value.field == "retailer"


def test_non_mapping_input_is_rejected():
    with pytest.raises(ReceiptError) as exc_info:
        normalize([{"retailer": "Target"}])
    assert exc_info.value.field == "receipt"


def test_normalize_does_not_mutate_input(target_raw):
    before = repr(target_raw)
    assert isinstance(normalize(target_raw), Receipt)
    assert repr(target_raw) == before


def test_unpadded_date_and_bare_hour_are_rejected(make_raw):
    with pytest.raises(InvalidReceiptFieldError) as exc_info:
        normalize(make_raw(purchaseDate="2022-1-1", purchaseTime="13"))
    assert exc_info.value.field == "purchaseDate"

    with pytest.raises(InvalidReceiptFieldError) as exc_info:
        normalize(make_raw(purchaseTime="13"))
    assert exc_info.value.field == "purchaseTime"


def test_empty_item_object_names_short_description(make_raw):
    with pytest.raises(InvalidReceiptFieldError) as exc_info:
        normalize(make_raw(items=[{}]))
    assert exc_info.value.field == "items[0].shortDescription"
    assert "missing or empty" in exc_info.value.detail
