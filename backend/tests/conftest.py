from __future__ import annotations

import copy

import pytest


TARGET_RECEIPT = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}

CORNER_MARKET_RECEIPT = {
    "retailer": "M&M Corner Market",
    "purchaseDate": "2022-03-20",
    "purchaseTime": "14:33",
    "items": [
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
    ],
    "total": "9.00",
}


@pytest.fixture
def target_raw():
    return copy.deepcopy(TARGET_RECEIPT)


@pytest.fixture
def corner_market_raw():
    return copy.deepcopy(CORNER_MARKET_RECEIPT)


@pytest.fixture
def make_raw():
    """Build a raw receipt from the Target example with fields overridden.

    Passing ``None`` as an override removes the key entirely.
    """

    def _make(**overrides):
        raw = copy.deepcopy(TARGET_RECEIPT)
        for key, value in overrides.items():
            if value is None:
                raw.pop(key, None)
            else:
                raw[key] = value
        return raw

    return _make
