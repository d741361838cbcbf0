"""Points calculator for validated receipts.

Scoring rules, each evaluated independently and summed:

* ``retailer``: one point for every ASCII letter or digit in the
  retailer name.
* ``total``: 75 points if the total is a round dollar amount (which
  is also a multiple of 0.25), otherwise 25 points if it is a multiple
  of 0.25.
* ``item_count``: 5 points for every two items on the receipt.
* ``item_descriptions``: for each item whose trimmed description
  length is a non-zero multiple of 3, ``ceil(price * 0.2)`` points.
* ``purchase_day``: 6 points if the day of the purchase date is odd.
* ``purchase_time``: 10 points if the purchase happened from 14:00
  (inclusive) up to 16:00 (exclusive).

Every rule is a pure function of a :class:`Receipt`, so the calculator
is safe to call concurrently and always returns the same result for an
equal receipt.
"""

from __future__ import annotations

import datetime as dt
import math
from decimal import Decimal
from typing import Callable, Dict

from receipt_points.models.schemas import Receipt

ROUND_TOTAL_POINTS = 75
QUARTER_TOTAL_POINTS = 25
QUARTER_DENOMINATORS = (2, 4)
POINTS_PER_ITEM_PAIR = 5
DESCRIPTION_LENGTH_FACTOR = 3
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")
ODD_DAY_POINTS = 6
TIME_WINDOW_POINTS = 10
TIME_WINDOW_START_HOUR = 14
TIME_WINDOW_END_HOUR = 16


def _utc(receipt: Receipt) -> dt.datetime:
    return receipt.purchased_at.astimezone(dt.timezone.utc)


def points_retailer(receipt: Receipt) -> int:
    """One point per alphanumeric character; whitespace and punctuation score nothing."""
    return sum(1 for char in receipt.retailer if char.isascii() and char.isalnum())


def points_total(receipt: Receipt) -> int:
    """Score the total by the denominator of its exact fraction.

    A denominator of 1 is a round dollar amount; 2 or 4 is a multiple of
    0.25. Works for totals of any magnitude.
    """
    _, denominator = receipt.total.as_integer_ratio()
    if denominator == 1:
        return ROUND_TOTAL_POINTS
    if denominator in QUARTER_DENOMINATORS:
        return QUARTER_TOTAL_POINTS
    return 0


def points_item_count(receipt: Receipt) -> int:
    return (len(receipt.items) // 2) * POINTS_PER_ITEM_PAIR


def points_item_descriptions(receipt: Receipt) -> int:
    """Sum the per-item description bonus.

    Each qualifying item is rounded up on its own before summing.
    Negative prices never subtract points.
    """
    points = 0
    for item in receipt.items:
        length = len(item.short_description.strip())
        if length and length % DESCRIPTION_LENGTH_FACTOR == 0:
            points += max(0, math.ceil(item.price * DESCRIPTION_PRICE_MULTIPLIER))
    return points


def points_purchase_day(receipt: Receipt) -> int:
    if _utc(receipt).day % 2 != 0:
        return ODD_DAY_POINTS
    return 0


def points_purchase_time(receipt: Receipt) -> int:
    hour = _utc(receipt).hour
    if TIME_WINDOW_START_HOUR <= hour < TIME_WINDOW_END_HOUR:
        return TIME_WINDOW_POINTS
    return 0


RULES: Dict[str, Callable[[Receipt], int]] = {
    "retailer": points_retailer,
    "total": points_total,
    "item_count": points_item_count,
    "item_descriptions": points_item_descriptions,
    "purchase_day": points_purchase_day,
    "purchase_time": points_purchase_time,
}


def calculate_breakdown(receipt: Receipt) -> Dict[str, int]:
    """Evaluate every rule against a receipt.

    :param receipt: A receipt produced by the normalizer.
    :returns: A dictionary mapping each rule name to the points it
        awarded, in rule order. No rule short-circuits another.
    """
    return {name: rule(receipt) for name, rule in RULES.items()}


def calculate_points(receipt: Receipt) -> int:
    """Return the total points awarded for ``receipt``."""
    return sum(calculate_breakdown(receipt).values())


__all__ = [
    "RULES",
    "calculate_breakdown",
    "calculate_points",
    "points_retailer",
    "points_total",
    "points_item_count",
    "points_item_descriptions",
    "points_purchase_day",
    "points_purchase_time",
]
