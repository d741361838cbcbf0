"""Receipt normalizer.

Converts a loosely-typed mapping (typically a decoded JSON body) into
an immutable :class:`~receipt_points.models.schemas.Receipt`. Fields
are checked in a fixed order and the first failure raises
:class:`~receipt_points.core.exceptions.InvalidReceiptFieldError`;
errors are never aggregated and no partially built receipt escapes.

Order of checks:

1. ``retailer``
2. ``purchaseDate`` and ``purchaseTime`` (combined into one UTC instant)
3. ``total``
4. ``items`` and, in input order, each item's ``shortDescription`` and ``price``

Presence is a truthiness check, as it always has been for this
service: ``None``, ``""``, ``0``, ``False`` and empty containers all
count as "missing or empty". An empty item object is the exception: it
fails on its first missing field instead. A native ``0`` total is therefore reported
as missing rather than as the wrong type, while the string ``"0.00"``
is accepted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List

from receipt_points.core.exceptions import InvalidReceiptFieldError
from receipt_points.models.schemas import Item, Receipt
from receipt_points.utils.helpers import parse_amount, parse_date, parse_purchase_instant

logger = logging.getLogger(__name__)


def _require_string(value: Any, field: str, label: str) -> str:
    """Apply the presence check followed by the string type check."""
    if not value:
        raise InvalidReceiptFieldError(field, f"{label} missing or empty.")
    if not isinstance(value, str):
        raise InvalidReceiptFieldError(field, f'Expected {label} to be type of "string".')
    return value


def _build_retailer(raw: Mapping[str, Any]) -> str:
    retailer = _require_string(raw.get("retailer"), "retailer", '"retailer" field').strip()
    if not retailer:
        raise InvalidReceiptFieldError("retailer", '"retailer" field missing or empty.')
    return retailer


def _build_purchase_instant(raw: Mapping[str, Any]):
    purchase_date = raw.get("purchaseDate")
    purchase_time = raw.get("purchaseTime")
    if not purchase_date:
        raise InvalidReceiptFieldError("purchaseDate", '"purchaseDate" field missing or empty.')
    if not purchase_time:
        raise InvalidReceiptFieldError("purchaseTime", '"purchaseTime" field missing or empty.')
    if not isinstance(purchase_date, str):
        raise InvalidReceiptFieldError(
            "purchaseDate", 'Expected "purchaseDate" field to be type of "string".'
        )
    if not isinstance(purchase_time, str):
        raise InvalidReceiptFieldError(
            "purchaseTime", 'Expected "purchaseTime" field to be type of "string".'
        )

    instant = parse_purchase_instant(purchase_date, purchase_time)
    if instant is None:
        # Name whichever half is broken; the date wins when both are
        field = "purchaseDate" if parse_date(purchase_date) is None else "purchaseTime"
        raise InvalidReceiptFieldError(
            field,
            f"Could not parse {purchase_date} and {purchase_time} into a valid date.",
        )
    return instant


def _build_total(raw: Mapping[str, Any]):
    total = _require_string(raw.get("total"), "total", '"total" field')
    amount = parse_amount(total)
    if amount is None:
        raise InvalidReceiptFieldError("total", 'Tried to parse "total" field, but it is NaN.')
    return amount


def _build_item(value: Any, index: int) -> Item:
    field = f"items[{index}]"
    # An empty object still goes through the per-field checks below
    if not value and not isinstance(value, Mapping):
        raise InvalidReceiptFieldError(field, "Receipt item is missing or empty.")
    if not isinstance(value, Mapping):
        raise InvalidReceiptFieldError(field, "Expected receipt item to be a json object.")

    description_field = f"{field}.shortDescription"
    description = _require_string(
        value.get("shortDescription"),
        description_field,
        'receipt item field "shortDescription"',
    ).strip()
    if not description:
        raise InvalidReceiptFieldError(
            description_field, 'receipt item field "shortDescription" missing or empty.'
        )

    price_field = f"{field}.price"
    price = parse_amount(
        _require_string(value.get("price"), price_field, 'receipt item field "price"')
    )
    if price is None:
        raise InvalidReceiptFieldError(price_field, 'Tried to parse "price" field, but it is NaN.')

    return Item(short_description=description, price=price)


def _build_items(raw: Mapping[str, Any]) -> List[Item]:
    items = raw.get("items")
    if not items:
        raise InvalidReceiptFieldError("items", '"items" field missing or empty.')
    if not isinstance(items, (list, tuple)):
        raise InvalidReceiptFieldError("items", 'Expected "items" field to be an array.')
    return [_build_item(item, index) for index, item in enumerate(items)]


def normalize(raw: Any) -> Receipt:
    """Validate ``raw`` and return an immutable :class:`Receipt`.

    Raises:
        InvalidReceiptFieldError: on the first field that fails
            validation. ``exc.field`` names the offending key.
    """
    if not isinstance(raw, Mapping):
        raise InvalidReceiptFieldError("receipt", "Expected receipt to be a json object.")
    try:
        return Receipt(
            retailer=_build_retailer(raw),
            purchased_at=_build_purchase_instant(raw),
            total=_build_total(raw),
            items=tuple(_build_items(raw)),
        )
    except InvalidReceiptFieldError as exc:
        logger.debug("Rejected receipt field %s: %s", exc.field, exc.detail)
        raise


__all__ = ["normalize"]
