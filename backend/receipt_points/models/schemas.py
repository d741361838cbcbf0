"""Pydantic schemas for the receipt domain and the API responses.

``Receipt`` and ``Item`` are the strict, immutable representation
produced by :func:`receipt_points.services.normalizer.normalize`. They
are never built directly from request bodies: the normalizer owns the
loose-to-strict conversion and its error messages, so these models only
pin down types and immutability.

Amounts are kept as :class:`~decimal.Decimal` so that the "multiple of
0.25" and "price * 0.2" computations in the points calculator are
exact.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Domain schemas


class Item(BaseModel):
    """Line entry on a receipt."""

    model_config = ConfigDict(frozen=True)

    short_description: str
    price: Decimal


class Receipt(BaseModel):
    """A validated purchase transaction."""

    model_config = ConfigDict(frozen=True)

    retailer: str
    purchased_at: dt.datetime = Field(description="Purchase instant, always UTC")
    total: Decimal
    items: tuple[Item, ...]

    def to_raw(self) -> Dict[str, Any]:
        """Re-serialize into the loosely-typed shape accepted by the normalizer."""
        purchased = self.purchased_at.astimezone(dt.timezone.utc)
        clock = purchased.timetz().replace(tzinfo=None)
        if clock.second or clock.microsecond:
            purchase_time = clock.isoformat()
        else:
            purchase_time = clock.isoformat(timespec="minutes")
        return {
            "retailer": self.retailer,
            "purchaseDate": purchased.date().isoformat(),
            "purchaseTime": purchase_time,
            "total": str(self.total),
            "items": [
                {"shortDescription": item.short_description, "price": str(item.price)}
                for item in self.items
            ],
        }


# ---------------------------------------------------------------------------
# API schemas


class ReceiptCreated(BaseModel):
    """Response body for a stored receipt."""

    id: str


class PointsResponse(BaseModel):
    points: int = Field(ge=0)


class PointsBreakdown(BaseModel):
    """Total points plus the contribution of every rule."""

    points: int = Field(ge=0)
    rules: Dict[str, int]
