"""API routes for receipt processing and point lookup."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from receipt_points.api.dependencies import get_storage
from receipt_points.core.observability import sentry_breadcrumb
from receipt_points.models.schemas import PointsBreakdown, PointsResponse, Receipt, ReceiptCreated
from receipt_points.services.normalizer import normalize
from receipt_points.services.points_calculator import calculate_breakdown, calculate_points
from receipt_points.services.storage_service import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipts", tags=["receipts"])

_ERROR_RESPONSES = {
    400: {"description": "The receipt is invalid."},
    404: {"description": "No receipt found for that ID."},
}


async def _load_receipt(storage: Storage, receipt_id: str) -> Receipt:
    record = await storage.read(receipt_id)  # raises RecordNotFoundError
    return record.value


@router.post("/process", response_model=ReceiptCreated, responses={400: _ERROR_RESPONSES[400]})
async def process_receipt(
    payload: Any = Body(...),
    storage: Storage = Depends(get_storage),
) -> ReceiptCreated:
    """Validate a submitted receipt and store it under a new id."""
    receipt = normalize(payload)
    record = await storage.write(receipt)
    logger.info("Stored receipt %s from %r with %d items", record.id, receipt.retailer, len(receipt.items))
    sentry_breadcrumb("receipts", "receipt stored", data={"id": record.id})
    return ReceiptCreated(id=record.id)


@router.get("/{receipt_id}/points", response_model=PointsResponse, responses={404: _ERROR_RESPONSES[404]})
async def get_points(
    receipt_id: str,
    storage: Storage = Depends(get_storage),
) -> PointsResponse:
    """Return the points awarded for a stored receipt."""
    receipt = await _load_receipt(storage, receipt_id)
    points = calculate_points(receipt)
    logger.info("Receipt %s scored %d points", receipt_id, points)
    return PointsResponse(points=points)


@router.get(
    "/{receipt_id}/points/breakdown",
    response_model=PointsBreakdown,
    responses={404: _ERROR_RESPONSES[404]},
)
async def get_points_breakdown(
    receipt_id: str,
    storage: Storage = Depends(get_storage),
) -> PointsBreakdown:
    """Return the points for a stored receipt along with each rule's share."""
    receipt = await _load_receipt(storage, receipt_id)
    rules = calculate_breakdown(receipt)
    return PointsBreakdown(points=sum(rules.values()), rules=rules)
