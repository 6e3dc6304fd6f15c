from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.api.dependencies import get_importer
from app.deals.importer import DealImporter
from app.deals.models import DealRequest, DealResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/deals", tags=["deals"])


@router.post("/import/single", response_model=DealResponse, status_code=201)
def import_single_deal(
    deal: DealRequest, importer: DealImporter = Depends(get_importer)
) -> DealResponse:
    """Validate and store one deal. All rule violations come back together."""
    logger.info("Received request to import single deal with ID: %s", deal.deal_id)
    record = importer.import_one(deal)
    return DealResponse.from_record(record)


@router.post("/import/batch", response_model=list[DealResponse], status_code=201)
def import_batch_deals(
    deals: list[DealRequest], importer: DealImporter = Depends(get_importer)
) -> list[DealResponse]:
    """Import deals in order. Valid ones are stored even if others are rejected."""
    logger.info("Received request to import batch of %d deals", len(deals))
    records = importer.import_many(deals)
    logger.info("Successfully imported %d deals in batch", len(records))
    return [DealResponse.from_record(r) for r in records]


@router.get("", response_model=list[DealResponse], status_code=200)
def list_deals(importer: DealImporter = Depends(get_importer)) -> list[DealResponse]:
    logger.info("Received request to retrieve all deals")
    return [DealResponse.from_record(r) for r in importer.list_all()]
