from __future__ import annotations

import logging
from typing import Protocol

from app.deals.errors import BatchImportRejected, DealStoreError, SingleImportRejected
from app.deals.models import (
    Accepted,
    BatchResult,
    DealRecord,
    DealRequest,
    ImportOutcome,
    Rejected,
    RejectedDeal,
)
from app.deals.validation import parse_deal_amount, parse_deal_timestamp, validate

logger = logging.getLogger(__name__)


class DealStore(Protocol):
    """What the importer needs from persistence."""

    def exists(self, deal_id: str) -> bool: ...

    def save(self, record: DealRecord) -> DealRecord: ...

    def find_all(self) -> list[DealRecord]: ...

    def count(self) -> int: ...


def to_record(req: DealRequest) -> DealRecord:
    """Build the persisted form of a request that already passed validation."""
    return DealRecord(
        deal_id=req.deal_id,
        from_currency=req.from_currency,
        to_currency=req.to_currency,
        deal_timestamp=parse_deal_timestamp(req.deal_timestamp),
        deal_amount=parse_deal_amount(req.deal_amount),
    )


class DealImporter:
    """Validates deals and writes the valid ones, one at a time."""

    def __init__(self, store: DealStore) -> None:
        self.store = store

    def process(self, req: DealRequest) -> ImportOutcome:
        """Run one request through validate -> write.

        Store failures propagate as DealStoreError; the caller decides whether
        they end the request or become a rejection.
        """
        msgs = validate(req, self.store.exists)
        if msgs:
            return Rejected(rejected=RejectedDeal(deal_id=req.deal_id, validation_msgs=msgs))
        saved = self.store.save(to_record(req))
        return Accepted(record=saved)

    def import_one(self, req: DealRequest) -> DealRecord:
        logger.info("Starting import for deal ID: %s", req.deal_id)
        logger.debug(
            "Deal details - From: %s, To: %s, Amount: %s, Timestamp: %s",
            req.from_currency,
            req.to_currency,
            req.deal_amount,
            req.deal_timestamp,
        )
        outcome = self.process(req)
        if isinstance(outcome, Rejected):
            logger.warning(
                "Validation failed for deal ID: %s - Errors: %s",
                req.deal_id,
                outcome.rejected.validation_msgs,
            )
            raise SingleImportRejected(outcome.rejected)

        logger.info("Successfully saved deal with ID: %s", outcome.record.deal_id)
        return outcome.record

    def partition(self, reqs: list[DealRequest]) -> BatchResult:
        """Import each request in order, collecting accepted and rejected items.

        Strictly sequential: a later item's uniqueness check sees the writes of
        earlier items, so a repeated id is accepted once and rejected after.
        """
        result = BatchResult()
        for req in reqs:
            logger.debug("Processing deal ID: %s in batch", req.deal_id)
            try:
                outcome = self.process(req)
            except DealStoreError as exc:
                logger.error(
                    "Failed to save deal ID: %s in batch - Error: %s",
                    req.deal_id,
                    exc.reason,
                    exc_info=True,
                )
                result.rejected.append(
                    RejectedDeal(
                        deal_id=req.deal_id,
                        validation_msgs=[f"Database error: {exc.reason}"],
                    )
                )
                continue

            if isinstance(outcome, Accepted):
                logger.info("Successfully saved deal ID: %s in batch", req.deal_id)
                result.accepted.append(outcome.record)
            else:
                logger.warning(
                    "Validation failed for deal ID: %s in batch - Errors: %s",
                    req.deal_id,
                    outcome.rejected.validation_msgs,
                )
                result.rejected.append(outcome.rejected)
        return result

    def import_many(self, reqs: list[DealRequest]) -> list[DealRecord]:
        logger.info("Starting batch import for %d deals", len(reqs))
        result = self.partition(reqs)
        if result.rejected:
            logger.warning(
                "Batch import completed with %d rejected deals and %d successful deals",
                len(result.rejected),
                len(result.accepted),
            )
            raise BatchImportRejected(result.rejected, result.accepted)

        logger.info("Batch import completed successfully with %d deals", len(result.accepted))
        return result.accepted

    def list_all(self) -> list[DealRecord]:
        logger.info("Fetching all deals from database")
        deals = self.store.find_all()
        logger.info("Retrieved %d deals from database", len(deals))
        return deals

    def count(self) -> int:
        return self.store.count()
