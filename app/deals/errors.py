from __future__ import annotations

from typing import Optional

from app.deals.models import DealRecord, RejectedDeal


class DealImportError(Exception):
    """Base class for deal import failures."""


class SingleImportRejected(DealImportError):
    """A single deal failed one or more validation rules. Nothing was written."""

    def __init__(self, rejected: RejectedDeal) -> None:
        self.rejected = rejected
        super().__init__(
            f"Deal {rejected.deal_id!r} rejected: {'; '.join(rejected.validation_msgs)}"
        )


class BatchImportRejected(DealImportError):
    """At least one batch item was rejected.

    ``accepted`` holds the items that were written before the batch finished;
    those writes stand.
    """

    def __init__(
        self, rejected: list[RejectedDeal], accepted: list[DealRecord]
    ) -> None:
        self.rejected = rejected
        self.accepted = accepted
        super().__init__(
            f"{len(rejected)} deal(s) rejected, {len(accepted)} saved"
        )


class DealStoreError(DealImportError):
    """The store failed a write or read that passed validation."""

    def __init__(self, deal_id: Optional[str], reason: str) -> None:
        self.deal_id = deal_id
        self.reason = reason
        super().__init__(reason)
