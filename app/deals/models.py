from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEAL_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class DealRequest(BaseModel):
    """Raw deal submission. Every field is kept as received; rules run later."""

    deal_id: Optional[str] = Field(default=None, alias="dealId")
    from_currency: Optional[str] = Field(default=None, alias="fromCurrency")
    to_currency: Optional[str] = Field(default=None, alias="toCurrency")
    deal_timestamp: Optional[str] = Field(default=None, alias="dealTimestamp")
    deal_amount: Optional[str] = Field(default=None, alias="dealAmount")

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class DealRecord(BaseModel):
    """Immutable deal as persisted after a successful import."""

    deal_id: str
    from_currency: str = Field(min_length=3, max_length=3)
    to_currency: str = Field(min_length=3, max_length=3)
    deal_timestamp: datetime
    deal_amount: Decimal

    model_config = ConfigDict(frozen=True)


class DealResponse(BaseModel):
    """Wire shape of a stored deal."""

    deal_id: str = Field(serialization_alias="dealId")
    from_currency: str = Field(serialization_alias="fromCurrency")
    to_currency: str = Field(serialization_alias="toCurrency")
    deal_timestamp: str = Field(serialization_alias="dealTimestamp")
    deal_amount: str = Field(serialization_alias="dealAmount")

    @classmethod
    def from_record(cls, record: DealRecord) -> DealResponse:
        return cls(
            deal_id=record.deal_id,
            from_currency=record.from_currency,
            to_currency=record.to_currency,
            deal_timestamp=record.deal_timestamp.strftime(DEAL_TIMESTAMP_FORMAT),
            # plain notation keeps the exact scale, e.g. "1000.50"
            deal_amount=format(record.deal_amount, "f"),
        )


class RejectedDeal(BaseModel):
    """A deal that failed import, with every reason it failed."""

    deal_id: Optional[str] = Field(default=None, serialization_alias="dealId")
    validation_msgs: list[str] = Field(
        default_factory=list, serialization_alias="validationMsgs"
    )


class BatchResult(BaseModel):
    """Partition of one batch: every input lands in exactly one list."""

    accepted: list[DealRecord] = Field(default_factory=list)
    rejected: list[RejectedDeal] = Field(default_factory=list)


class Accepted(BaseModel):
    record: DealRecord


class Rejected(BaseModel):
    rejected: RejectedDeal


ImportOutcome = Union[Accepted, Rejected]
