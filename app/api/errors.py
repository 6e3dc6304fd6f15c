from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.deals.errors import BatchImportRejected, DealStoreError, SingleImportRejected
from app.deals.models import DealResponse, RejectedDeal

logger = logging.getLogger(__name__)

SINGLE_REJECTED_MSG = "Fx deal failed to be validated"
BATCH_ALL_REJECTED_MSG = "All fx deals in the batch failed to be validated"
BATCH_SOME_REJECTED_MSG = "Some fx deals in the batch failed to be validated"
STORE_FAILURE_MSG = "Failed to persist deal"
MALFORMED_BODY_MSG = "Malformed request body"


class ErrorResponse(BaseModel):
    error: str
    details: Optional[list[dict]] = None


class SingleRejectionResponse(BaseModel):
    error: str
    rejected_deal: RejectedDeal = Field(serialization_alias="rejectedDeal")


class BatchRejectionResponse(BaseModel):
    error: str
    rejected_deals: list[RejectedDeal] = Field(serialization_alias="rejectedDeals")
    saved_deals: Optional[list[DealResponse]] = Field(
        default=None, serialization_alias="savedDeals"
    )


def _json(status_code: int, body: BaseModel, **dump_kwargs) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, **dump_kwargs),
    )


async def single_import_rejected_handler(
    request: Request, exc: SingleImportRejected
) -> JSONResponse:
    logger.warning("%s: %s", SINGLE_REJECTED_MSG, exc)
    return _json(
        400, SingleRejectionResponse(error=SINGLE_REJECTED_MSG, rejected_deal=exc.rejected)
    )


async def batch_import_rejected_handler(
    request: Request, exc: BatchImportRejected
) -> JSONResponse:
    if not exc.accepted:
        logger.warning("%s: %s", BATCH_ALL_REJECTED_MSG, exc)
        body = BatchRejectionResponse(
            error=BATCH_ALL_REJECTED_MSG, rejected_deals=exc.rejected
        )
        # savedDeals is only present when something was saved
        return _json(400, body, exclude={"saved_deals"})

    logger.warning("%s: %s", BATCH_SOME_REJECTED_MSG, exc)
    body = BatchRejectionResponse(
        error=BATCH_SOME_REJECTED_MSG,
        rejected_deals=exc.rejected,
        saved_deals=[DealResponse.from_record(r) for r in exc.accepted],
    )
    return _json(400, body)


async def store_error_handler(request: Request, exc: DealStoreError) -> JSONResponse:
    logger.error("Store failure for deal %r: %s", exc.deal_id, exc.reason, exc_info=exc)
    return _json(500, ErrorResponse(error=STORE_FAILURE_MSG), exclude_none=True)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected error: %s", exc, exc_info=exc)
    return _json(
        500, ErrorResponse(error=str(exc) or type(exc).__name__), exclude_none=True
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error_list = []
    for err in exc.errors():
        loc = " -> ".join(str(l) for l in err["loc"] if l != "body")
        error_list.append({"field": loc, "message": err["msg"], "type": err["type"]})

    logger.warning("Malformed request body on %s: %s", request.url.path, error_list)
    return _json(400, ErrorResponse(error=MALFORMED_BODY_MSG, details=error_list))
