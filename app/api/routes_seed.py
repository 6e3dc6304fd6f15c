from __future__ import annotations

from pydantic import BaseModel, Field

from fastapi import APIRouter, Depends

from app.api.dependencies import get_importer
from app.deals.importer import DealImporter
from app.deals.seed import seed_deals

router = APIRouter(prefix="/api/v1/deals", tags=["seed"])


class SeedRequest(BaseModel):
    count: int = Field(default=50, ge=1, le=500)


class SeedResponse(BaseModel):
    generated: int
    deal_ids: list[str] = Field(serialization_alias="dealIds")


@router.post("/seed", response_model=SeedResponse, status_code=201)
def seed_data(
    request: SeedRequest, importer: DealImporter = Depends(get_importer)
) -> SeedResponse:
    """Import random valid deals for demo purposes."""
    ids = seed_deals(importer, count=request.count)
    return SeedResponse(generated=len(ids), deal_ids=ids)
