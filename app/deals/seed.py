from __future__ import annotations

import random
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.deals.importer import DealImporter
from app.deals.models import DealRequest
from app.deals.validation import format_deal_timestamp

SEED_CURRENCIES = ["USD", "EUR", "GBP", "JPY", "CHF", "AUD", "CAD", "NZD", "SEK", "NOK"]


def generate_deal_request(rng: Optional[random.Random] = None) -> DealRequest:
    """Generate a random but valid deal for demo and load purposes."""
    rng = rng or random.Random()
    from_ccy, to_ccy = rng.sample(SEED_CURRENCIES, 2)
    amount = Decimal(str(rng.uniform(10, 100_000))).quantize(Decimal("0.01"))

    return DealRequest(
        deal_id=f"FX-{uuid.UUID(int=rng.getrandbits(128)).hex}",
        from_currency=from_ccy,
        to_currency=to_ccy,
        deal_timestamp=format_deal_timestamp(datetime.now()),
        deal_amount=str(amount),
    )


def seed_deals(
    importer: DealImporter,
    count: int = 50,
    rng: Optional[random.Random] = None,
) -> list[str]:
    """Import ``count`` random deals one by one. Returns the created deal IDs."""
    rng = rng or random.Random()
    deal_ids: list[str] = []
    for _ in range(count):
        record = importer.import_one(generate_deal_request(rng))
        deal_ids.append(record.deal_id)
    return deal_ids
