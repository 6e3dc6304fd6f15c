from __future__ import annotations

import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from app.deals.currencies import is_iso_currency
from app.deals.models import DEAL_TIMESTAMP_FORMAT, DealRequest

logger = logging.getLogger(__name__)

MSG_TIMESTAMP_FORMAT = "Invalid deal timestamp format, should be yyyy-MM-dd HH:mm:ss"
MSG_AMOUNT_FORMAT = "Deal amount must be a valid decimal number"
MSG_AMOUNT_POSITIVE = "Deal amount must be a positive number"
MSG_FROM_CURRENCY = "From currency must be a valid ISO currency"
MSG_TO_CURRENCY = "To currency must be a valid ISO currency"
MSG_SAME_CURRENCY = "From currency and To currency must be different"

# (field, message) in reporting order
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("deal_id", "Deal Id is required"),
    ("from_currency", "From currency is required"),
    ("to_currency", "To currency is required"),
    ("deal_timestamp", "Deal timestamp is required"),
    ("deal_amount", "Deal amount is required"),
)

_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
# Larger exponents expand to unbounded strings in plain notation
MAX_AMOUNT_EXPONENT = 100

ExistsFn = Callable[[str], bool]


def duplicate_message(deal_id: str) -> str:
    return f"Deal with id {deal_id} already exists"


def is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def parse_deal_timestamp(text: str) -> datetime:
    """Parse ``yyyy-MM-dd HH:mm:ss`` strictly. Raises ValueError otherwise."""
    if not _TIMESTAMP_RE.fullmatch(text):
        raise ValueError(f"timestamp {text!r} does not match yyyy-MM-dd HH:mm:ss")
    return datetime.strptime(text, DEAL_TIMESTAMP_FORMAT)


def format_deal_timestamp(value: datetime) -> str:
    return value.strftime(DEAL_TIMESTAMP_FORMAT)


def parse_deal_amount(text: str) -> Decimal:
    """Parse a plain or exponent decimal. Raises ValueError on anything else.

    Python's Decimal also accepts whitespace, underscores, NaN and Infinity;
    the regex keeps those out.
    """
    if not _DECIMAL_RE.fullmatch(text):
        raise ValueError(f"amount {text!r} is not a decimal number")
    try:
        amount = Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"amount {text!r} is not a decimal number") from exc
    if abs(amount.as_tuple().exponent) > MAX_AMOUNT_EXPONENT:
        raise ValueError(f"amount {text!r} exponent is out of range")
    return amount


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def _check_required(req: DealRequest) -> list[str]:
    msgs = []
    for field, message in REQUIRED_FIELDS:
        if is_blank(getattr(req, field)):
            logger.warning("Validation failed for deal %r: %s", req.deal_id, message)
            msgs.append(message)
    return msgs


def _check_timestamp(req: DealRequest) -> Optional[str]:
    if is_blank(req.deal_timestamp):
        return None
    try:
        parse_deal_timestamp(req.deal_timestamp)
    except ValueError:
        logger.warning("Invalid deal timestamp: %r", req.deal_timestamp)
        return MSG_TIMESTAMP_FORMAT
    return None


def _check_amount(req: DealRequest) -> Optional[str]:
    if is_blank(req.deal_amount):
        return None
    try:
        amount = parse_deal_amount(req.deal_amount)
    except ValueError:
        logger.warning("Invalid decimal format for deal amount: %r", req.deal_amount)
        return MSG_AMOUNT_FORMAT
    if amount <= 0:
        logger.warning("Deal amount %s is not positive", req.deal_amount)
        return MSG_AMOUNT_POSITIVE
    return None


def _check_from_currency(req: DealRequest) -> Optional[str]:
    if is_blank(req.from_currency) or is_iso_currency(req.from_currency):
        return None
    logger.warning("Invalid ISO currency code for from currency: %r", req.from_currency)
    return MSG_FROM_CURRENCY


def _check_to_currency(req: DealRequest) -> Optional[str]:
    if is_blank(req.to_currency) or is_iso_currency(req.to_currency):
        return None
    logger.warning("Invalid ISO currency code for to currency: %r", req.to_currency)
    return MSG_TO_CURRENCY


def _check_currencies_differ(req: DealRequest) -> Optional[str]:
    if is_blank(req.from_currency) or is_blank(req.to_currency):
        return None
    if req.from_currency == req.to_currency:
        logger.warning("From and to currency are both %r", req.from_currency)
        return MSG_SAME_CURRENCY
    return None


_FIELD_RULES = [
    _check_timestamp,
    _check_amount,
    _check_from_currency,
    _check_to_currency,
    _check_currencies_differ,
]


def check_unique(req: DealRequest, exists: ExistsFn) -> Optional[str]:
    """The only rule that reads the store. Its answer can change between calls."""
    if is_blank(req.deal_id):
        return None
    if exists(req.deal_id):
        logger.warning("Duplicate deal id detected: %s", req.deal_id)
        return duplicate_message(req.deal_id)
    return None


def static_violations(req: DealRequest) -> list[str]:
    """Every store-independent violation, in rule order."""
    msgs = _check_required(req)
    for rule in _FIELD_RULES:
        msg = rule(req)
        if msg is not None:
            msgs.append(msg)
    return msgs


def validate(req: DealRequest, exists: ExistsFn) -> list[str]:
    """Return all violations for ``req``; an empty list means it can be imported."""
    msgs = static_violations(req)
    duplicate = check_unique(req, exists)
    if duplicate is not None:
        msgs.append(duplicate)
    return msgs
