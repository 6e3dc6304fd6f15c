"""Unit tests for the deal validation rules."""

from datetime import datetime
from decimal import Decimal

import pytest

from app.deals.currencies import ISO_4217_CODES, is_iso_currency
from app.deals.models import DealRequest
from app.deals.validation import (
    MAX_AMOUNT_EXPONENT,
    MSG_AMOUNT_FORMAT,
    MSG_AMOUNT_POSITIVE,
    MSG_FROM_CURRENCY,
    MSG_SAME_CURRENCY,
    MSG_TIMESTAMP_FORMAT,
    MSG_TO_CURRENCY,
    is_blank,
    parse_deal_amount,
    parse_deal_timestamp,
    static_violations,
    validate,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

VALID_DEAL = dict(
    deal_id="DEAL-001",
    from_currency="USD",
    to_currency="EUR",
    deal_timestamp="2024-11-16 10:30:00",
    deal_amount="1000.50",
)


def make_request(**overrides) -> DealRequest:
    return DealRequest(**{**VALID_DEAL, **overrides})


def no_deals(_deal_id: str) -> bool:
    return False


def violations(**overrides) -> list[str]:
    return validate(make_request(**overrides), no_deals)


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


class TestValidDeal:
    def test_valid_deal_has_no_violations(self):
        assert violations() == []

    def test_static_violations_need_no_store(self):
        assert static_violations(make_request()) == []


# ---------------------------------------------------------------------------
# Required fields
# ---------------------------------------------------------------------------


class TestRequiredFields:
    @pytest.mark.parametrize(
        "field,message",
        [
            ("deal_id", "Deal Id is required"),
            ("from_currency", "From currency is required"),
            ("to_currency", "To currency is required"),
            ("deal_timestamp", "Deal timestamp is required"),
            ("deal_amount", "Deal amount is required"),
        ],
    )
    @pytest.mark.parametrize("blank", [None, "", "   ", "\t\n"])
    def test_blank_field_reports_required(self, field, message, blank):
        assert violations(**{field: blank}) == [message]

    def test_all_missing_reports_every_field_in_order(self):
        assert validate(DealRequest(), no_deals) == [
            "Deal Id is required",
            "From currency is required",
            "To currency is required",
            "Deal timestamp is required",
            "Deal amount is required",
        ]

    def test_is_blank(self):
        assert is_blank(None)
        assert is_blank("")
        assert is_blank("  ")
        assert not is_blank(" x ")


# ---------------------------------------------------------------------------
# Timestamp format
# ---------------------------------------------------------------------------


class TestTimestampRule:
    @pytest.mark.parametrize(
        "ts",
        [
            "2024-11-16 10:30:00",
            "2024-02-29 00:00:00",
            "2023-12-31 23:59:59",
            "0001-01-01 00:00:00",
        ],
    )
    def test_valid_timestamps_pass(self, ts):
        assert MSG_TIMESTAMP_FORMAT not in violations(deal_timestamp=ts)

    @pytest.mark.parametrize(
        "ts",
        [
            "2024-11-16T10:30:00",
            "2024-11-16",
            "2024/11/16 10:30:00",
            "16-11-2024 10:30:00",
            "2024-11-16 10:30",
            "2024-11-16 10:30:00.123",
            "2024-11-16 10:30:00Z",
            "2024-11-16 10:30:00+02:00",
            "2024-13-01 10:30:00",
            "2023-02-29 10:30:00",
            "2024-04-31 10:30:00",
            "2024-11-16 24:00:00",
            "2024-11-16 10:60:00",
            "2024-11-16 10:30:60",
            "2024-1-16 10:30:00",
            " 2024-11-16 10:30:00",
            "2024-11-16  10:30:00",
            "not-a-date",
        ],
    )
    def test_malformed_timestamps_fail(self, ts):
        assert violations(deal_timestamp=ts) == [MSG_TIMESTAMP_FORMAT]

    def test_blank_timestamp_is_not_double_reported(self):
        msgs = violations(deal_timestamp="")
        assert MSG_TIMESTAMP_FORMAT not in msgs

    def test_parse_deal_timestamp(self):
        assert parse_deal_timestamp("2024-11-16 10:30:05") == datetime(2024, 11, 16, 10, 30, 5)

    def test_parse_rejects_non_ascii_digits(self):
        with pytest.raises(ValueError):
            parse_deal_timestamp("２０２４-11-16 10:30:00")


# ---------------------------------------------------------------------------
# Amount format and positivity
# ---------------------------------------------------------------------------


class TestAmountRule:
    @pytest.mark.parametrize(
        "amount", ["1000.50", "1", "0.01", "1.5E3", "1e-2", "+5", ".5", "5.", "1E+100", "1E-100", "123456789012345678901234567890.123456789"]
    )
    def test_positive_amounts_pass(self, amount):
        assert violations(deal_amount=amount) == []

    @pytest.mark.parametrize("amount", ["0", "0.00", "-0.01", "-100", "-1.5E3", "0E10"])
    def test_non_positive_amounts_fail(self, amount):
        assert violations(deal_amount=amount) == [MSG_AMOUNT_POSITIVE]

    @pytest.mark.parametrize(
        "amount",
        [
            "invalid-amount",
            "1,000.50",
            "$100",
            "100 USD",
            "1.2.3",
            "NaN",
            "Infinity",
            "-inf",
            "1_000",
            " 100",
            "1e",
            "--1",
            "1E+101",
            "1E-101",
            "1E+50000000",
            "1E+999999999",
        ],
    )
    def test_malformed_amounts_fail(self, amount):
        assert violations(deal_amount=amount) == [MSG_AMOUNT_FORMAT]

    def test_format_failure_skips_positivity(self):
        msgs = violations(deal_amount="-abc")
        assert MSG_AMOUNT_FORMAT in msgs
        assert MSG_AMOUNT_POSITIVE not in msgs

    def test_parse_keeps_full_precision(self):
        assert str(parse_deal_amount("1000.50")) == "1000.50"
        assert parse_deal_amount("1.5E3") == Decimal("1500")

    def test_parse_rejects_huge_exponent_without_expanding(self):
        with pytest.raises(ValueError):
            parse_deal_amount("1E+999999999")
        assert parse_deal_amount(f"1E+{MAX_AMOUNT_EXPONENT}") == Decimal(10) ** MAX_AMOUNT_EXPONENT


# ---------------------------------------------------------------------------
# Currency rules
# ---------------------------------------------------------------------------


class TestCurrencyRules:
    @pytest.mark.parametrize("pair", [("USD", "EUR"), ("GBP", "JPY"), ("CHF", "XAU")])
    def test_valid_pairs_pass(self, pair):
        assert violations(from_currency=pair[0], to_currency=pair[1]) == []

    @pytest.mark.parametrize("code", ["usd", "Usd", "US", "USDD", "840", "ABC", "U$D"])
    def test_invalid_from_currency(self, code):
        assert violations(from_currency=code) == [MSG_FROM_CURRENCY]

    @pytest.mark.parametrize("code", ["eur", "EU", "978", "XYZ"])
    def test_invalid_to_currency(self, code):
        assert violations(to_currency=code) == [MSG_TO_CURRENCY]

    def test_same_currency_rejected(self):
        assert violations(from_currency="USD", to_currency="USD") == [MSG_SAME_CURRENCY]

    def test_same_invalid_currency_reports_both_rules(self):
        assert violations(from_currency="abc", to_currency="abc") == [
            MSG_FROM_CURRENCY,
            MSG_TO_CURRENCY,
            MSG_SAME_CURRENCY,
        ]

    def test_case_differing_codes_are_not_equal(self):
        msgs = violations(from_currency="USD", to_currency="usd")
        assert MSG_SAME_CURRENCY not in msgs
        assert msgs == [MSG_TO_CURRENCY]

    def test_distinctness_needs_both_present(self):
        assert MSG_SAME_CURRENCY not in violations(to_currency="")

    def test_registry(self):
        assert is_iso_currency("USD")
        assert not is_iso_currency("usd")
        assert all(len(c) == 3 and c.isupper() for c in ISO_4217_CODES)


# ---------------------------------------------------------------------------
# Uniqueness
# ---------------------------------------------------------------------------


class TestUniquenessRule:
    def test_existing_id_rejected(self):
        msgs = validate(make_request(), lambda deal_id: deal_id == "DEAL-001")
        assert msgs == ["Deal with id DEAL-001 already exists"]

    def test_blank_id_skips_store_lookup(self):
        calls = []

        def exists(deal_id):
            calls.append(deal_id)
            return True

        validate(make_request(deal_id="  "), exists)
        assert calls == []

    def test_result_follows_live_store_state(self):
        seen: set[str] = set()
        req = make_request()
        assert validate(req, seen.__contains__) == []
        seen.add("DEAL-001")
        assert validate(req, seen.__contains__) == ["Deal with id DEAL-001 already exists"]


# ---------------------------------------------------------------------------
# Rule order
# ---------------------------------------------------------------------------


class TestRuleOrder:
    def test_messages_follow_rule_order(self):
        req = DealRequest(
            deal_id="DUP",
            from_currency="usd",
            to_currency="usd",
            deal_timestamp="2024-11-16T10:30:00",
            deal_amount="-1",
        )
        assert validate(req, lambda _id: True) == [
            MSG_TIMESTAMP_FORMAT,
            MSG_AMOUNT_POSITIVE,
            MSG_FROM_CURRENCY,
            MSG_TO_CURRENCY,
            MSG_SAME_CURRENCY,
            "Deal with id DUP already exists",
        ]

    def test_required_messages_come_first(self):
        req = DealRequest(
            deal_id="X", from_currency="", to_currency="EUR",
            deal_timestamp="bad", deal_amount="1",
        )
        assert validate(req, no_deals) == ["From currency is required", MSG_TIMESTAMP_FORMAT]
