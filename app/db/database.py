from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Generator

from app.config import load_settings
from app.deals.errors import DealStoreError
from app.deals.models import DealRecord
from app.deals.validation import format_deal_timestamp, parse_deal_timestamp

SCHEMA = """
CREATE TABLE IF NOT EXISTS fx_deals (
    deal_id TEXT PRIMARY KEY,
    from_currency TEXT NOT NULL CHECK (length(from_currency) = 3),
    to_currency TEXT NOT NULL CHECK (length(to_currency) = 3),
    deal_timestamp TEXT NOT NULL,
    deal_amount TEXT NOT NULL,
    created_at TEXT NOT NULL
);
"""

# Returned in place of sqlite's own error text
STORE_UNAVAILABLE = "Deal store unavailable"


def _db_path() -> Path:
    return load_settings().db_path


@contextmanager
def get_conn(db_path: Path | None = None) -> Generator[sqlite3.Connection, None, None]:
    path = db_path or _db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: Path | None = None) -> None:
    with get_conn(db_path) as conn:
        conn.executescript(SCHEMA)


# ---------------------------------------------------------------------------
# Deal CRUD
# ---------------------------------------------------------------------------


def insert_deal(record: DealRecord, db_path: Path | None = None) -> DealRecord:
    """Insert one deal. The primary key rejects an id written concurrently."""
    try:
        with get_conn(db_path) as conn:
            conn.execute(
                """INSERT INTO fx_deals
                   (deal_id, from_currency, to_currency, deal_timestamp,
                    deal_amount, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    record.deal_id,
                    record.from_currency,
                    record.to_currency,
                    format_deal_timestamp(record.deal_timestamp),
                    format(record.deal_amount, "f"),
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
    except sqlite3.IntegrityError as exc:
        raise DealStoreError(
            record.deal_id, f"Deal with id {record.deal_id} violates a store constraint"
        ) from exc
    except sqlite3.Error as exc:
        raise DealStoreError(record.deal_id, STORE_UNAVAILABLE) from exc
    return record


@contextmanager
def _read_errors(deal_id: str | None = None) -> Generator[None, None, None]:
    try:
        yield
    except sqlite3.Error as exc:
        raise DealStoreError(deal_id, STORE_UNAVAILABLE) from exc


def deal_exists(deal_id: str, db_path: Path | None = None) -> bool:
    with _read_errors(deal_id), get_conn(db_path) as conn:
        row = conn.execute(
            "SELECT 1 FROM fx_deals WHERE deal_id = ?", (deal_id,)
        ).fetchone()
        return row is not None


def get_deal(deal_id: str, db_path: Path | None = None) -> DealRecord | None:
    with _read_errors(deal_id), get_conn(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM fx_deals WHERE deal_id = ?", (deal_id,)
        ).fetchone()
        if row is None:
            return None
        return _row_to_record(row)


def get_all_deals(db_path: Path | None = None) -> list[DealRecord]:
    with _read_errors(), get_conn(db_path) as conn:
        rows = conn.execute("SELECT * FROM fx_deals ORDER BY rowid").fetchall()
        return [_row_to_record(r) for r in rows]


def _row_to_record(row: sqlite3.Row) -> DealRecord:
    d: dict[str, Any] = dict(row)
    return DealRecord(
        deal_id=d["deal_id"],
        from_currency=d["from_currency"],
        to_currency=d["to_currency"],
        deal_timestamp=parse_deal_timestamp(d["deal_timestamp"]),
        deal_amount=Decimal(d["deal_amount"]),
    )


def count_deals(db_path: Path | None = None) -> int:
    with _read_errors(), get_conn(db_path) as conn:
        return conn.execute("SELECT COUNT(*) FROM fx_deals").fetchone()[0]


# ---------------------------------------------------------------------------
# Store adapter
# ---------------------------------------------------------------------------


class SqliteDealStore:
    """DealStore backed by the functions above, bound to one database file."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path
        init_db(db_path)

    def exists(self, deal_id: str) -> bool:
        return deal_exists(deal_id, self.db_path)

    def save(self, record: DealRecord) -> DealRecord:
        return insert_deal(record, self.db_path)

    def get(self, deal_id: str) -> DealRecord | None:
        return get_deal(deal_id, self.db_path)

    def find_all(self) -> list[DealRecord]:
        return get_all_deals(self.db_path)

    def count(self) -> int:
        return count_deals(self.db_path)
