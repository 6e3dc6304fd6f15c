from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from app.config import load_settings
from app.db.database import SqliteDealStore
from app.deals.importer import DealImporter


@lru_cache(maxsize=None)
def store_for(db_path: Path) -> SqliteDealStore:
    """One store per database file; the schema is created on first use."""
    return SqliteDealStore(db_path)


def get_store() -> SqliteDealStore:
    return store_for(load_settings().db_path)


def get_importer(store: SqliteDealStore = Depends(get_store)) -> DealImporter:
    return DealImporter(store)
