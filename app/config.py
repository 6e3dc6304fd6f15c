from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

ROOT_DIR = Path(__file__).resolve().parent.parent
DEFAULT_DB_PATH = ROOT_DIR / "data" / "fx_deals.db"
DEFAULT_SETTINGS_PATH = ROOT_DIR / "config" / "settings.json"

_ENV_OVERRIDES = {
    "FX_DEALS_DB_PATH": "db_path",
    "FX_DEALS_LOG_LEVEL": "log_level",
}


class AppSettings(BaseModel):
    """Runtime settings. File values first, then environment overrides."""

    db_path: Path = DEFAULT_DB_PATH
    log_level: str = "INFO"
    service_name: str = "FX Deals Data Warehouse"

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v}")
        return level


def load_settings(path: Optional[str | Path] = None) -> AppSettings:
    """Load settings from a JSON file, falling back to defaults, then apply env vars."""
    path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH

    raw: dict = {}
    if path.exists():
        with open(path) as f:
            raw = json.load(f)

    for env_name, field in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            raw[field] = value
    return AppSettings(**raw)


def configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
