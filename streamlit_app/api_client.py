"""Thin HTTP client for the FX deals API."""

from __future__ import annotations

import os
from typing import Any

import httpx

BASE_URL = os.environ.get("FX_DEALS_API_URL", "http://localhost:8000")
DEALS_PATH = "/api/v1/deals"


def _url(path: str) -> str:
    return f"{BASE_URL}{path}"


def _headers() -> dict[str, str]:
    key = os.environ.get("FX_DEALS_API_KEY")
    if key:
        return {"X-API-Key": key}
    return {}


def _import(path: str, payload: Any) -> tuple[bool, Any]:
    """POST an import. Rejections (400) come back as data, not exceptions."""
    resp = httpx.post(_url(path), json=payload, headers=_headers(), timeout=30)
    if resp.status_code == 400:
        return False, resp.json()
    resp.raise_for_status()
    return True, resp.json()


def import_single(payload: dict[str, Any]) -> tuple[bool, dict[str, Any]]:
    return _import(f"{DEALS_PATH}/import/single", payload)


def import_batch(payloads: list[dict[str, Any]]) -> tuple[bool, Any]:
    return _import(f"{DEALS_PATH}/import/batch", payloads)


def list_deals() -> list[dict[str, Any]]:
    resp = httpx.get(_url(DEALS_PATH), headers=_headers(), timeout=10)
    resp.raise_for_status()
    return resp.json()


def seed_deals(count: int = 50) -> dict[str, Any]:
    resp = httpx.post(
        _url(f"{DEALS_PATH}/seed"),
        json={"count": count},
        headers=_headers(),
        timeout=60,
    )
    resp.raise_for_status()
    return resp.json()


def health() -> dict[str, Any]:
    resp = httpx.get(_url("/health"), headers=_headers(), timeout=5)
    return resp.json()
