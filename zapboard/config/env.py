"""
Environment variable loading and validation for Zapboard.

- LNBITS_URL: base URL of the LNbits instance (default: http://localhost:5000)
- ZAP_WALLET_KEYS: comma-separated invoice/read keys of the wallets to scan
- ZAP_UNIT_FACTOR: provider units per sat (default: 1000, LNbits reports msat)
- LNBITS_FETCH_LIMIT: payments fetched per wallet (default: 100)
- LNBITS_TIMEOUT_SEC: HTTP timeout per request (default: 15)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is zapboard/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_LNBITS_URL = "http://localhost:5000"
DEFAULT_UNIT_FACTOR = 1000
DEFAULT_FETCH_LIMIT = 100
DEFAULT_TIMEOUT_SEC = 15.0


def load_zapboard_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides set vars."""
    load_dotenv(_ENV_PATH, override=False)


def _positive_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_lnbits_url() -> str:
    """Return LNBITS_URL without a trailing slash."""
    load_zapboard_env()
    url = (os.getenv("LNBITS_URL") or "").strip() or DEFAULT_LNBITS_URL
    return url.rstrip("/")


def get_wallet_keys() -> list[str]:
    """Return ZAP_WALLET_KEYS as a list; blanks are dropped, order preserved."""
    load_zapboard_env()
    raw = os.getenv("ZAP_WALLET_KEYS") or ""
    return [k.strip() for k in raw.split(",") if k.strip()]


def get_unit_factor() -> int:
    """
    Return ZAP_UNIT_FACTOR: provider amount units per sat.
    Invalid or non-positive values fall back to 1000 (msat -> sat).
    """
    load_zapboard_env()
    return _positive_int("ZAP_UNIT_FACTOR", DEFAULT_UNIT_FACTOR)


def get_fetch_limit() -> int:
    """Return LNBITS_FETCH_LIMIT (payments per wallet fetch)."""
    load_zapboard_env()
    return _positive_int("LNBITS_FETCH_LIMIT", DEFAULT_FETCH_LIMIT)


def get_request_timeout() -> float:
    """Return LNBITS_TIMEOUT_SEC; invalid or non-positive -> 15 seconds."""
    load_zapboard_env()
    raw = (os.getenv("LNBITS_TIMEOUT_SEC") or "").strip()
    try:
        value = float(raw) if raw else DEFAULT_TIMEOUT_SEC
    except ValueError:
        return DEFAULT_TIMEOUT_SEC
    return value if value > 0 else DEFAULT_TIMEOUT_SEC
