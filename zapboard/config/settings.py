"""
Application settings.

Typed, read-only view over the environment (see env.py) for the
ingestion client, scanner and analytics session.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from zapboard.config.env import (
    get_fetch_limit,
    get_lnbits_url,
    get_request_timeout,
    get_unit_factor,
    get_wallet_keys,
)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration resolved from env / .env."""

    lnbits_url: str
    unit_factor: int
    fetch_limit: int
    request_timeout_sec: float
    wallet_keys: tuple[str, ...] = field(default_factory=tuple)


def get_settings() -> Settings:
    """Return the current application settings (re-read from env on each call)."""
    return Settings(
        lnbits_url=get_lnbits_url(),
        unit_factor=get_unit_factor(),
        fetch_limit=get_fetch_limit(),
        request_timeout_sec=get_request_timeout(),
        wallet_keys=tuple(get_wallet_keys()),
    )
