"""
Pytest fixtures for Zapboard tests. Env is isolated so defaults apply.
"""

from __future__ import annotations

import pytest

NOW = 1_700_000_000


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Unset zapboard env vars so each test sees defaults unless it sets them."""
    for name in (
        "LNBITS_URL",
        "ZAP_WALLET_KEYS",
        "ZAP_UNIT_FACTOR",
        "LNBITS_FETCH_LIMIT",
        "LNBITS_TIMEOUT_SEC",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def names():
    """Directory of wallet/user ids -> display names."""
    return {"a": "Alice", "b": "Bob", "c": "Carol"}


@pytest.fixture
def resolver(names):
    from zapboard.ledger import build_actor_resolver

    return build_actor_resolver(names)


@pytest.fixture
def raw_payments():
    """LNbits-style payments (amounts in msat): three sent, one received."""
    return [
        {
            "checking_id": "p1",
            "bolt11": "lnbc1",
            "amount": -500_000,
            "memo": "thanks",
            "wallet_id": "w1",
            "time": NOW - 2 * 86400,
            "extra": {"from": {"id": "a"}, "to": {"id": "b"}},
        },
        {
            "checking_id": "p2",
            "amount": -1_200_000,
            "wallet_id": "w1",
            "time": NOW - 86400,
            "extra": {"from": {"id": "b"}, "to": {"id": "a"}},
        },
        {
            "checking_id": "p3",
            "amount": 700_000,
            "wallet_id": "w1",
            "time": NOW - 3600,
            "extra": {"from": {"id": "c"}},
        },
        {
            "checking_id": "p4",
            "amount": -300_000,
            "wallet_id": "w2",
            "time": NOW - 60,
            "extra": {"from": {"id": "a"}},
        },
    ]


@pytest.fixture
def session(resolver):
    """Ledger session with msat -> sat conversion and a fixed clock."""
    from zapboard.analytics import ZapLedgerSession

    return ZapLedgerSession(resolver, unit_factor=1000, clock=lambda: NOW)
