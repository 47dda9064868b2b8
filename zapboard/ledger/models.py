"""
Data models for the zap ledger.

RawPayment validates a provider payment record (LNbits /api/v1/payments item)
before normalization; Transaction is the canonical, immutable record consumed
by the analytics engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


@dataclass(frozen=True)
class Transaction:
    """
    Canonical zap transaction.

    amount is in sats; negative = outbound (sent), positive = inbound (received).
    """

    id: str
    """Provider-assigned identifier, unique within a ledger session."""
    amount: int
    """Signed amount in sats."""
    occurred_at: int
    """Unix timestamp (seconds)."""
    reference: str | None = None
    """Payment request (bolt11); None if not provided."""
    from_actor: str | None = None
    """Resolved display name of the sender; None if unresolved."""
    to_actor: str | None = None
    """Resolved display name of the receiver; None if unresolved."""
    memo: str | None = None
    source_account: str | None = None
    """Wallet id the payment was fetched from."""

    @property
    def is_outbound(self) -> bool:
        return self.amount < 0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return {
            "id": self.id,
            "reference": self.reference,
            "from_actor": self.from_actor,
            "to_actor": self.to_actor,
            "memo": self.memo,
            "amount": self.amount,
            "source_account": self.source_account,
            "occurred_at": self.occurred_at,
        }


class RawPayment(BaseModel):
    """Shape check for a provider payment record. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str | int | None = None
    checking_id: str | int | None = None
    amount: int | float
    time: int | float | datetime
    bolt11: str | None = None
    memo: str | None = None
    wallet_id: str | None = None
    extra: dict[str, Any] | None = None

    @field_validator("amount", "time", mode="before")
    @classmethod
    def _reject_bool(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("booleans are not numbers")
        return v

    @field_validator("amount")
    @classmethod
    def _finite_amount(cls, v: int | float) -> int | float:
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("amount must be finite")
        return v

    @field_validator("extra", mode="before")
    @classmethod
    def _extra_mapping_or_none(cls, v: Any) -> Any:
        # Metadata is optional; a malformed extra only loses actor resolution.
        return v if isinstance(v, dict) else None

    @property
    def payment_id(self) -> str | None:
        for candidate in (self.id, self.checking_id):
            if candidate is None:
                continue
            s = str(candidate).strip()
            if s:
                return s
        return None


@dataclass(frozen=True)
class IngestFailure:
    """A raw record that was skipped during a batch."""

    index: int
    """Position of the record in its batch."""
    reason: str
    record_id: str | None = None


@dataclass(frozen=True)
class IngestResult:
    """Outcome of one ingest call."""

    accepted: int = 0
    duplicates: int = 0
    failures: tuple[IngestFailure, ...] = field(default_factory=tuple)

    @property
    def rejected(self) -> int:
        return len(self.failures)
