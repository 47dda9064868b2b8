"""
Application-level exceptions.

- ValidationError: a raw payment record is malformed (missing id, non-numeric
  amount, unusable timestamp). Contained per record by the normalizer batch.
- LnbitsError: fetching payments for a wallet failed. Contained per wallet by
  the scanner.

An unresolved actor is not an exception; it is represented as None.
"""

from __future__ import annotations


class ZapboardError(Exception):
    """Base class for all zapboard errors."""


class ValidationError(ZapboardError):
    """A raw payment record could not be normalized."""

    def __init__(self, reason: str, record_id: str | None = None) -> None:
        self.reason = reason
        self.record_id = record_id
        if record_id:
            super().__init__(f"invalid payment {record_id}: {reason}")
        else:
            super().__init__(f"invalid payment: {reason}")


class LnbitsError(ZapboardError):
    """The LNbits API returned an error or an unusable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
