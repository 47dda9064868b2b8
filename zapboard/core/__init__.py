"""Core shared pieces: exception taxonomy."""

from zapboard.core.exceptions import LnbitsError, ValidationError, ZapboardError

__all__ = ["ZapboardError", "ValidationError", "LnbitsError"]
