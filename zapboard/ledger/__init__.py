"""
Ledger package: canonical zap transactions and the payment normalizer.
"""

from zapboard.ledger.models import IngestFailure, IngestResult, RawPayment, Transaction
from zapboard.ledger.normalizer import (
    ActorResolver,
    build_actor_resolver,
    extract_actor_ref,
    normalize_batch,
    normalize_payment,
    parse_payment_time,
    to_minor_units,
)

__all__ = [
    "Transaction",
    "RawPayment",
    "IngestFailure",
    "IngestResult",
    "ActorResolver",
    "build_actor_resolver",
    "extract_actor_ref",
    "normalize_batch",
    "normalize_payment",
    "parse_payment_time",
    "to_minor_units",
]
