"""
Payment normalizer: raw LNbits payment records to canonical transactions.

Converts provider amounts (millisatoshis by default) to sats once, resolves
the from/to actor references found in the optional ``extra`` metadata to
display names, and rejects records that lack an identifier, a numeric
amount, or a usable timestamp. Pure mapping: inputs are never mutated.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from decimal import ROUND_DOWN, Decimal
from typing import Any

import pydantic

from zapboard.config.env import DEFAULT_UNIT_FACTOR
from zapboard.core.exceptions import ValidationError
from zapboard.ledger.models import IngestFailure, RawPayment, Transaction
from zapboard.zap_logging import get_logger

logger = get_logger(__name__)

ActorResolver = Callable[[str], str | None]


def to_minor_units(amount: int | float, unit_factor: int = DEFAULT_UNIT_FACTOR) -> int:
    """
    Convert a provider amount to sats, truncating toward zero.

    Exact decimal arithmetic; the sign is preserved symmetrically
    (-2500 msat -> -2, 2500 msat -> 2).
    """
    if unit_factor <= 0:
        raise ValueError("unit_factor must be positive")
    value = Decimal(str(amount)) / Decimal(unit_factor)
    return int(value.to_integral_value(rounding=ROUND_DOWN))


def _to_unix_seconds(value: int | float | datetime) -> int:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return int(value)


_TIME_ADAPTER = pydantic.TypeAdapter(int | float | datetime)


def parse_payment_time(value: Any) -> int | None:
    """
    Parse a payment `time` (Unix seconds or ISO 8601) the way normalize_payment does.

    Returns None when the value cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        return _to_unix_seconds(_TIME_ADAPTER.validate_python(value))
    except (pydantic.ValidationError, OverflowError, ValueError, OSError):
        return None


def extract_actor_ref(extra: Mapping[str, Any] | None, side: str) -> str | None:
    """
    Return the actor identifier stored under extra[side].

    The side may hold an object with an ``id`` or a bare identifier string.
    """
    if not extra:
        return None
    node = extra.get(side)
    if isinstance(node, Mapping):
        node = node.get("id")
    if node is None or isinstance(node, bool):
        return None
    ref = str(node).strip()
    return ref or None


def _resolve(resolve: ActorResolver | None, ref: str | None, payment_id: str) -> str | None:
    if ref is None or resolve is None:
        return None
    try:
        name = resolve(ref)
    except Exception as e:
        # Unresolved actors are kept as None; the transaction is still retained.
        logger.warning("actor_resolution_failed", payment_id=payment_id, actor_ref=ref, error=str(e))
        return None
    if name is None:
        logger.debug("actor_unresolved", payment_id=payment_id, actor_ref=ref)
        return None
    return str(name)


def _describe(exc: pydantic.ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def _record_id_hint(raw: Any) -> str | None:
    if not isinstance(raw, Mapping):
        return None
    for key in ("id", "checking_id"):
        value = raw.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def normalize_payment(
    raw: Mapping[str, Any],
    resolve: ActorResolver | None = None,
    *,
    unit_factor: int = DEFAULT_UNIT_FACTOR,
) -> Transaction:
    """
    Map one raw payment record to a canonical Transaction.

    Args:
        raw: Provider record (id/checking_id, amount, time, bolt11, memo,
            wallet_id, optional extra.from / extra.to).
        resolve: Actor resolver ``ref -> display name | None``.
        unit_factor: Provider amount units per sat.

    Raises:
        ValidationError: missing identifier, non-numeric amount, or unusable time.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError(f"expected a mapping, got {type(raw).__name__}")
    hint = _record_id_hint(raw)
    try:
        payment = RawPayment.model_validate(dict(raw))
    except pydantic.ValidationError as e:
        raise ValidationError(_describe(e), record_id=hint) from e

    payment_id = payment.payment_id
    if payment_id is None:
        raise ValidationError("missing identifier (id / checking_id)")

    try:
        occurred_at = _to_unix_seconds(payment.time)
    except (OverflowError, ValueError, OSError) as e:
        raise ValidationError(f"time: {e}", record_id=payment_id) from e

    return Transaction(
        id=payment_id,
        amount=to_minor_units(payment.amount, unit_factor),
        occurred_at=occurred_at,
        reference=payment.bolt11,
        from_actor=_resolve(resolve, extract_actor_ref(payment.extra, "from"), payment_id),
        to_actor=_resolve(resolve, extract_actor_ref(payment.extra, "to"), payment_id),
        memo=payment.memo,
        source_account=payment.wallet_id,
    )


def normalize_batch(
    records: Iterable[Mapping[str, Any]],
    resolve: ActorResolver | None = None,
    *,
    unit_factor: int = DEFAULT_UNIT_FACTOR,
) -> tuple[list[Transaction], list[IngestFailure]]:
    """
    Normalize a batch; malformed records are skipped and reported, never fatal.

    Returns (transactions in input order, failures).
    """
    transactions: list[Transaction] = []
    failures: list[IngestFailure] = []
    for index, raw in enumerate(records):
        try:
            transactions.append(normalize_payment(raw, resolve, unit_factor=unit_factor))
        except ValidationError as e:
            logger.warning("normalize_rejected", index=index, record_id=e.record_id, reason=e.reason)
            failures.append(IngestFailure(index=index, reason=e.reason, record_id=e.record_id))
    return transactions, failures


def build_actor_resolver(names: Mapping[str, str]) -> ActorResolver:
    """Return a resolver backed by a directory mapping (wallet/user id -> display name)."""
    directory = {str(k): v for k, v in names.items() if v}

    def resolve(ref: str) -> str | None:
        return directory.get(ref)

    return resolve
