"""
Aggregate statistics over a zap transaction set.

Only outbound transactions (amount < 0) feed the statistics: total sent,
average per day since the first outbound zap, average per distinct sender,
largest zap, and the distinct sender list. Every denominator that can be
zero has an explicit fallback to 0; nothing here raises for empty input.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from zapboard.ledger.models import Transaction

# Seconds per day for the per-day average
SECONDS_PER_DAY = 86400
# Elapsed windows shorter than this count as zero (no per-day rate)
MIN_ELAPSED_SECONDS = 1.0


@dataclass(frozen=True)
class AggregateSnapshot:
    """Derived statistics; recomputed from scratch for every request."""

    total_outbound: int
    """Sum of abs(amount) over outbound transactions (sats)."""
    average_per_day: float
    """total_outbound / elapsed_days; 0 when the elapsed window is zero."""
    average_per_actor: float
    """total_outbound / distinct_actor_count; 0 when there are no actors."""
    largest_outbound: int
    """Largest abs(amount) among outbound transactions; 0 if none."""
    distinct_actor_count: int
    actor_list: tuple[str, ...] = field(default_factory=tuple)
    """Distinct non-null from_actor among outbound transactions, first-seen order."""
    outbound_count: int = 0
    earliest_outbound_at: int | None = None
    elapsed_days: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict; stable key order for the presentation layer."""
        return {
            "total_outbound": self.total_outbound,
            "average_per_day": self.average_per_day,
            "average_per_actor": self.average_per_actor,
            "largest_outbound": self.largest_outbound,
            "distinct_actor_count": self.distinct_actor_count,
            "actor_list": list(self.actor_list),
            "outbound_count": self.outbound_count,
            "earliest_outbound_at": self.earliest_outbound_at,
            "elapsed_days": self.elapsed_days,
        }


def distinct_actors(outbound: Iterable[Transaction]) -> tuple[str, ...]:
    """Distinct non-empty from_actor values, first-seen order."""
    seen: dict[str, None] = {}
    for tx in outbound:
        if tx.from_actor:
            seen.setdefault(tx.from_actor, None)
    return tuple(seen)


def compute_snapshot(
    transactions: Iterable[Transaction],
    *,
    now: float | None = None,
) -> AggregateSnapshot:
    """
    Compute the aggregate snapshot for a transaction set.

    Args:
        transactions: Canonical transactions (any order).
        now: Current Unix time in seconds; defaults to time.time().

    Returns:
        AggregateSnapshot. With no outbound transactions every statistic is 0
        and earliest_outbound_at is None.
    """
    current = time.time() if now is None else float(now)
    outbound = [tx for tx in transactions if tx.is_outbound]

    total = sum(-tx.amount for tx in outbound)
    largest = max((-tx.amount for tx in outbound), default=0)
    actors = distinct_actors(outbound)

    earliest: int | None = min((tx.occurred_at for tx in outbound), default=None)
    elapsed_seconds = current - earliest if earliest is not None else 0.0
    if elapsed_seconds < MIN_ELAPSED_SECONDS:
        elapsed_seconds = 0.0
    elapsed_days = elapsed_seconds / SECONDS_PER_DAY

    average_per_day = total / elapsed_days if elapsed_days > 0 else 0.0
    average_per_actor = total / len(actors) if actors else 0.0

    return AggregateSnapshot(
        total_outbound=total,
        average_per_day=average_per_day,
        average_per_actor=average_per_actor,
        largest_outbound=largest,
        distinct_actor_count=len(actors),
        actor_list=actors,
        outbound_count=len(outbound),
        earliest_outbound_at=earliest,
        elapsed_days=elapsed_days,
    )
