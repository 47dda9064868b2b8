"""
Analytics package: aggregate statistics and the ranked ledger view.

Consumes canonical zap transactions and produces the dashboard's derived
numbers (total sent, averages, largest zap, distinct senders) and a
sortable, time-windowed transaction list.
"""

from zapboard.analytics.aggregates import AggregateSnapshot, compute_snapshot, distinct_actors
from zapboard.analytics.ranked_view import (
    SORT_AMOUNT,
    SORT_KEYS,
    SORT_OCCURRED_AT,
    RankedView,
    normalize_sort_key,
)
from zapboard.analytics.session import ZapLedgerSession

__all__ = [
    "AggregateSnapshot",
    "compute_snapshot",
    "distinct_actors",
    "RankedView",
    "SORT_AMOUNT",
    "SORT_OCCURRED_AT",
    "SORT_KEYS",
    "normalize_sort_key",
    "ZapLedgerSession",
]
