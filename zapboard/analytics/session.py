"""
Analytics session: the explicitly owned zap transaction set.

Holds the accumulated transactions for one dashboard session, deduplicated
by id so a scheduler may call ingest() redundantly. The aggregate snapshot is
recomputed from the current set on every request; the ranked view keeps only
its toggle/window state across ingests.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from zapboard.analytics.aggregates import AggregateSnapshot, compute_snapshot, distinct_actors
from zapboard.analytics.ranked_view import RankedView
from zapboard.config.env import get_unit_factor
from zapboard.ledger.models import IngestFailure, IngestResult, Transaction
from zapboard.ledger.normalizer import ActorResolver, normalize_batch
from zapboard.zap_logging import get_logger

logger = get_logger(__name__)


class ZapLedgerSession:
    """
    In-memory zap ledger with aggregate and ranked projections.

    Appends are serialized under a lock (single writer); readers work on a
    copy of the set taken under the same lock.
    """

    def __init__(
        self,
        resolve: ActorResolver | None = None,
        *,
        unit_factor: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._resolve = resolve
        self._unit_factor = unit_factor if unit_factor is not None else get_unit_factor()
        self._clock = clock
        self._lock = threading.Lock()
        self._transactions: list[Transaction] = []
        self._ids: set[str] = set()
        self._failures: list[IngestFailure] = []
        self._view = RankedView()

    @property
    def unit_factor(self) -> int:
        return self._unit_factor

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        with self._lock:
            return tuple(self._transactions)

    @property
    def failures(self) -> tuple[IngestFailure, ...]:
        """Every record rejected so far, across all ingest calls."""
        with self._lock:
            return tuple(self._failures)

    @property
    def rows(self) -> list[Transaction]:
        """Current ranked rows (sorted/windowed as last requested)."""
        with self._lock:
            return self._view.rows

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)

    def ingest(self, records: Iterable[Mapping[str, Any]]) -> IngestResult:
        """
        Normalize raw records and append the new ones.

        Idempotent per id: the first occurrence wins and later duplicates
        are only counted. Malformed records are skipped and reported.
        """
        normalized, failures = normalize_batch(records, self._resolve, unit_factor=self._unit_factor)
        accepted = 0
        duplicates = 0
        with self._lock:
            for tx in normalized:
                if tx.id in self._ids:
                    duplicates += 1
                    continue
                self._ids.add(tx.id)
                self._transactions.append(tx)
                accepted += 1
            self._failures.extend(failures)
            self._view.reload(self._transactions)
            total = len(self._transactions)
        logger.info(
            "ingest_done",
            accepted=accepted,
            duplicates=duplicates,
            rejected=len(failures),
            total=total,
        )
        return IngestResult(accepted=accepted, duplicates=duplicates, failures=tuple(failures))

    def get_snapshot(self) -> AggregateSnapshot:
        """Current aggregate statistics, computed from scratch."""
        return compute_snapshot(self.transactions, now=self._clock())

    def get_actor_list(self) -> list[str]:
        """Distinct outbound sender names, first-seen order."""
        return list(distinct_actors(tx for tx in self.transactions if tx.is_outbound))

    def sort_by(self, key: str) -> list[Transaction]:
        """Ranked rows after toggling key; see RankedView.sort_by."""
        with self._lock:
            return self._view.sort_by(key)

    def apply_window(self, since: int | float | None = None) -> list[Transaction]:
        """Rows since the given Unix time, newest first; None restores the full set."""
        with self._lock:
            return self._view.apply_window(since)
