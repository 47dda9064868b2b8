"""
Ranked ledger view: toggled multi-key sort and a "since timestamp" window.

Each sort key keeps its own direction flag. sort_by(key) orders the rows
using that key's flag, marks the key active, then flips the flag so the next
call on the same key reverses the order. Sorting is stable (Python's sort),
so ties keep their prior relative order in both directions.
"""

from __future__ import annotations

from collections.abc import Iterable

from zapboard.ledger.models import Transaction

SORT_AMOUNT = "amount"
SORT_OCCURRED_AT = "occurred_at"
SORT_KEYS = (SORT_AMOUNT, SORT_OCCURRED_AT)

_KEY_ALIASES = {
    "amount": SORT_AMOUNT,
    "occurred_at": SORT_OCCURRED_AT,
    "occurredAt": SORT_OCCURRED_AT,
}


def normalize_sort_key(key: str) -> str:
    """Return the canonical sort key; raises ValueError for unknown keys."""
    try:
        return _KEY_ALIASES[key]
    except (KeyError, TypeError):
        raise ValueError(f"unknown sort key {key!r}; expected one of {SORT_KEYS}") from None


def _sorted(rows: list[Transaction], key: str, ascending: bool) -> list[Transaction]:
    if key == SORT_AMOUNT:
        return sorted(rows, key=lambda tx: tx.amount, reverse=not ascending)
    return sorted(rows, key=lambda tx: tx.occurred_at, reverse=not ascending)


class RankedView:
    """
    Sorted/filtered projection of a transaction set.

    Initial state: no active key, rows in source order, amount sorts
    ascending first, occurred_at sorts descending (most recent) first.
    """

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._source: list[Transaction] = list(transactions)
        self._rows: list[Transaction] = list(self._source)
        self._ascending: dict[str, bool] = {SORT_AMOUNT: True, SORT_OCCURRED_AT: False}
        # Direction the active key was last applied with; used by reload().
        self._applied_ascending: bool | None = None
        self._active_key: str | None = None
        self._window: int | float | None = None

    @property
    def rows(self) -> list[Transaction]:
        return list(self._rows)

    @property
    def active_key(self) -> str | None:
        return self._active_key

    @property
    def window(self) -> int | float | None:
        return self._window

    def is_ascending(self, key: str) -> bool:
        """Direction the next sort_by(key) will use."""
        return self._ascending[normalize_sort_key(key)]

    def _in_window(self) -> list[Transaction]:
        if self._window is None:
            return list(self._source)
        return [tx for tx in self._source if tx.occurred_at >= self._window]

    def sort_by(self, key: str) -> list[Transaction]:
        """Sort by key using its current flag, mark it active, then flip the flag."""
        key = normalize_sort_key(key)
        ascending = self._ascending[key]
        self._rows = _sorted(self._rows, key, ascending)
        self._active_key = key
        self._applied_ascending = ascending
        self._ascending[key] = not ascending
        return self.rows

    def apply_window(self, since: int | float | None = None) -> list[Transaction]:
        """
        Keep only rows with occurred_at >= since, newest first.

        Forces the view into a known state: occurred_at becomes the active key
        and its next toggle sorts ascending. since=None restores the full set
        in source order without re-sorting and clears the active key.
        """
        if since is None:
            self._window = None
            self._rows = list(self._source)
            self._active_key = None
            self._applied_ascending = None
            return self.rows
        self._window = since
        self._rows = _sorted(self._in_window(), SORT_OCCURRED_AT, ascending=False)
        self._active_key = SORT_OCCURRED_AT
        self._applied_ascending = False
        self._ascending[SORT_OCCURRED_AT] = True
        return self.rows

    def reload(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        """
        Replace the source set, keeping window and toggle state.

        If a key is active the rows are re-sorted in the direction last
        applied for it; no flag is toggled.
        """
        self._source = list(transactions)
        rows = self._in_window()
        if self._active_key is not None and self._applied_ascending is not None:
            rows = _sorted(rows, self._active_key, self._applied_ascending)
        self._rows = rows
        return self.rows
