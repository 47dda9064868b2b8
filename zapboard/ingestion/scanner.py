"""
Multi-wallet scan: fetch each wallet's payments and ingest them.

Wallets are fetched one after another; each wallet's payments are ingested
as soon as they arrive, so a failure on a later wallet never discards what
was already accumulated. A failing wallet is logged, recorded and skipped.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from zapboard.analytics.session import ZapLedgerSession
from zapboard.core.exceptions import LnbitsError
from zapboard.ingestion.lnbits_client import LnbitsClient
from zapboard.zap_logging import bind_wallet, get_logger, short_key

logger = get_logger(__name__)


@dataclass
class ScanReport:
    """Totals for one scan over a set of wallets."""

    wallets_scanned: int = 0
    wallets_failed: list[str] = field(default_factory=list)
    """Truncated keys of wallets whose fetch failed."""
    accepted: int = 0
    duplicates: int = 0
    rejected: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "wallets_scanned": self.wallets_scanned,
            "wallets_failed": list(self.wallets_failed),
            "accepted": self.accepted,
            "duplicates": self.duplicates,
            "rejected": self.rejected,
        }


async def scan_wallets(
    client: LnbitsClient,
    wallet_keys: Iterable[str],
    session: ZapLedgerSession,
    *,
    since: float = 0,
) -> ScanReport:
    """
    Fetch payments since `since` for every wallet key and ingest them into session.

    Returns a ScanReport; LnbitsError for one wallet is contained.
    """
    report = ScanReport()
    for inkey in wallet_keys:
        wallet_log = bind_wallet(inkey)
        try:
            payments = await client.get_payments_since(inkey, since)
        except LnbitsError as e:
            wallet_log.warning("scan_wallet_failed", error=str(e), status_code=e.status_code)
            report.wallets_failed.append(short_key(inkey))
            continue
        result = session.ingest(payments)
        report.wallets_scanned += 1
        report.accepted += result.accepted
        report.duplicates += result.duplicates
        report.rejected += result.rejected
        wallet_log.info(
            "scan_wallet_done",
            fetched=len(payments),
            accepted=result.accepted,
            duplicates=result.duplicates,
            rejected=result.rejected,
        )
    logger.info("scan_done", **report.to_dict())
    return report
