"""
Ingestion: LNbits payments fetch and multi-wallet scan into a ledger session.
"""

from zapboard.ingestion.lnbits_client import LnbitsClient
from zapboard.ingestion.scanner import ScanReport, scan_wallets

__all__ = ["LnbitsClient", "ScanReport", "scan_wallets"]
