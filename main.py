"""
Main entrypoint: scan the configured LNbits wallets once and print the dashboard data.

Fetches every wallet in ZAP_WALLET_KEYS (or --wallet-key), ingests the payments
into a ledger session, and prints the aggregate snapshot plus the ranked
ledger as JSON on stdout. Logs go to stderr.

Env: LNBITS_URL, ZAP_WALLET_KEYS, ZAP_UNIT_FACTOR, LNBITS_FETCH_LIMIT, LNBITS_TIMEOUT_SEC, LOG_LEVEL, LOG_FORMAT.

Usage: python main.py [--since UNIX_TS] [--sort amount|occurred_at] [--names names.json]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Configure structured logging before other imports that may log
from zapboard.zap_logging import get_logger

from zapboard.analytics import SORT_KEYS, ZapLedgerSession
from zapboard.config import get_settings
from zapboard.ingestion import LnbitsClient, scan_wallets
from zapboard.ledger import build_actor_resolver

logger = get_logger("main")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize zaps from LNbits wallets.")
    parser.add_argument("--wallet-key", action="append", default=[], help="Wallet invoice key (repeatable); overrides ZAP_WALLET_KEYS")
    parser.add_argument("--since", type=int, default=None, help="Only show the ledger since this Unix timestamp")
    parser.add_argument("--sort", choices=SORT_KEYS, default=None, help="Sort the ledger by this column")
    parser.add_argument("--names", type=Path, default=None, help="JSON file mapping wallet/user id -> display name")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    settings = get_settings()
    wallet_keys = args.wallet_key or list(settings.wallet_keys)
    if not wallet_keys:
        logger.error("main_config_error", message="No wallets to scan: set ZAP_WALLET_KEYS or pass --wallet-key")
        return 1

    resolve = None
    if args.names is not None:
        resolve = build_actor_resolver(json.loads(args.names.read_text(encoding="utf-8")))

    session = ZapLedgerSession(resolve, unit_factor=settings.unit_factor)
    async with LnbitsClient(
        settings.lnbits_url,
        timeout=settings.request_timeout_sec,
        limit=settings.fetch_limit,
    ) as client:
        report = await scan_wallets(client, wallet_keys, session)

    rows = session.apply_window(args.since) if args.since is not None else session.rows
    if args.sort:
        rows = session.sort_by(args.sort)

    out = {
        "scan": report.to_dict(),
        "snapshot": session.get_snapshot().to_dict(),
        "ledger": [tx.to_dict() for tx in rows],
    }
    json.dump(out, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0 if report.wallets_scanned else 2


def main(argv: list[str] | None = None) -> int:
    return asyncio.run(_run(_parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
