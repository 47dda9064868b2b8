"""
Structured logging for zap ingestion and analytics.

Every record carries an ISO timestamp, level, logger name and an
event_type such as ingest_done, normalize_rejected, scan_wallet_done or
scan_wallet_failed, plus key/value context (wallet_id, accepted,
duplicates, rejected, reason). LNbits wallet keys are credentials, so
any wallet_id or api_key field is cut down to a short prefix before
rendering.

LOG_LEVEL picks the threshold and LOG_FORMAT=console switches from JSON
to a human-readable renderer. Output goes to stderr so the operator
script can keep stdout for its JSON report.

No zapboard imports here; every other module imports this one.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

# Context keys that may hold an LNbits wallet key
SECRET_KEYS = ("wallet_id", "api_key", "wallet_key")


def short_key(value: str | None, keep: int = 8) -> str:
    """Truncate a wallet key or id for logging."""
    s = (value or "").strip()
    return s[:keep] + "..." if len(s) > keep else s


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Move structlog's 'event' to event_type (e.g. "ingest_done")."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def _redact_wallet_keys(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Shorten wallet keys in context; already-short values pass through."""
    for key in SECRET_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = short_key(value)
    return event_dict


def configure_structlog() -> None:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_timestamp,
        _event_type,
        _redact_wallet_keys,
    ]
    if LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Logger for a zapboard module, with the module name bound as 'logger'.

        logger = get_logger(__name__)
        logger.info("ingest_done", accepted=12, duplicates=0, rejected=1, total=40)
        logger.warning("normalize_rejected", record_id="abc", reason="missing amount")
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_wallet(wallet_id: str) -> structlog.BoundLogger:
    """Logger for one LNbits wallet; events like scan_wallet_done carry its short key."""
    return get_logger("zapboard.wallet").bind(wallet_id=short_key(wallet_id))
