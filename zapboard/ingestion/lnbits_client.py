"""
LNbits payments client.

Fetches a wallet's recent payments (GET /api/v1/payments?limit=N with the
wallet's invoice key in X-Api-Key). Returns raw payment dicts for the
normalizer; amounts stay in provider units (msat). Any transport failure,
non-2xx status or unexpected body is raised as LnbitsError.
"""

from __future__ import annotations

from typing import Any

import httpx

from zapboard.config.env import DEFAULT_FETCH_LIMIT, DEFAULT_TIMEOUT_SEC
from zapboard.core.exceptions import LnbitsError
from zapboard.ledger.normalizer import parse_payment_time
from zapboard.zap_logging import get_logger, short_key

logger = get_logger(__name__)

PAYMENTS_PATH = "/api/v1/payments"


def _payment_time(payment: Any) -> int | None:
    if not isinstance(payment, dict):
        return None
    return parse_payment_time(payment.get("time"))


class LnbitsClient:
    """
    Async client for the LNbits wallet API.

    Use as ``async with LnbitsClient(url) as client: ...`` or call aclose().
    A transport can be injected (e.g. httpx.MockTransport in tests).
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        limit: int = DEFAULT_FETCH_LIMIT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.limit = limit
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "LnbitsClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_payments(self, inkey: str) -> list[dict[str, Any]]:
        """Return up to ``limit`` most recent payments of the wallet owning inkey."""
        try:
            resp = await self._client.get(
                PAYMENTS_PATH,
                params={"limit": self.limit},
                headers={"X-Api-Key": inkey},
            )
        except httpx.HTTPError as e:
            raise LnbitsError(f"Error getting payments: {e}") from e
        if resp.status_code >= 400:
            raise LnbitsError(
                f"Error getting payments (status: {resp.status_code})",
                status_code=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise LnbitsError("Error getting payments: response is not JSON", status_code=resp.status_code) from e
        if not isinstance(data, list):
            raise LnbitsError("Error getting payments: expected a JSON list", status_code=resp.status_code)
        logger.debug("lnbits_payments_fetched", wallet_key=short_key(inkey), count=len(data))
        return data

    async def get_payments_since(self, inkey: str, since: float) -> list[dict[str, Any]]:
        """
        Return fetched payments with time strictly greater than since (seconds).

        Times are parsed like the normalizer does (Unix seconds or ISO 8601).
        Payments whose time cannot be parsed are kept; the normalizer rejects them.
        """
        payments = await self.get_payments(inkey)
        kept = []
        for payment in payments:
            ts = _payment_time(payment)
            if ts is None or ts > since:
                kept.append(payment)
        return kept
