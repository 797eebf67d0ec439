"""Slack incoming-webhook delivery.

One POST per message, JSON body ``{"text": ...}``. No retries: a run
delivers at most once.
"""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Raised when the webhook cannot be reached at all."""


class SlackChannel:
    """Posts finished messages to Slack incoming webhooks."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def deliver(self, text: str, endpoint: str) -> bool:
        """Send ``text`` to the webhook at ``endpoint``; True on a 2xx response.

        A non-2xx response is logged and reported as False. Transport
        failures and malformed URLs raise DeliveryError.
        """
        logger.info("Send message: %s", text)

        try:
            resp = await self._client.post(endpoint, json={"text": text})
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise DeliveryError(f"Slack webhook unreachable: {exc}") from exc

        logger.info("Response: %d", resp.status_code)
        if resp.is_success:
            logger.info("Successfully notified to slack")
            return True

        logger.warning("Slack webhook returned %d: %s", resp.status_code, resp.text[:200])
        return False

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> SlackChannel:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
