# digest/discordFunctions.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass
from typing import Dict

import aiohttp

from .errors import DeliveryError

logger = logging.getLogger(__name__)

# Seconds, for the whole request: connect, send, headers and body.
# Bounds the delivery leg only; Plex calls keep plexapi's default.
WEBHOOK_TIMEOUT = 3


@dataclass(frozen=True)
class WebhookPayload:
    content: str
    username: str

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class WebhookResponse:
    status_code: int
    reason: str
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code < 400


async def _postReport(webhookUrl: str, payload: WebhookPayload) -> WebhookResponse:
    timeout = aiohttp.ClientTimeout(total=WEBHOOK_TIMEOUT)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        # json= sets Content-Type: application/json
        async with session.post(webhookUrl, json=payload.as_dict()) as resp:
            text = await resp.text(errors="replace")
            return WebhookResponse(status_code=resp.status, reason=resp.reason or "", text=text)


def sendReport(webhookUrl: str, content: str, username: str) -> WebhookResponse:
    """
    POST the digest to the webhook once. No retries.

    A non-2xx answer is returned and logged, not raised: the attempt was made
    and its outcome reported. Going past WEBHOOK_TIMEOUT in total, or a
    transport failure (DNS, refused connection, TLS), raises DeliveryError.
    """
    payload = WebhookPayload(content=content, username=username)
    try:
        resp = asyncio.run(_postReport(webhookUrl, payload))
    except asyncio.TimeoutError as e:
        raise DeliveryError(f"Webhook did not complete within {WEBHOOK_TIMEOUT}s") from e
    except aiohttp.ClientError as e:
        raise DeliveryError(f"Webhook post failed: {e}") from e

    if resp.ok:
        logger.info("Webhook accepted digest (%s)", resp.status_code)
    else:
        logger.warning("Webhook answered %s %s: %s", resp.status_code, resp.reason, resp.text[:200])
    return resp
