"""Best-effort forwarding of updated requests to an external webhook."""

import os
import logging
import httpx
from app.exceptions import NotificationError

logger = logging.getLogger(__name__)

NOTIFICATION_WEBHOOK_URL = os.environ.get("NOTIFICATION_WEBHOOK_URL", "")
NOTIFICATION_TIMEOUT = float(os.environ.get("NOTIFICATION_TIMEOUT", "5"))


async def _post_payload(url: str, payload: dict) -> None:
    async with httpx.AsyncClient(timeout=NOTIFICATION_TIMEOUT) as client:
        try:
            resp = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise NotificationError(f"Webhook request failed: {e!r}")

    if resp.status_code >= 300:
        raise NotificationError(f"Webhook responded with HTTP {resp.status_code}: {resp.text[:200]}")


async def forward_request_update(payload: dict, url: str = None) -> bool:
    """
    Send the full updated request to the notification webhook.

    One attempt, no retry. Failures are logged and swallowed so the caller's
    update is never affected. Returns True when the webhook accepted the payload.
    """
    url = url or NOTIFICATION_WEBHOOK_URL
    request_id = payload.get("request_id")

    if not url:
        logger.info(f"Notification webhook not configured, skipping forward of {request_id}")
        return False

    try:
        await _post_payload(url, payload)
    except NotificationError as e:
        logger.error(f"❌ Failed to forward request {request_id} to webhook: {e.message}")
        return False
    except Exception as e:
        logger.exception(f"❌ Unexpected error forwarding request {request_id}: {e}")
        return False

    logger.info(f"✅ Forwarded request {request_id} to notification webhook")
    return True
