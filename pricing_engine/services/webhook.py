import httpx
import asyncio
import logging
import time
from pricing_engine.core.config import settings
from pricing_engine.core.metrics import webhook_deliveries, webhook_duration

logger = logging.getLogger(__name__)


async def send_webhook(payload: dict, retries: int | None = None, url: str | None = None) -> bool:
    """Deliver an accepted quote to the document/storage collaborator."""
    if retries is None:
        retries = settings.WEBHOOK_RETRIES
    url = url or settings.WEBHOOK_URL
    session_id = payload.get("session_id")

    backoff = 1.0

    for attempt in range(1, retries + 1):
        start_time = time.time()
        status = "error"
        try:
            async with httpx.AsyncClient(timeout=settings.WEBHOOK_TIMEOUT) as client:
                response = await client.post(url, json=payload)

            if 200 <= response.status_code < 300:
                status = "success"
                logger.info(f"Quote handoff succeeded for session {session_id}")
                return True
            logger.warning(
                f"Quote handoff failed (attempt {attempt}/{retries}): "
                f"Status {response.status_code} for session {session_id}"
            )
        except httpx.TimeoutException:
            status = "timeout"
            logger.warning(f"Quote handoff timeout (attempt {attempt}/{retries}) for session {session_id}")
        except httpx.HTTPError as e:
            logger.warning(
                f"Quote handoff error (attempt {attempt}/{retries}): {e} for session {session_id}"
            )
        finally:
            webhook_deliveries.labels(status=status, retry_count=str(attempt - 1)).inc()
            webhook_duration.labels(status=status).observe(time.time() - start_time)

        if attempt < retries:
            await asyncio.sleep(backoff)
            backoff *= 2.0

    logger.error(f"Quote handoff failed after {retries} attempts for session {session_id}")
    return False
