import asyncio

from celery import Celery
from pricing_engine.core.config import settings
from pricing_engine.services.webhook import send_webhook

celery_app = Celery(
    "worker",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_BACKEND,
)
celery_app.conf.task_routes = {"pricing_engine.services.tasks.deliver_accepted_quote": {"queue": "handoff"}}


class HandoffFailed(Exception):
    pass


@celery_app.task(bind=True, max_retries=3)
def deliver_accepted_quote(self, payload: dict):
    try:
        if not asyncio.run(send_webhook(payload)):
            raise HandoffFailed(f"Quote handoff failed for session {payload.get('session_id')}")
    except HandoffFailed as e:
        retry_kwargs = {"countdown": 2 ** self.request.retries}
        raise self.retry(exc=e, **retry_kwargs)
    return payload.get("session_id")
