import httpx
import pytest

from pricing_engine.services import tasks, webhook


@pytest.fixture
def no_sleep(monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(webhook.asyncio, "sleep", fake_sleep)
    return delays


def mock_client(monkeypatch, handler):
    real_client = httpx.AsyncClient
    requests = []

    def recording(request):
        requests.append(request)
        return handler(request)

    def factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(recording)
        return real_client(*args, **kwargs)

    monkeypatch.setattr(webhook.httpx, "AsyncClient", factory)
    return requests


@pytest.mark.webhooks
class TestSendWebhook:

    async def test_success(self, monkeypatch, no_sleep):
        requests = mock_client(monkeypatch, lambda request: httpx.Response(200))
        ok = await webhook.send_webhook({"session_id": "s1"}, retries=3, url="http://docs.test/hook")
        assert ok is True
        assert len(requests) == 1
        assert no_sleep == []

    async def test_retries_with_backoff(self, monkeypatch, no_sleep):
        responses = iter([httpx.Response(503), httpx.Response(500), httpx.Response(201)])
        requests = mock_client(monkeypatch, lambda request: next(responses))
        ok = await webhook.send_webhook({"session_id": "s1"}, retries=3, url="http://docs.test/hook")
        assert ok is True
        assert len(requests) == 3
        assert no_sleep == [1.0, 2.0]

    async def test_gives_up(self, monkeypatch, no_sleep):
        def timeout(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        requests = mock_client(monkeypatch, timeout)
        ok = await webhook.send_webhook({"session_id": "s1"}, retries=2, url="http://docs.test/hook")
        assert ok is False
        assert len(requests) == 2


@pytest.mark.webhooks
class TestDeliveryTask:

    def test_returns_session_id(self, monkeypatch):
        async def delivered(payload):
            return True

        monkeypatch.setattr(tasks, "send_webhook", delivered)
        assert tasks.deliver_accepted_quote.run({"session_id": "s1"}) == "s1"

    def test_failed_delivery_is_retried(self, monkeypatch):
        retried = []

        async def undelivered(payload):
            return False

        def fake_retry(exc=None, countdown=None, **kwargs):
            retried.append(countdown)
            return exc

        monkeypatch.setattr(tasks, "send_webhook", undelivered)
        monkeypatch.setattr(tasks.deliver_accepted_quote, "retry", fake_retry)

        with pytest.raises(tasks.HandoffFailed):
            tasks.deliver_accepted_quote.run({"session_id": "s1"})
        assert retried == [1]
