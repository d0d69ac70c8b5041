"""Per-service pricing configuration, fetched from the admin config store.

The provider is owned by the application and handed to sessions and
endpoints. It keeps the last good configuration per service, collapses
concurrent fetches for the same service into one request and falls back to
the compiled-in defaults when the store is unreachable or returns nothing.
"""
import asyncio
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from pricing_engine.core.config import settings
from pricing_engine.core.enums import ConfigSource, ServiceId
from pricing_engine.core.metrics import cache_hits, cache_misses, config_fetch_duration, config_fetches
from pricing_engine.core.redis import get_redis
from pricing_engine.schemas.pricing_config import ServiceConfig
from pricing_engine.services.registry import get_calculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedConfig:
    service_id: ServiceId
    config: ServiceConfig
    source: ConfigSource
    warning: Optional[str] = None


class HttpConfigSource:
    """Reads the active configuration document for a service over HTTP."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.CONFIG_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.CONFIG_FETCH_TIMEOUT

    async def fetch(self, service_id: ServiceId) -> Optional[Dict[str, Any]]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.base_url}/api/service-configs/active",
                params={"serviceId": service_id.value},
            )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return extract_config_document(response.json())


def extract_config_document(body: Any) -> Optional[Dict[str, Any]]:
    """Unwrap ``{"data": {"config": {...}}}`` style envelopes."""
    data = body.get("data", body) if isinstance(body, dict) else body
    if isinstance(data, list):
        data = data[0] if data else None
    if not isinstance(data, dict):
        return None
    config = data.get("config", data)
    return config if isinstance(config, dict) and config else None


class ConfigurationProvider:

    def __init__(self, source=None, *, cache_ttl: Optional[int] = None, use_redis: bool = True):
        self.source = source or HttpConfigSource()
        self.cache_ttl = settings.CONFIG_CACHE_TTL if cache_ttl is None else cache_ttl
        self.use_redis = use_redis
        self._resolved: Dict[ServiceId, ResolvedConfig] = {}
        self._inflight: Dict[ServiceId, asyncio.Future] = {}

    def peek(self, service_id) -> ResolvedConfig:
        """Current config without waiting; defaults until a fetch resolves."""
        service_id = ServiceId(service_id)
        resolved = self._resolved.get(service_id)
        if resolved is not None:
            return resolved
        return ResolvedConfig(
            service_id=service_id,
            config=get_calculator(service_id).default_config(),
            source=ConfigSource.DEFAULT,
        )

    async def get(self, service_id) -> ResolvedConfig:
        service_id = ServiceId(service_id)
        resolved = self._resolved.get(service_id)
        if resolved is not None:
            return resolved
        return await self._load(service_id, refresh=False)

    async def refresh(self, service_id) -> ResolvedConfig:
        return await self._load(ServiceId(service_id), refresh=True)

    def invalidate(self, service_id=None) -> None:
        if service_id is None:
            self._resolved.clear()
        else:
            self._resolved.pop(ServiceId(service_id), None)

    async def _load(self, service_id: ServiceId, refresh: bool) -> ResolvedConfig:
        task = self._inflight.get(service_id)
        if task is None:
            task = asyncio.ensure_future(self._fetch(service_id, refresh))
            self._inflight[service_id] = task

            def _done(finished, service_id=service_id):
                if self._inflight.get(service_id) is finished:
                    del self._inflight[service_id]

            task.add_done_callback(_done)
        return await asyncio.shield(task)

    async def _fetch(self, service_id: ServiceId, refresh: bool) -> ResolvedConfig:
        calculator = get_calculator(service_id)

        if not refresh:
            cached = await self._read_cache(service_id)
            if cached is not None:
                try:
                    config = calculator.config_model.model_validate(cached)
                    return self._store(ResolvedConfig(service_id, config, ConfigSource.CACHE))
                except ValidationError as e:
                    logger.warning(f"Ignoring invalid cached config for {service_id}: {e}")

        start_time = time.time()
        try:
            document = await self.source.fetch(service_id)
        except Exception as e:
            config_fetches.labels(service=service_id.value, outcome="error").inc()
            return self._fallback(service_id, f"Config fetch failed for {service_id}: {e}")
        finally:
            config_fetch_duration.labels(service=service_id.value).observe(time.time() - start_time)

        if document is None:
            config_fetches.labels(service=service_id.value, outcome="missing").inc()
            return self._fallback(service_id, f"No active config for {service_id}")

        try:
            config = calculator.config_model.model_validate(document)
        except ValidationError as e:
            config_fetches.labels(service=service_id.value, outcome="invalid").inc()
            return self._fallback(service_id, f"Invalid config for {service_id}: {e.error_count()} error(s)")

        config_fetches.labels(service=service_id.value, outcome="success").inc()
        await self._write_cache(service_id, document)
        logger.info(f"Loaded pricing config for {service_id}")
        return self._store(ResolvedConfig(service_id, config, ConfigSource.REMOTE))

    def _store(self, resolved: ResolvedConfig) -> ResolvedConfig:
        self._resolved[resolved.service_id] = resolved
        return resolved

    def _fallback(self, service_id: ServiceId, warning: str) -> ResolvedConfig:
        logger.warning(warning)
        previous = self._resolved.get(service_id)
        if previous is not None and previous.source is not ConfigSource.DEFAULT:
            return self._store(ResolvedConfig(service_id, previous.config, previous.source, warning))
        config = get_calculator(service_id).default_config()
        return self._store(ResolvedConfig(service_id, config, ConfigSource.DEFAULT, warning))

    async def _read_cache(self, service_id: ServiceId) -> Optional[Dict[str, Any]]:
        redis = get_redis() if self.use_redis else None
        if redis is None:
            return None
        cache_key = f"config:{service_id.value}"
        try:
            cached = await redis.get(cache_key)
        except Exception as e:
            logger.warning(f"Config cache retrieval failed: {e}")
            return None
        if not cached:
            cache_misses.labels(cache_key="config").inc()
            return None
        try:
            document = json.loads(cached)
        except ValueError as e:
            logger.warning(f"Ignoring unreadable cached config for {service_id}: {e}")
            cache_misses.labels(cache_key="config").inc()
            return None
        cache_hits.labels(cache_key="config").inc()
        return document

    async def _write_cache(self, service_id: ServiceId, document: Dict[str, Any]) -> None:
        redis = get_redis() if self.use_redis else None
        if redis is None or self.cache_ttl <= 0:
            return
        try:
            await redis.set(
                f"config:{service_id.value}",
                json.dumps(document, default=str),
                ex=self.cache_ttl,
            )
        except Exception as e:
            logger.warning(f"Config cache write failed: {e}")
