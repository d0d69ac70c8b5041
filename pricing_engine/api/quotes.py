"""Stateless quote endpoint with Redis caching"""
import json
import logging
from fastapi import APIRouter, Depends

from pricing_engine.schemas.quote import QuoteRequest, QuoteResponse
from pricing_engine.services.config_loader import ConfigurationProvider
from pricing_engine.services.engine.overrides import OverrideLayer
from pricing_engine.services.registry import compute_quote
from pricing_engine.core.config import settings
from pricing_engine.core.dependencies import get_config_provider
from pricing_engine.core.errors import resolve_calculator
from pricing_engine.core.metrics import cache_hits, cache_misses
from pricing_engine.core.redis import get_redis
from pricing_engine.core.response_builders import build_quote_response
from pricing_engine.utils.hashing import cache_key

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("/{service_id}/calc", response_model=QuoteResponse)
async def calc_quote(
    service_id: str,
    req: QuoteRequest,
    provider: ConfigurationProvider = Depends(get_config_provider),
):
    calculator = resolve_calculator(service_id)

    resolved = await provider.get(calculator.service_id)
    key = cache_key("quote", {
        "service_id": calculator.service_id.value,
        "inputs": req.inputs,
        "overrides": {field.value: value for field, value in req.overrides.items()},
        "config": resolved.config.model_dump(),
    })
    redis = get_redis()

    if redis is not None:
        try:
            cached = await redis.get(key)
            if cached:
                cache_hits.labels(cache_key="quote").inc()
                return QuoteResponse.model_validate(json.loads(cached))
            cache_misses.labels(cache_key="quote").inc()
        except Exception as e:
            logger.warning(f"Cache retrieval failed: {e}")

    outputs = compute_quote(calculator.service_id, req.inputs, resolved.config)
    overrides = OverrideLayer()
    for field, value in req.overrides.items():
        overrides.set(field, value)
    result = build_quote_response(
        outputs,
        overrides,
        resolved.source,
        [resolved.warning] if resolved.warning else [],
    )

    if redis is not None:
        try:
            await redis.set(
                key,
                json.dumps(result.model_dump(mode="json"), default=str),
                ex=settings.QUOTE_CACHE_TTL
            )
        except Exception as e:
            logger.warning(f"Cache write failed: {e}")

    return result
