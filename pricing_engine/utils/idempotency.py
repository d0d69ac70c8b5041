import json
from pricing_engine.core.redis import get_redis
from pricing_engine.core.config import settings

async def get_idempotent(key: str):
    if not key:
        return None
    redis = get_redis()
    if redis is None:
        return None
    v = await redis.get(f"idemp:{key}")
    return json.loads(v) if v else None

async def set_idempotent(key: str, value: dict):
    redis = get_redis()
    if not key or redis is None:
        return
    await redis.set(f"idemp:{key}", json.dumps(value, default=str), ex=settings.IDEMPOTENCY_TTL)
