from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from pricing_engine.api import configs, quotes, sessions
from pricing_engine.core.config import settings
from pricing_engine.core.redis import init_redis, close_redis, get_redis, redis_healthy
from pricing_engine.core.metrics import request_count, request_duration, get_metrics_text
from redis.exceptions import RedisError
import time
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception:
            self._record(request, 500, start_time)
            raise
        self._record(request, response.status_code, start_time)
        return response

    @staticmethod
    def _record(request: Request, status: int, start_time: float):
        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)
        request_count.labels(
            method=request.method,
            endpoint=endpoint,
            status=status
        ).inc()
        request_duration.labels(
            method=request.method,
            endpoint=endpoint
        ).observe(time.time() - start_time)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.API_TITLE} {settings.API_VERSION}")
    try:
        await init_redis()
    except (RedisError, OSError):
        logger.warning("Running without Redis; quotes and configs will not be cached")

    yield

    await close_redis()
    logger.info("Pricing engine stopped")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)

app.include_router(configs.router)
app.include_router(quotes.router)
app.include_router(sessions.router)


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check():
    cache_up = await redis_healthy()

    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "dependencies": {
            "redis": "connected" if cache_up else "disconnected",
        }
    }


@app.get("/readiness", tags=["monitoring"])
async def readiness_check():
    # the engine runs on compiled-in defaults, so Redis only gates caching
    return {
        "ready": True,
        "service": settings.API_TITLE,
        "cache": "enabled" if get_redis() is not None else "disabled",
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics",
        "services": "/services",
    }
