from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379/0"

    CONFIG_SERVICE_URL: str = "http://localhost:5000"
    CONFIG_FETCH_TIMEOUT: float = 5.0
    CONFIG_CACHE_TTL: int = 300  # 5 minutes

    IDEMPOTENCY_TTL: int = 300  # 5 minutes
    QUOTE_CACHE_TTL: int = 60   # 60 seconds

    WEBHOOK_URL: str = "http://localhost:5000/api/quotes/accepted"
    WEBHOOK_TIMEOUT: int = 10
    WEBHOOK_RETRIES: int = 3

    CELERY_BROKER_URL: str = "redis://localhost:6379/1"
    CELERY_BACKEND: str = "redis://localhost:6379/2"

    DEFAULT_CONTRACT_MONTHS: int = 12
    SESSION_TTL: int = 3600  # idle quote sessions, 1 hour
    ACCEPTED_SESSION_TTL: int = 300  # handed-off sessions, 5 minutes

    API_TITLE: str = "Cleaning Services Pricing Engine"
    API_DESCRIPTION: str = "Quote computation for restroom, floor, window, drain and janitorial service lines"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
