from typing import Optional

from pricing_engine.services.config_loader import ConfigurationProvider
from pricing_engine.services.session import SessionStore

_provider: Optional[ConfigurationProvider] = None
_sessions: Optional[SessionStore] = None


def get_config_provider() -> ConfigurationProvider:
    global _provider
    if _provider is None:
        _provider = ConfigurationProvider()
    return _provider


def get_session_store() -> SessionStore:
    global _sessions
    if _sessions is None:
        _sessions = SessionStore()
    return _sessions
