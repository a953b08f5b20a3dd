"""API 엔드포인트 패키지 - export only."""

from .routes import config_router, health_router, get_config_store

__all__ = ["config_router", "health_router", "get_config_store"]
