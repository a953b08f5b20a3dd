"""API routes package."""

from .config_routes import router as config_router, get_config_store
from .health_routes import router as health_router
