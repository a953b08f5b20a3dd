"""Services implementation package."""

from .config_client import BlackListThresholdKey, ConfigClient, ForbiddenHostnamesKey
from .config_store import ConfigStore
from .counter_cache import NO_TTL, CacheTTL, FailureCounterCache

__all__ = [
    "ConfigClient",
    "ConfigStore",
    "FailureCounterCache",
    "CacheTTL",
    "NO_TTL",
    "ForbiddenHostnamesKey",
    "BlackListThresholdKey",
]
