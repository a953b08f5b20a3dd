"""설정/캐시 서비스 - export only."""

from .impl import (
    NO_TTL,
    BlackListThresholdKey,
    CacheTTL,
    ConfigClient,
    ConfigStore,
    FailureCounterCache,
    ForbiddenHostnamesKey,
)

__all__ = [
    "ConfigClient",
    "ConfigStore",
    "FailureCounterCache",
    "CacheTTL",
    "NO_TTL",
    "ForbiddenHostnamesKey",
    "BlackListThresholdKey",
]
