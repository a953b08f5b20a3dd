"""프로세스 정의/기능 제공자 - export only."""

from .blacklister import BlacklisterProcess
from .provider import Feature, Provider

__all__ = ["BlacklisterProcess", "Feature", "Provider"]
