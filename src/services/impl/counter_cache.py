"""실패 카운터 캐시 - hostname별 정수 카운터 (redis.asyncio)"""
from enum import Enum
from typing import Optional, Union

from redis.asyncio import Redis

from src.core.config import settings
from src.core.logging import logger
from src.core.exceptions import CacheSerializationException, CacheUnavailableException


class CacheTTL(Enum):
    """캐시 만료 정책 sentinel"""
    NO_TTL = "no-ttl"


NO_TTL = CacheTTL.NO_TTL


class FailureCounterCache:
    """이름이 붙은 정수 캐시

    키는 `{name}:{key}` 형태로 저장됩니다. (예: `down-hostname:example.onion`)
    """

    def __init__(self, name: str, redis_client: Optional[Redis] = None):
        self.name = name
        if redis_client is None:
            redis_client = Redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=settings.redis_socket_timeout_s,
                socket_timeout=settings.redis_socket_timeout_s,
            )
        self.redis_client = redis_client

    def _key(self, key: str) -> str:
        return f"{self.name}:{key}"

    async def get_int64(self, key: str) -> int:
        """
        정수 값 조회

        Args:
            key: 캐시 키 (hostname)

        Returns:
            저장된 값, 없으면 0
        """
        cache_key = self._key(key)
        try:
            value = await self.redis_client.get(cache_key)
        except Exception as e:
            logger.error(f"[CACHE] Read error for key {cache_key}: {e}")
            raise CacheUnavailableException(
                reason="Cache read failed",
                details={"key": cache_key, "error": str(e)}
            ) from e

        if value is None:
            return 0
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise CacheSerializationException(cache_key, f"not an integer: {value!r}") from e

    async def set_int64(self, key: str, value: int, ttl: Union[CacheTTL, int] = NO_TTL) -> None:
        """
        정수 값 저장

        Args:
            key: 캐시 키 (hostname)
            value: 저장할 값
            ttl: 만료(초) 또는 NO_TTL
        """
        cache_key = self._key(key)
        try:
            if ttl is NO_TTL:
                await self.redis_client.set(cache_key, int(value))
            else:
                await self.redis_client.set(cache_key, int(value), ex=int(ttl))
        except Exception as e:
            logger.error(f"[CACHE] Write error for key {cache_key}: {e}")
            raise CacheUnavailableException(
                reason="Cache write failed",
                details={"key": cache_key, "error": str(e)}
            ) from e

        logger.debug(f"[CACHE] {cache_key}={value} (ttl={'none' if ttl is NO_TTL else ttl})")

    async def close(self) -> None:
        await self.redis_client.aclose()
