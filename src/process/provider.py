"""프로세스 기능(capability) 제공자

프로세스는 필요한 기능(Feature)을 선언하고, Provider가 설정으로부터
해당 기능의 구현체를 만들어 initialize() 시점에 주입합니다.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional

from redis.asyncio import Redis

from src.core.config import Settings, settings as default_settings
from src.core.logging import logger
from src.crawlers.http_client import LivenessProber
from src.events.subscriber import RedisEventSubscriber
from src.services.impl.config_client import ConfigClient
from src.services.impl.counter_cache import FailureCounterCache


class Feature(str, Enum):
    EVENT = "event"
    CONFIG = "config"
    CACHE = "cache"
    CRAWLING = "crawling"


class Provider:
    """설정 기반 기능 팩토리 (생성한 리소스는 close()에서 정리)"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self._cache_redis: Optional[Redis] = None
        self._closers: List = []

    def _get_cache_redis(self) -> Redis:
        if self._cache_redis is None:
            self._cache_redis = Redis.from_url(
                self.settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=self.settings.redis_socket_timeout_s,
                socket_timeout=self.settings.redis_socket_timeout_s,
            )
            self._closers.append(self._cache_redis.aclose)
        return self._cache_redis

    def cache(self, name: str) -> FailureCounterCache:
        return FailureCounterCache(name, redis_client=self._get_cache_redis())

    def config_client(self, keys: Iterable[str]) -> ConfigClient:
        client = ConfigClient(
            keys,
            self.settings.config_api_url,
            timeout_s=self.settings.config_api_timeout_s,
        )
        self._closers.append(client.close)
        return client

    def http_client(self) -> LivenessProber:
        prober = LivenessProber(
            timeout_s=self.settings.probe_timeout_s,
            proxy_url=self.settings.probe_proxy_url,
        )
        self._closers.append(prober.close)
        return prober

    def subscriber(self) -> RedisEventSubscriber:
        # BRPOP이 poll_timeout 동안 블록하므로 socket_timeout은 두지 않음
        redis_client = Redis.from_url(
            self.settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=self.settings.redis_socket_timeout_s,
        )
        subscriber = RedisEventSubscriber(
            redis_client,
            bindings=self.settings.event_bindings,
            max_attempts=self.settings.event_max_attempts,
            poll_timeout_s=self.settings.event_poll_timeout_s,
            concurrency=self.settings.event_concurrency,
        )
        self._closers.append(subscriber.close)
        return subscriber

    async def close(self) -> None:
        while self._closers:
            closer = self._closers.pop()
            try:
                await closer()
            except Exception as e:
                # 종료 중 예외는 나머지 정리를 막지 않도록 로그만 남김
                logger.warning(f"[PROVIDER] Failed to close resource: {type(e).__name__}: {e}")
