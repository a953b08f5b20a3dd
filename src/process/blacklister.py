"""blacklister 프로세스 정의 - 기능 선언, 초기화, 구독자"""

from __future__ import annotations

from typing import List, Optional

from src.core.config import settings
from src.engine import BlacklistingEngine, HostnameLocks
from src.events.subscriber import SubscriberDef, TimeoutURLExchange
from src.schemas.blacklist_schema import TimeoutURLEvent
from src.services.impl.config_client import BlackListThresholdKey, ForbiddenHostnamesKey

from .provider import Feature, Provider


class BlacklisterProcess:
    """timeout-url 이벤트를 받아 hostname 블랙리스트를 관리하는 프로세스"""

    name = "blacklister"
    features = [Feature.EVENT, Feature.CONFIG, Feature.CACHE, Feature.CRAWLING]

    def __init__(self) -> None:
        self.engine: Optional[BlacklistingEngine] = None
        self.settings = settings

    def initialize(self, provider: Provider) -> None:
        self.settings = provider.settings
        hostname_cache = provider.cache(self.settings.hostname_cache_name)
        config_client = provider.config_client([ForbiddenHostnamesKey, BlackListThresholdKey])
        prober = provider.http_client()

        hostname_locks = HostnameLocks() if self.settings.blacklister_serialize_hostnames else None
        self.engine = BlacklistingEngine(config_client, hostname_cache, prober, hostname_locks)

    def subscribers(self) -> List[SubscriberDef]:
        queue = self.settings.event_bindings.get(TimeoutURLExchange, ["blacklistingQueue"])[0]
        return [
            SubscriberDef(
                exchange=TimeoutURLExchange,
                queue=queue,
                handler=self.handle_timeout_url_event,
                model=TimeoutURLEvent,
            ),
        ]

    async def handle_timeout_url_event(self, event: TimeoutURLEvent) -> None:
        if self.engine is None:
            raise RuntimeError("BlacklisterProcess is not initialized")
        await self.engine.on_timeout_report(event)
