"""프로세스 정의 / Provider / 워커 테스트"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.core.config import Settings
from src.engine import BlacklistingEngine, HostnameLocks
from src.events.subscriber import RedisEventSubscriber, TimeoutURLExchange
from src.process import BlacklisterProcess, Feature, Provider
from src.schemas.blacklist_schema import TimeoutURLEvent
from src.services.impl.config_client import BlackListThresholdKey, ForbiddenHostnamesKey
from src.worker import run_process

from tests.conftest import FakeConfigClient, FakeCounterCache, FakeProber


class FakeProvider:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.cache_names: list[str] = []
        self.config_keys: list[list[str]] = []
        self.fake_subscriber = MagicMock()
        self.fake_subscriber.run = AsyncMock()

    def cache(self, name):
        self.cache_names.append(name)
        return FakeCounterCache()

    def config_client(self, keys):
        self.config_keys.append(list(keys))
        return FakeConfigClient(threshold=1)

    def http_client(self):
        return FakeProber("timeout")

    def subscriber(self):
        return self.fake_subscriber


class TestBlacklisterProcess:
    def test_declares_features(self):
        process = BlacklisterProcess()

        assert process.name == "blacklister"
        assert set(process.features) == {Feature.EVENT, Feature.CONFIG, Feature.CACHE, Feature.CRAWLING}

    def test_initialize_requests_capabilities(self):
        provider = FakeProvider(Settings())
        process = BlacklisterProcess()

        process.initialize(provider)

        assert provider.cache_names == ["down-hostname"]
        assert provider.config_keys == [[ForbiddenHostnamesKey, BlackListThresholdKey]]
        assert isinstance(process.engine, BlacklistingEngine)
        assert process.engine.hostname_locks is None

    def test_initialize_with_hostname_serialization(self):
        provider = FakeProvider(Settings(blacklister_serialize_hostnames=True))
        process = BlacklisterProcess()

        process.initialize(provider)

        assert isinstance(process.engine.hostname_locks, HostnameLocks)

    def test_subscribers(self):
        process = BlacklisterProcess()
        process.initialize(FakeProvider(Settings()))

        (definition,) = process.subscribers()

        assert definition.exchange == TimeoutURLExchange
        assert definition.queue == "blacklistingQueue"
        assert definition.model is TimeoutURLEvent

    @pytest.mark.asyncio
    async def test_handler_delegates_to_engine(self):
        process = BlacklisterProcess()
        process.initialize(FakeProvider(Settings()))

        await process.handle_timeout_url_event(TimeoutURLEvent(url="http://example.onion"))

        assert process.engine.config_client.forbidden == [{"hostname": "example.onion"}]

    @pytest.mark.asyncio
    async def test_handler_requires_initialize(self):
        with pytest.raises(RuntimeError):
            await BlacklisterProcess().handle_timeout_url_event(TimeoutURLEvent(url="http://example.onion"))


class TestRunProcess:
    @pytest.mark.asyncio
    async def test_registers_subscribers_and_runs(self):
        provider = FakeProvider(Settings())

        await run_process(BlacklisterProcess(), provider)

        provider.fake_subscriber.subscribe.assert_called_once()
        provider.fake_subscriber.run.assert_awaited_once()


class TestProvider:
    def test_builds_capabilities_from_settings(self):
        settings = Settings(
            config_api_url="http://config-api:8080",
            probe_timeout_s=3.0,
            event_max_attempts=7,
        )
        provider = Provider(settings)

        with patch("src.process.provider.Redis") as mock_redis:
            cache = provider.cache("down-hostname")
            subscriber = provider.subscriber()

        config_client = provider.config_client([ForbiddenHostnamesKey])
        prober = provider.http_client()

        assert cache.name == "down-hostname"
        assert cache.redis_client is mock_redis.from_url.return_value
        assert isinstance(subscriber, RedisEventSubscriber)
        assert subscriber.max_attempts == 7
        assert config_client.keys == frozenset([ForbiddenHostnamesKey])
        assert prober.timeout_s == 3.0

    @pytest.mark.asyncio
    async def test_close_releases_everything(self):
        provider = Provider(Settings())

        with patch("src.process.provider.Redis") as mock_redis:
            mock_redis.from_url.return_value.aclose = AsyncMock()
            provider.cache("down-hostname")
            provider.subscriber()
        provider.config_client([ForbiddenHostnamesKey])
        provider.http_client()

        await provider.close()

        assert provider._closers == []
        assert mock_redis.from_url.return_value.aclose.await_count == 2
