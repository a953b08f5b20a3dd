"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Fake 주입 (설정 클라이언트 / 실패 카운터 / 프로브)

금지:
- 실제 Redis / 설정 API / 외부 HTTP 호출
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.core.exceptions import (  # noqa: E402
    ConfigNotFoundException,
    ProbeException,
    ProbeTimeoutException,
)
from src.schemas.blacklist_schema import BlackListThreshold, ForbiddenHostname  # noqa: E402
from src.services.impl.config_client import ForbiddenHostnamesKey  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


@dataclass
class FakeConfigClient:
    """블랙리스트 엔진 Unit 테스트용 설정 클라이언트

    - 금지 목록을 JSON 호환 dict 리스트로 보관 (실제 저장소처럼 매 조회마다 새 객체)
    - 호출 횟수 기록
    """

    forbidden: list[dict[str, Any]] = field(default_factory=list)
    threshold: Optional[int] = 3
    get_forbidden_calls: int = 0
    get_threshold_calls: int = 0
    set_calls: list[tuple[str, Any]] = field(default_factory=list)
    error: Optional[Exception] = None

    async def get_forbidden_hostnames(self) -> list[ForbiddenHostname]:
        self.get_forbidden_calls += 1
        if self.error:
            raise self.error
        return [ForbiddenHostname(**entry) for entry in self.forbidden]

    async def get_blacklist_threshold(self) -> BlackListThreshold:
        self.get_threshold_calls += 1
        if self.threshold is None:
            raise ConfigNotFoundException("blacklist-threshold")
        return BlackListThreshold(threshold=self.threshold)

    async def set(self, key: str, value: Any) -> None:
        self.set_calls.append((key, value))
        if key == ForbiddenHostnamesKey:
            self.forbidden = [entry.model_dump() for entry in value]

    def hostnames(self) -> list[str]:
        return [entry["hostname"] for entry in self.forbidden]


@dataclass
class FakeCounterCache:
    """실패 카운터 더미 캐시"""

    store: dict[str, int] = field(default_factory=dict)
    get_calls: int = 0
    set_calls: list[tuple[str, int, Any]] = field(default_factory=list)
    error: Optional[Exception] = None

    async def get_int64(self, key: str) -> int:
        self.get_calls += 1
        if self.error:
            raise self.error
        return self.store.get(key, 0)

    async def set_int64(self, key: str, value: int, ttl: Any) -> None:
        self.set_calls.append((key, value, ttl))
        if self.error:
            raise self.error
        self.store[key] = value


class FakeProber:
    """프로브 결과를 고정한 더미 프로브 ("timeout" | "responded" | "error")"""

    def __init__(self, outcome: str = "timeout"):
        self.outcome = outcome
        self.calls: list[str] = []

    async def get(self, origin: str):
        self.calls.append(origin)
        if self.outcome == "timeout":
            raise ProbeTimeoutException(origin, 10.0)
        if self.outcome == "error":
            raise ProbeException(origin, "ConnectError: connection refused")
        return object()


@pytest.fixture
def fake_config_client() -> FakeConfigClient:
    return FakeConfigClient()


@pytest.fixture
def fake_counter_cache() -> FakeCounterCache:
    return FakeCounterCache()


@pytest.fixture
def fake_prober() -> FakeProber:
    return FakeProber()
