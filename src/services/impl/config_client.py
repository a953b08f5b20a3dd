"""설정 API 클라이언트 (httpx)

- 금지 hostname 목록 / 블랙리스트 임계값을 설정 API에서 읽고 씁니다.
- 값은 매 호출마다 새로 읽습니다. (임계값은 이벤트 사이에 바뀔 수 있음)
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Optional

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from src.core.config import settings
from src.core.logging import logger
from src.core.exceptions import (
    ConfigException,
    ConfigNotFoundException,
    ConfigSerializationException,
    ConfigUnavailableException,
)
from src.schemas.blacklist_schema import BlackListThreshold, ForbiddenHostname


ForbiddenHostnamesKey = "forbidden-hostnames"
BlackListThresholdKey = "blacklist-threshold"

_forbidden_hostnames_adapter = TypeAdapter(List[ForbiddenHostname])


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


class ConfigClient:
    """설정 API 클라이언트

    선언한 키(keys)만 읽고 쓸 수 있습니다.
    """

    def __init__(
        self,
        keys: Iterable[str],
        base_url: Optional[str] = None,
        *,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.keys = frozenset(keys)
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.config_api_url,
            timeout=timeout_s or settings.config_api_timeout_s,
            transport=transport,
        )

    def _check_key(self, key: str) -> None:
        if key not in self.keys:
            raise ConfigException(
                f"Config key '{key}' is not declared by this client",
                "CONFIG_KEY_NOT_DECLARED",
                {"key": key, "declared": sorted(self.keys)},
            )

    async def get(self, key: str) -> bytes:
        """
        설정 값 원본 바이트 조회

        Raises:
            ConfigNotFoundException: 저장된 적 없는 키
            ConfigUnavailableException: 설정 API 통신 실패
        """
        self._check_key(key)
        try:
            resp = await self._client.get(f"/config/{key}")
        except httpx.HTTPError as e:
            logger.warning(f"[CONFIG_CLIENT] GET {key} failed: {type(e).__name__}: {e}")
            raise ConfigUnavailableException(
                reason=f"GET /config/{key} failed",
                details={"key": key, "error": repr(e)},
            ) from e

        if resp.status_code == 404:
            raise ConfigNotFoundException(key)
        if resp.status_code != 200:
            raise ConfigUnavailableException(
                reason=f"GET /config/{key} returned {resp.status_code}",
                details={"key": key, "status": resp.status_code},
            )
        return resp.content

    async def set(self, key: str, value: Any) -> None:
        """
        설정 값 저장 (JSON 직렬화 후 PUT)

        Args:
            key: 설정 키
            value: pydantic 모델, 모델 리스트, 또는 JSON 직렬화 가능한 값
        """
        self._check_key(key)
        try:
            body = json.dumps(_to_jsonable(value)).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise ConfigSerializationException(key, str(e)) from e

        try:
            resp = await self._client.put(
                f"/config/{key}",
                content=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.warning(f"[CONFIG_CLIENT] PUT {key} failed: {type(e).__name__}: {e}")
            raise ConfigUnavailableException(
                reason=f"PUT /config/{key} failed",
                details={"key": key, "error": repr(e)},
            ) from e

        if resp.status_code != 200:
            raise ConfigUnavailableException(
                reason=f"PUT /config/{key} returned {resp.status_code}",
                details={"key": key, "status": resp.status_code},
            )

    async def get_forbidden_hostnames(self) -> list[ForbiddenHostname]:
        """금지 hostname 목록 (저장된 적 없으면 빈 목록)"""
        try:
            raw = await self.get(ForbiddenHostnamesKey)
        except ConfigNotFoundException:
            return []

        try:
            return _forbidden_hostnames_adapter.validate_json(raw)
        except ValidationError as e:
            raise ConfigSerializationException(ForbiddenHostnamesKey, str(e)) from e

    async def get_blacklist_threshold(self) -> BlackListThreshold:
        """블랙리스트 임계값

        Raises:
            ConfigNotFoundException: 임계값이 설정되지 않음
        """
        raw = await self.get(BlackListThresholdKey)
        try:
            return BlackListThreshold.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigSerializationException(BlackListThresholdKey, str(e)) from e

    async def close(self) -> None:
        await self._client.aclose()
