"""Liveness 프로브용 공유 HTTP 클라이언트 (httpx)

- 요청마다 AsyncClient를 만들면 커넥션 오버헤드가 커지므로 프로세스 단위로 재사용합니다.
- 타임아웃은 ProbeTimeoutException, 그 외 실패는 ProbeException으로 구분합니다.
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
from typing import Dict, Optional

import httpx

from src.core.config import settings
from src.core.logging import logger
from src.core.exceptions import ProbeException, ProbeTimeoutException


class LivenessProber:
    def __init__(
        self,
        *,
        timeout_s: Optional[float] = None,
        proxy_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_s = timeout_s or settings.probe_timeout_s
        self.proxy_url = proxy_url if proxy_url is not None else settings.probe_proxy_url
        self._transport = transport
        self._lock = asyncio.Lock()
        self._client: Optional[httpx.AsyncClient] = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._lock:
            if self._client is not None:
                return self._client
            self._client = httpx.AsyncClient(
                headers=self.default_headers(),
                timeout=self.timeout_s,
                follow_redirects=True,
                proxy=self.proxy_url or None,
                transport=self._transport,
            )
            return self._client

    def default_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": settings.probe_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }

    async def get(self, origin: str) -> httpx.Response:
        """
        origin에 한 번 요청

        Returns:
            응답 (상태 코드와 무관하게 응답이 왔으면 '살아있음')

        Raises:
            ProbeTimeoutException: 타임아웃 (타임아웃 확인)
            ProbeException: 그 외 요청 실패
        """
        client = await self._ensure_client()
        try:
            return await client.get(origin)
        except httpx.TimeoutException as e:
            logger.debug(f"[PROBE] GET {origin} timed out: {type(e).__name__}")
            raise ProbeTimeoutException(origin, self.timeout_s) from e
        except httpx.HTTPError as e:
            logger.info(f"[PROBE] GET {origin} failed: {type(e).__name__}: {repr(e)}")
            raise ProbeException(origin, f"{type(e).__name__}: {e}") from e

    async def close(self) -> None:
        async with self._lock:
            if self._client is None:
                return
            await self._client.aclose()
            self._client = None
