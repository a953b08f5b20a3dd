"""LivenessProber 단위 테스트 (httpx.MockTransport)"""

from __future__ import annotations

import httpx
import pytest

from src.core.exceptions import ProbeException, ProbeTimeoutException
from src.crawlers.http_client import LivenessProber


def make_prober(handler) -> LivenessProber:
    return LivenessProber(timeout_s=1.5, proxy_url="", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_response_means_alive():
    prober = make_prober(lambda request: httpx.Response(503))

    resp = await prober.get("http://example.onion")

    # 상태 코드와 무관하게 응답이 오면 타임아웃이 아님
    assert resp.status_code == 503
    await prober.close()


@pytest.mark.asyncio
async def test_timeout_raises_probe_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    prober = make_prober(handler)

    with pytest.raises(ProbeTimeoutException) as exc_info:
        await prober.get("http://example.onion")
    assert exc_info.value.error_code == "PROBE_TIMEOUT"
    assert exc_info.value.details["timeout_s"] == 1.5
    await prober.close()


@pytest.mark.asyncio
async def test_connect_timeout_is_also_a_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    prober = make_prober(handler)

    with pytest.raises(ProbeTimeoutException):
        await prober.get("http://example.onion")
    await prober.close()


@pytest.mark.asyncio
async def test_other_error_is_not_a_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    prober = make_prober(handler)

    with pytest.raises(ProbeException) as exc_info:
        await prober.get("http://example.onion")
    assert not isinstance(exc_info.value, ProbeTimeoutException)
    assert exc_info.value.error_code == "PROBE_ERROR"
    await prober.close()


@pytest.mark.asyncio
async def test_client_is_reused_and_closed():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["User-Agent"])
        return httpx.Response(200)

    prober = make_prober(handler)
    await prober.get("http://a.onion")
    first = prober._client
    await prober.get("http://b.onion")

    assert prober._client is first
    assert len(seen) == 2 and seen[0]
    await prober.close()
    assert prober._client is None
