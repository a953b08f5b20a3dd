"""URL 파싱 유틸리티"""
import re
from typing import NamedTuple
from urllib.parse import urlsplit

from src.core.exceptions import MalformedURLException


# '%' 뒤에 16진수 두 자리가 오지 않으면 잘못된 escape
_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class ReportTarget(NamedTuple):
    """타임아웃 리포트 URL에서 뽑아낸 판정 대상"""
    hostname: str
    origin: str


def parse_report_url(url: str) -> ReportTarget:
    """
    타임아웃 리포트 URL에서 hostname과 origin(scheme://host[:port]) 추출

    Examples:
        >>> parse_report_url("http://example.onion/a/b?c=d")
        ReportTarget(hostname='example.onion', origin='http://example.onion')
        >>> parse_report_url("https://user@Example.onion:8443/")
        ReportTarget(hostname='example.onion', origin='https://Example.onion:8443')

    Args:
        url: 리포트에 담긴 URL

    Returns:
        ReportTarget

    Raises:
        MalformedURLException: 잘못된 escape, 파싱 불가 netloc/port, hostname 없음
    """
    if not url or not url.strip():
        raise MalformedURLException(url, "empty url")

    match = _INVALID_ESCAPE.search(url)
    if match:
        raise MalformedURLException(url, f"invalid URL escape at position {match.start()}")

    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        # port 접근 시점에 범위/형식 검증이 일어남
        _ = parts.port
    except ValueError as e:
        raise MalformedURLException(url, str(e)) from e

    if not parts.scheme:
        raise MalformedURLException(url, "missing scheme")
    if not hostname:
        raise MalformedURLException(url, "missing hostname")

    # userinfo는 origin에서 제외
    host = parts.netloc.rpartition("@")[2]

    # host에는 공백/escape 불가 (IPv6 리터럴의 zone id '%25'만 예외)
    if any(c.isspace() for c in host):
        raise MalformedURLException(url, "invalid character in host name")
    if "%" in host and not host.startswith("["):
        raise MalformedURLException(url, "invalid URL escape in host name")

    return ReportTarget(hostname=hostname, origin=f"{parts.scheme}://{host}")
