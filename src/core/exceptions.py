"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
from typing import Any, Optional


# 기본 예외 클래스
class BlacklisterException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 판정(엔진) 관련 예외
class MalformedURLException(BlacklisterException):
    """타임아웃 리포트의 URL을 파싱할 수 없음 (재시도 무의미)"""
    def __init__(self, url: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Malformed URL: {reason}"
        super().__init__(message, "MALFORMED_URL", details or {"url": url, "reason": reason})
        self.url = url


class AlreadyBlacklistedException(BlacklisterException):
    """이미 금지 목록에 있는 hostname (정상적인 조기 종료)"""
    def __init__(self, hostname: str, details: Optional[dict[str, Any]] = None):
        message = f"{hostname} hostname is already blacklisted"
        super().__init__(message, "ALREADY_BLACKLISTED", details or {"hostname": hostname})
        self.hostname = hostname


# 설정 저장소 관련 예외
class ConfigException(BlacklisterException):
    """설정 저장소/클라이언트 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "CONFIG_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CONFIG_ERROR", details)


class ConfigUnavailableException(ConfigException):
    """설정 저장소 읽기/쓰기 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Config store unavailable: {reason}"
        super().__init__(message, "CONFIG_UNAVAILABLE", details or {"reason": reason})


class ConfigNotFoundException(ConfigException):
    """한 번도 저장된 적 없는 설정 키"""
    def __init__(self, key: str, details: Optional[dict[str, Any]] = None):
        message = f"Config key not found: {key}"
        super().__init__(message, "CONFIG_NOT_FOUND", details or {"key": key})
        self.key = key


class ConfigSerializationException(ConfigException):
    """설정 값 직렬화/역직렬화 오류"""
    def __init__(self, key: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Config value for '{key}' is invalid: {reason}"
        super().__init__(message, "CONFIG_SERIALIZATION_ERROR",
                        details or {"key": key, "reason": reason})


# 캐시 관련 예외
class CacheException(BlacklisterException):
    """캐시 관련 예외"""
    def __init__(self, message: str, error_code: str = "CACHE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CACHE_ERROR", details)


class CacheUnavailableException(CacheException):
    """캐시 읽기/쓰기 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache unavailable: {reason}"
        super().__init__(message, "CACHE_UNAVAILABLE", details or {"reason": reason})


class CacheSerializationException(CacheException):
    """캐시 값이 기대한 타입이 아님"""
    def __init__(self, key: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache value for '{key}' is invalid: {reason}"
        super().__init__(message, "CACHE_SERIALIZATION_ERROR",
                        details or {"key": key, "reason": reason})


# 프로브 관련 예외
class ProbeException(BlacklisterException):
    """프로브 요청 실패 (타임아웃 외)"""
    def __init__(self, origin: str, reason: str, error_code: str = "PROBE_ERROR",
                 details: Optional[dict[str, Any]] = None):
        message = f"Probe to {origin} failed: {reason}"
        super().__init__(message, error_code, details or {"origin": origin, "reason": reason})
        self.origin = origin


class ProbeTimeoutException(ProbeException):
    """프로브 타임아웃 - '타임아웃 확인' 결과"""
    def __init__(self, origin: str, timeout_s: float, details: Optional[dict[str, Any]] = None):
        super().__init__(origin, f"timed out after {timeout_s}s", "PROBE_TIMEOUT",
                        details or {"origin": origin, "timeout_s": timeout_s})


# 이벤트 관련 예외
class EventDecodeException(BlacklisterException):
    """큐 메시지를 디코딩할 수 없음"""
    def __init__(self, queue: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Failed to decode message from '{queue}': {reason}"
        super().__init__(message, "EVENT_DECODE_ERROR",
                        details or {"queue": queue, "reason": reason})
