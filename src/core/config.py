"""설정 관리 - 환경 변수 로드 및 검증"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # Redis (설정 저장소 + 실패 카운터 + 이벤트 큐)
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout_s: float = 5.0

    # 설정 API (config store HTTP 서비스)
    config_api_url: str = "http://localhost:8080"
    config_api_timeout_s: float = 5.0
    config_key_prefix: str = "config"

    # 실패 카운터 캐시 이름 (Redis 키 prefix)
    hostname_cache_name: str = "down-hostname"

    # Liveness 프로브
    # NOTE: 이 타임아웃을 넘기면 "타임아웃 확인"으로 간주됩니다.
    probe_timeout_s: float = 10.0
    probe_user_agent: str = "Mozilla/5.0 (Windows NT 10.0; rv:102.0) Gecko/20100101 Firefox/102.0"
    probe_proxy_url: Optional[str] = None

    # 이벤트 (exchange -> queue 바인딩)
    event_bindings: dict[str, list[str]] = {"timeout-url": ["blacklistingQueue"]}
    event_max_attempts: int = 5
    event_poll_timeout_s: float = 5.0
    event_concurrency: int = 10

    # 같은 hostname에 대한 판정을 프로세스 내에서 직렬화할지 여부
    # 기본값은 False: 여러 워커 간 경쟁은 어차피 남으므로 관찰된 동작(best-effort)을 유지
    blacklister_serialize_hostnames: bool = False

    # API
    api_title: str = "Config API"
    api_version: str = "1.0.0"
    api_description: str = "크롤러 공유 설정(금지 hostname, 블랙리스트 임계값) 저장소"

    # 로깅
    log_level: str = "INFO"

    @field_validator(
        "redis_socket_timeout_s",
        "config_api_timeout_s",
        "probe_timeout_s",
        "event_poll_timeout_s",
    )
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("event_max_attempts", "event_concurrency")
    @classmethod
    def validate_event_limits(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("event_max_attempts and event_concurrency must be positive")
        return v

    @field_validator("redis_url", "config_api_url")
    @classmethod
    def validate_required_urls(cls, v: str) -> str:
        if not v:
            raise ValueError("redis_url and config_api_url must not be empty")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
