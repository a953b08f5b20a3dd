"""Redis 설정 저장소 - 키별 원본 바이트 저장만 담당"""
from typing import Optional
from redis import Redis

from src.core.config import settings
from src.core.logging import logger
from src.core.exceptions import ConfigUnavailableException


class ConfigStore:
    """설정 값 저장소

    값은 클라이언트가 직렬화한 바이트(JSON) 그대로 저장하고 그대로 돌려줍니다.
    검증이나 병합은 하지 않습니다.
    """

    def __init__(self, redis_client: Optional[Redis] = None, prefix: Optional[str] = None):
        """Redis 클라이언트 초기화

        연결은 첫 명령 시점에 맺습니다. Redis 장애는 생성자가 아니라
        get/set/health_check에서 드러나야 라우트가 503/"error"로 변환할 수 있습니다.
        """
        self.prefix = prefix or settings.config_key_prefix
        if redis_client is None:
            redis_client = Redis.from_url(
                settings.redis_url,
                socket_connect_timeout=settings.redis_socket_timeout_s,
                socket_timeout=settings.redis_socket_timeout_s,
            )
        self.redis_client = redis_client

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def get(self, key: str) -> Optional[bytes]:
        """
        설정 값 조회

        Args:
            key: 설정 키

        Returns:
            저장된 바이트 또는 None (한 번도 저장되지 않은 키)
        """
        try:
            value = self.redis_client.get(self._key(key))
        except Exception as e:
            logger.error(f"[CONFIG_STORE] Read error for key {key}: {e}")
            raise ConfigUnavailableException(
                reason="Config read failed",
                details={"key": key, "error": str(e)}
            ) from e

        if value is None:
            return None
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def set(self, key: str, value: bytes) -> None:
        """
        설정 값 저장 (기존 값 교체, 만료 없음)

        Args:
            key: 설정 키
            value: 저장할 바이트
        """
        try:
            self.redis_client.set(self._key(key), value)
            logger.info(f"[CONFIG_STORE] Config set for key: {key} ({len(value)} bytes)")
        except Exception as e:
            logger.error(f"[CONFIG_STORE] Write error for key {key}: {e}")
            raise ConfigUnavailableException(
                reason="Config write failed",
                details={"key": key, "error": str(e)}
            ) from e

    def health_check(self) -> bool:
        """Redis 연결 상태 확인"""
        try:
            self.redis_client.ping()
            return True
        except Exception:
            return False
