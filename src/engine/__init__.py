"""Engine Layer - hostname 블랙리스트 판정

- BlacklistingEngine: timeout-url 리포트 처리 진입점
- HostnameLocks: 프로세스 내 hostname 단위 직렬화 (선택)
"""

from .blacklister import BlacklistingEngine
from .locks import HostnameLocks

__all__ = ["BlacklistingEngine", "HostnameLocks"]
