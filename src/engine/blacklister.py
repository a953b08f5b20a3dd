"""Blacklisting Engine - 반복 타임아웃 hostname 금지 판정

timeout-url 리포트 하나당 한 번 실행됩니다:
1. URL 파싱 (hostname, origin)
2. 이미 금지된 hostname이면 조기 종료 (프로브 생략)
3. 직접 프로브해서 타임아웃 확인 (확인 안 되면 아무것도 하지 않음)
4. 임계값 조회, 실패 카운터 +1
5. 임계값 도달 시 금지 목록을 다시 읽고 중복이 아니면 추가
6. 카운터 저장 (만료 없음)

NOTE: 금지 목록은 트랜잭션 없는 외부 공유 상태입니다.
2번/5번의 이중 확인은 중복 추가 경쟁을 줄일 뿐 없애지는 못합니다.
카운터 read-increment-write 경쟁도 그대로 남아 있습니다. (임계값 도달이 늦어질 뿐
잘못된 금지로 이어지지는 않음) HostnameLocks를 주면 같은 프로세스 안에서는 직렬화됩니다.
"""

from __future__ import annotations

from typing import Optional

from src.core.logging import logger, sanitize_for_log
from src.core.exceptions import AlreadyBlacklistedException, ProbeException, ProbeTimeoutException
from src.schemas.blacklist_schema import ForbiddenHostname, TimeoutURLEvent
from src.services.impl.config_client import ForbiddenHostnamesKey
from src.services.impl.counter_cache import NO_TTL
from src.utils.url import parse_report_url

from .locks import HostnameLocks


def _contains(forbidden_hostnames: list[ForbiddenHostname], hostname: str) -> bool:
    # 다른 컴포넌트가 대소문자를 섞어 기록했을 수 있음 (hostname은 대소문자 무관)
    hostname = hostname.lower()
    return any(entry.hostname.lower() == hostname for entry in forbidden_hostnames)


class BlacklistingEngine:
    """hostname 블랙리스트 판정 엔진"""

    def __init__(
        self,
        config_client,
        hostname_cache,
        prober,
        hostname_locks: Optional[HostnameLocks] = None,
    ):
        """
        Args:
            config_client: 설정 클라이언트 (get_forbidden_hostnames/get_blacklist_threshold/set)
            hostname_cache: 실패 카운터 캐시 (get_int64/set_int64)
            prober: Liveness 프로브 (get)
            hostname_locks: 주어지면 hostname 단위로 판정을 직렬화
        """
        if not config_client:
            raise ValueError("config_client must not be None")
        if not hostname_cache:
            raise ValueError("hostname_cache must not be None")
        if not prober:
            raise ValueError("prober must not be None")

        self.config_client = config_client
        self.hostname_cache = hostname_cache
        self.prober = prober
        self.hostname_locks = hostname_locks

    async def on_timeout_report(self, report: TimeoutURLEvent) -> None:
        """타임아웃 리포트 처리

        Raises:
            MalformedURLException: URL 파싱 실패
            AlreadyBlacklistedException: 이미 금지된 hostname
            ConfigException / CacheException: 외부 저장소 오류 (그대로 전달)
        """
        target = parse_report_url(report.url)

        if self.hostname_locks is None:
            await self._decide(target.hostname, target.origin)
            return

        async with self.hostname_locks.hold(target.hostname):
            await self._decide(target.hostname, target.origin)

    async def _decide(self, hostname: str, origin: str) -> None:
        # 이미 금지된 hostname이면 프로브하지 않음
        forbidden_hostnames = await self.config_client.get_forbidden_hostnames()
        if _contains(forbidden_hostnames, hostname):
            raise AlreadyBlacklistedException(hostname)

        if not await self._confirm_timeout(origin):
            return

        logger.debug(f"[BLACKLISTER] Timeout confirmed: hostname={hostname}")

        threshold = await self.config_client.get_blacklist_threshold()

        count = await self.hostname_cache.get_int64(hostname)
        count += 1

        if count >= threshold.threshold:
            # 첫 조회 이후 다른 처리가 먼저 추가했을 수 있으므로 다시 확인
            forbidden_hostnames = await self.config_client.get_forbidden_hostnames()
            if _contains(forbidden_hostnames, hostname):
                logger.debug(f"[BLACKLISTER] Skipping duplicate hostname: {hostname}")
            else:
                logger.info(f"[BLACKLISTER] Blacklisting hostname: {hostname} (count={count})")
                forbidden_hostnames.append(ForbiddenHostname(hostname=hostname))
                await self.config_client.set(ForbiddenHostnamesKey, forbidden_hostnames)
        else:
            logger.debug(
                f"[BLACKLISTER] hostname={hostname} count={count}/{threshold.threshold}"
            )

        await self.hostname_cache.set_int64(hostname, count, NO_TTL)

    async def _confirm_timeout(self, origin: str) -> bool:
        """리포트만 믿지 않고 직접 프로브해서 타임아웃인지 확인"""
        try:
            await self.prober.get(origin)
        except ProbeTimeoutException:
            return True
        except ProbeException as e:
            logger.debug(f"[BLACKLISTER] Probe not a timeout: {sanitize_for_log(origin)} ({e.error_code})")
            return False
        return False
