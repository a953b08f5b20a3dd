"""Hostname 단위 asyncio 락

같은 프로세스 안에서 같은 hostname에 대한 판정을 한 번에 하나만 실행합니다.
여러 워커 프로세스 사이의 경쟁은 막지 못합니다.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class HostnameLocks:
    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}
        self._waiters: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, hostname: str) -> AsyncIterator[None]:
        lock = self._locks.get(hostname)
        if lock is None:
            lock = self._locks[hostname] = asyncio.Lock()
        self._waiters[hostname] = self._waiters.get(hostname, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[hostname] -= 1
            # 대기자가 없으면 정리 (hostname 수만큼 락이 쌓이지 않도록)
            if self._waiters[hostname] == 0:
                del self._waiters[hostname]
                del self._locks[hostname]

    def __len__(self) -> int:
        return len(self._locks)
