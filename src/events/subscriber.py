"""Redis 리스트 기반 이벤트 큐

- publish: exchange에 바인딩된 모든 큐(Redis 리스트)에 메시지를 넣습니다.
- subscribe/run: 큐에서 메시지를 꺼내 디코딩 후 핸들러에 넘깁니다.
- 핸들러가 예외를 던지면 attempts를 올려 큐 뒤로 다시 넣고,
  event_max_attempts에 도달하면 `{queue}:dead`로 옮깁니다.
- AlreadyBlacklistedException은 예상된 결과이므로 ack 처리합니다.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError
from redis.asyncio import Redis

from src.core.config import settings
from src.core.logging import logger
from src.core.exceptions import AlreadyBlacklistedException, EventDecodeException


TimeoutURLExchange = "timeout-url"


@dataclass(frozen=True)
class SubscriberDef:
    """exchange/queue와 핸들러 연결 정의"""
    exchange: str
    queue: str
    handler: Callable[[Any], Awaitable[None]]
    model: Type[BaseModel]


def encode_message(exchange: str, event: BaseModel, attempts: int = 0) -> str:
    return json.dumps({
        "exchange": exchange,
        "body": event.model_dump(mode="json"),
        "attempts": attempts,
    })


def decode_message(queue: str, raw: Any) -> Dict[str, Any]:
    try:
        envelope = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise EventDecodeException(queue, f"invalid JSON: {e}") from e
    if not isinstance(envelope, dict) or "body" not in envelope:
        raise EventDecodeException(queue, "missing message body")
    return envelope


class RedisEventSubscriber:
    """Redis 리스트 큐 구독자"""

    def __init__(
        self,
        redis_client: Optional[Redis] = None,
        *,
        bindings: Optional[Dict[str, List[str]]] = None,
        max_attempts: Optional[int] = None,
        poll_timeout_s: Optional[float] = None,
        concurrency: Optional[int] = None,
    ):
        if redis_client is None:
            redis_client = Redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=settings.redis_socket_timeout_s,
            )
        self.redis_client = redis_client
        self.bindings = bindings if bindings is not None else settings.event_bindings
        self.max_attempts = max_attempts or settings.event_max_attempts
        self.poll_timeout_s = poll_timeout_s or settings.event_poll_timeout_s
        self._semaphore = asyncio.Semaphore(concurrency or settings.event_concurrency)
        self._definitions: List[SubscriberDef] = []

    def subscribe(self, definition: SubscriberDef) -> None:
        """핸들러 등록"""
        queues = self.bindings.get(definition.exchange, [])
        if definition.queue not in queues:
            raise ValueError(
                f"Queue '{definition.queue}' is not bound to exchange '{definition.exchange}'"
            )
        self._definitions.append(definition)
        logger.info(f"[EVENT] Subscribed {definition.queue} <- {definition.exchange}")

    async def publish(self, exchange: str, event: BaseModel) -> None:
        """exchange에 바인딩된 모든 큐에 메시지 추가"""
        message = encode_message(exchange, event)
        for queue in self.bindings.get(exchange, []):
            await self.redis_client.lpush(queue, message)

    async def process_one(self, definition: SubscriberDef, raw: Any) -> None:
        """메시지 하나 처리 (ack / 재전달 / dead-letter 결정)"""
        try:
            envelope = decode_message(definition.queue, raw)
            event = definition.model.model_validate(envelope["body"])
        except (EventDecodeException, ValidationError) as e:
            logger.error(f"[EVENT] Dropping undecodable message from {definition.queue}: {e}")
            await self.redis_client.lpush(f"{definition.queue}:dead", raw)
            return

        try:
            await definition.handler(event)
        except AlreadyBlacklistedException as e:
            logger.debug(f"[EVENT] {definition.queue}: {e}")
        except Exception as e:
            attempts = int(envelope.get("attempts", 0)) + 1
            if attempts >= self.max_attempts:
                logger.error(
                    f"[EVENT] {definition.queue}: giving up after {attempts} attempts: {e}"
                )
                await self.redis_client.lpush(
                    f"{definition.queue}:dead",
                    encode_message(definition.exchange, event, attempts),
                )
                return
            logger.warning(
                f"[EVENT] {definition.queue}: handler failed (attempt {attempts}/{self.max_attempts}): {e}"
            )
            await self.redis_client.lpush(
                definition.queue,
                encode_message(definition.exchange, event, attempts),
            )

    async def _run_guarded(self, definition: SubscriberDef, raw: Any) -> None:
        try:
            await self.process_one(definition, raw)
        except Exception as e:
            # 재전달 자체가 실패한 경우 (Redis 장애)
            logger.error(f"[EVENT] {definition.queue}: failed to settle message: {e}", exc_info=True)
        finally:
            self._semaphore.release()

    async def consume(self, definition: SubscriberDef) -> None:
        """큐 하나를 계속 소비 (취소될 때까지)"""
        tasks: set[asyncio.Task] = set()
        try:
            while True:
                await self._semaphore.acquire()
                try:
                    item = await self.redis_client.brpop([definition.queue], timeout=self.poll_timeout_s)
                except BaseException:
                    self._semaphore.release()
                    raise
                if item is None:
                    self._semaphore.release()
                    continue

                _, raw = item
                task = asyncio.create_task(self._run_guarded(definition, raw))
                tasks.add(task)
                task.add_done_callback(tasks.discard)
        finally:
            if tasks:
                await asyncio.gather(*tasks, return_exceptions=True)

    async def run(self) -> None:
        """등록된 모든 큐 소비"""
        if not self._definitions:
            raise RuntimeError("No subscribers registered")
        await asyncio.gather(*(self.consume(d) for d in self._definitions))

    async def close(self) -> None:
        await self.redis_client.aclose()
