"""이벤트 큐 - export only."""

from .subscriber import RedisEventSubscriber, SubscriberDef, TimeoutURLExchange

__all__ = ["RedisEventSubscriber", "SubscriberDef", "TimeoutURLExchange"]
