"""Topic Event Bus — in-memory fan-out for GraphQL subscriptions.

Invariants:
    - Each subscriber owns one asyncio.Queue; publish() puts the event on every queue of the topic
    - Leaving the subscribe() iterator (client disconnect) removes its queue
    - Events published with no subscribers are dropped
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any, AsyncGenerator

logger = logging.getLogger(__name__)

ON_BOOK_CREATED = "OnBookCreated"
ON_BOOK_UPDATED = "OnBookUpdated"
ON_BOOK_DELETED = "OnBookDeleted"
ON_REVIEW_ADDED = "OnReviewAdded"


class TopicEventBus:
    def __init__(self):
        self._subscribers: dict[str, set[asyncio.Queue]] = defaultdict(set)

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, ()))

    async def publish(self, topic: str, event: Any) -> None:
        queues = list(self._subscribers.get(topic, ()))
        logger.debug(
            f"Publishing event to {len(queues)} subscriber(s)", extra={"topic": topic},
        )
        for queue in queues:
            queue.put_nowait(event)

    async def subscribe(self, topic: str) -> AsyncGenerator[Any, None]:
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers[topic].add(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._subscribers[topic].discard(queue)
            if not self._subscribers[topic]:
                del self._subscribers[topic]


event_bus = TopicEventBus()
