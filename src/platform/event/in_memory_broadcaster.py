"""
In-memory Event Broadcaster Implementation

Singleton owned by the DI container. Fan-out stays inside one process;
several API workers each see only the check-ins they handled themselves.
"""

from typing import Dict, List

from anyio import BrokenResourceError, Lock, WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.rsvp_metrics import metrics


_Subscriber = tuple[MemoryObjectSendStream[dict], MemoryObjectReceiveStream[dict]]


class InMemoryEventBroadcasterImpl:
    """
    event_id -> list of (send_stream, receive_stream)

    - broadcast() never blocks: send_nowait, a full buffer drops the
      notification for that subscriber only
    - per event, subscribers receive notifications in broadcast order
    - empty subscriber lists are removed on unsubscribe
    - publish_lock(event_id) serializes a publisher's write-then-broadcast
      step, so notifications follow ledger insertion order
    """

    def __init__(self, *, buffer_size: int | None = None) -> None:
        self._buffer_size = buffer_size or settings.LIVE_FEED_BUFFER_SIZE
        self._subscribers: Dict[int, List[_Subscriber]] = {}
        self._publish_locks: Dict[int, Lock] = {}

    async def subscribe(self, *, event_id: int) -> MemoryObjectReceiveStream[dict]:
        send_stream, receive_stream = create_memory_object_stream[dict](
            max_buffer_size=self._buffer_size
        )
        self._subscribers.setdefault(event_id, []).append((send_stream, receive_stream))
        metrics.live_feed_subscribers.labels(event_id=event_id).inc()

        Logger.base.debug(
            f'📡 [LIVE_FEED] Subscribed to event {event_id} '
            f'(total subscribers: {len(self._subscribers[event_id])})'
        )
        return receive_stream

    async def broadcast(self, *, event_id: int, event_data: dict) -> int:
        subscribers = self._subscribers.get(event_id)
        if not subscribers:
            Logger.base.debug(f'📡 [LIVE_FEED] No subscribers for event {event_id}')
            return 0

        delivered = 0
        dropped = 0
        for send_stream, _ in list(subscribers):
            try:
                send_stream.send_nowait(event_data)
                delivered += 1
            except WouldBlock:
                dropped += 1
                metrics.live_feed_dropped.labels(event_id=event_id).inc()
                Logger.base.warning(
                    f'⚠️ [LIVE_FEED] Stream full for event {event_id}, '
                    f'dropping notification (type={event_data.get("event_type")})'
                )
            except BrokenResourceError:
                # Receiver closed without unsubscribing
                dropped += 1

        Logger.base.info(
            f'📡 [LIVE_FEED] Broadcast to event {event_id}: '
            f'delivered={delivered}, dropped={dropped}'
        )
        return delivered

    async def unsubscribe(self, *, event_id: int, stream: MemoryObjectReceiveStream[dict]) -> None:
        subscribers = self._subscribers.get(event_id)
        if subscribers is None:
            return

        for i, (send_stream, receive_stream) in enumerate(subscribers):
            if receive_stream is stream:
                await send_stream.aclose()
                await receive_stream.aclose()
                subscribers.pop(i)
                metrics.live_feed_subscribers.labels(event_id=event_id).dec()
                Logger.base.debug(
                    f'📡 [LIVE_FEED] Unsubscribed from event {event_id} '
                    f'(remaining: {len(subscribers)})'
                )
                break

        if not subscribers:
            del self._subscribers[event_id]
            Logger.base.debug(f'📡 [LIVE_FEED] Cleaned up empty list for event {event_id}')

    def publish_lock(self, *, event_id: int) -> Lock:
        lock = self._publish_locks.get(event_id)
        if lock is None:
            lock = self._publish_locks[event_id] = Lock()
        return lock

    def subscriber_count(self, *, event_id: int) -> int:
        return len(self._subscribers.get(event_id, []))
