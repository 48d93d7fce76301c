"""
In-memory Event Broadcaster Interface

Per-event pub/sub used by the live attendance feed: the check-in use case
publishes, SSE endpoints subscribe.
"""

from typing import Protocol

from anyio import Lock
from anyio.streams.memory import MemoryObjectReceiveStream


class IInMemoryEventBroadcaster(Protocol):
    async def subscribe(self, *, event_id: int) -> MemoryObjectReceiveStream[dict]:
        """
        Register a new observer of one event.

        Returns:
            Stream receiving notifications in publish order
        """
        ...

    async def broadcast(self, *, event_id: int, event_data: dict) -> int:
        """
        Deliver a notification to every observer of the event.

        Returns:
            Number of observers the notification was delivered to. Observers
            whose buffer is full miss this notification.
        """
        ...

    async def unsubscribe(self, *, event_id: int, stream: MemoryObjectReceiveStream[dict]) -> None:
        """Remove an observer and close its stream. Unknown streams are ignored."""
        ...

    def subscriber_count(self, *, event_id: int) -> int: ...

    def publish_lock(self, *, event_id: int) -> Lock:
        """
        Per-event lock held by publishers across "write to the ledger, then
        broadcast". Awaiting anything slow while holding it delays every
        other publisher of the event.
        """
        ...
