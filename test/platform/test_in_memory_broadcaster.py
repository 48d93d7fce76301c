"""
Unit tests for InMemoryEventBroadcaster

Per-event pub/sub carrying check-in notifications from the check-in use
case to live feed SSE endpoints.
"""

from datetime import datetime, timezone

from anyio import create_memory_object_stream, fail_after, move_on_after
from anyio.streams.memory import ClosedResourceError, MemoryObjectReceiveStream
import pytest
import uuid_utils as uuid

from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from src.service.rsvp.domain.entity.attendance_record_entity import RecentCheckIn
from src.service.rsvp.domain.enum.live_feed_event_type import LiveFeedEventType


@pytest.mark.unit
class TestInMemoryBroadcaster:
    @pytest.fixture
    def broadcaster(self):
        return InMemoryEventBroadcasterImpl(buffer_size=10)

    @pytest.fixture
    def event_id(self) -> int:
        return 7

    @pytest.fixture
    def event_data(self):
        return {
            'event_type': LiveFeedEventType.CHECK_IN,
            'check_in': RecentCheckIn(
                record_id=uuid.uuid7(),
                student_id=42,
                name='Alice',
                checked_in_at=datetime(2026, 6, 1, 18, 5, tzinfo=timezone.utc),
            ),
        }

    @pytest.mark.asyncio
    async def test_subscribe_returns_stream(self, broadcaster, event_id):
        stream = await broadcaster.subscribe(event_id=event_id)

        assert isinstance(stream, MemoryObjectReceiveStream)
        assert broadcaster.subscriber_count(event_id=event_id) == 1

    @pytest.mark.asyncio
    async def test_broadcast_to_multiple_subscribers(self, broadcaster, event_id, event_data):
        stream1 = await broadcaster.subscribe(event_id=event_id)
        stream2 = await broadcaster.subscribe(event_id=event_id)

        delivered = await broadcaster.broadcast(event_id=event_id, event_data=event_data)

        assert delivered == 2
        with fail_after(1.0):
            assert await stream1.receive() == event_data
            assert await stream2.receive() == event_data

    @pytest.mark.asyncio
    async def test_events_isolated(self, broadcaster, event_data):
        stream_a = await broadcaster.subscribe(event_id=1)
        stream_b = await broadcaster.subscribe(event_id=2)

        await broadcaster.broadcast(event_id=1, event_data=event_data)

        with fail_after(1.0):
            assert await stream_a.receive() == event_data
        received_b = None
        with move_on_after(0.1):
            received_b = await stream_b.receive()
        assert received_b is None

    @pytest.mark.asyncio
    async def test_broadcast_with_no_subscribers(self, broadcaster, event_id, event_data):
        assert await broadcaster.broadcast(event_id=event_id, event_data=event_data) == 0

    @pytest.mark.asyncio
    async def test_unsubscribe_one_of_multiple(self, broadcaster, event_id, event_data):
        stream1 = await broadcaster.subscribe(event_id=event_id)
        stream2 = await broadcaster.subscribe(event_id=event_id)

        await broadcaster.unsubscribe(event_id=event_id, stream=stream1)
        await broadcaster.broadcast(event_id=event_id, event_data=event_data)

        with fail_after(1.0):
            assert await stream2.receive() == event_data
        with pytest.raises(ClosedResourceError):
            await stream1.receive()

    @pytest.mark.asyncio
    async def test_full_buffer_drops_for_that_subscriber_only(self, broadcaster, event_id):
        """
        Given: a slow observer whose buffer of 10 is full and a fresh one
        When: one more notification is broadcast
        Then: the slow observer misses it, the fresh one gets it, nothing blocks
        """
        slow = await broadcaster.subscribe(event_id=event_id)
        for i in range(10):
            await broadcaster.broadcast(event_id=event_id, event_data={'seq': i})
        fresh = await broadcaster.subscribe(event_id=event_id)

        with fail_after(1.0):
            delivered = await broadcaster.broadcast(
                event_id=event_id, event_data={'seq': 'late'}
            )

        assert delivered == 1
        received = [slow.receive_nowait()['seq'] for _ in range(10)]
        assert received == list(range(10))
        with fail_after(1.0):
            assert (await fresh.receive())['seq'] == 'late'

    @pytest.mark.asyncio
    async def test_fifo_per_event(self, broadcaster, event_id):
        stream = await broadcaster.subscribe(event_id=event_id)

        for i in range(5):
            await broadcaster.broadcast(event_id=event_id, event_data={'seq': i})

        for i in range(5):
            with fail_after(1.0):
                assert (await stream.receive())['seq'] == i

    @pytest.mark.asyncio
    async def test_auto_cleanup_empty_subscriber_list(self, broadcaster, event_id):
        stream = await broadcaster.subscribe(event_id=event_id)

        await broadcaster.unsubscribe(event_id=event_id, stream=stream)

        assert event_id not in broadcaster._subscribers
        assert broadcaster.subscriber_count(event_id=event_id) == 0

    @pytest.mark.asyncio
    async def test_unsubscribe_unknown_stream(self, broadcaster, event_id):
        _, stray = create_memory_object_stream[dict](max_buffer_size=1)

        await broadcaster.unsubscribe(event_id=event_id, stream=stray)

    @pytest.mark.asyncio
    async def test_publish_lock_is_shared_per_event(self, broadcaster, event_id):
        lock = broadcaster.publish_lock(event_id=event_id)

        assert broadcaster.publish_lock(event_id=event_id) is lock
        assert broadcaster.publish_lock(event_id=event_id + 1) is not lock
