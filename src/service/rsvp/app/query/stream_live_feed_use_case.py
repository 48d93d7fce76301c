"""
Stream Live Feed Use Case

SSE streaming of one event's check-ins to its organizer.
"""

from collections.abc import AsyncGenerator
from typing import Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_attendance_query_repo import IAttendanceQueryRepo
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.rsvp.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.rsvp.app.query.owned_event import get_owned_event
from src.service.rsvp.domain.entity.event_entity import EventEntity
from src.service.rsvp.domain.enum.live_feed_event_type import LiveFeedEventType
from src.service.rsvp.domain.recent_activity import RecentActivity, to_recent_check_ins


class StreamLiveFeedUseCase:
    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        attendance_query_repo: IAttendanceQueryRepo,
        user_query_repo: IUserQueryRepo,
        live_feed_broadcaster: IInMemoryEventBroadcaster,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.attendance_query_repo = attendance_query_repo
        self.user_query_repo = user_query_repo
        self.live_feed_broadcaster = live_feed_broadcaster

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        attendance_query_repo: IAttendanceQueryRepo = Depends(
            Provide[Container.attendance_query_repo]
        ),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        live_feed_broadcaster: IInMemoryEventBroadcaster = Depends(
            Provide[Container.live_feed_broadcaster]
        ),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            attendance_query_repo=attendance_query_repo,
            user_query_repo=user_query_repo,
            live_feed_broadcaster=live_feed_broadcaster,
        )

    async def get_event(self, *, event_id: int, requester_id: int) -> EventEntity:
        """Checked before the response starts so errors still map to HTTP status codes"""
        return await get_owned_event(
            self.event_query_repo, event_id=event_id, requester_id=requester_id
        )

    async def stream(self, *, event_id: int) -> AsyncGenerator[dict, None]:
        """
        Yields:
            initial_state once, then one check_in per new attendance record,
            each carrying the attendance count and the recent list (newest first)
        """
        # Subscribe before reading the snapshot so no check-in falls in between
        stream = await self.live_feed_broadcaster.subscribe(event_id=event_id)
        activity = RecentActivity(limit=settings.RECENT_ACTIVITY_LIMIT)

        try:
            records = await self.attendance_query_repo.list_recent(
                event_id=event_id, limit=activity.limit
            )
            profiles = await self.user_query_repo.get_by_ids(r.student_id for r in records)
            activity.seed(
                recent=to_recent_check_ins(records, profiles),
                attendance_count=await self.attendance_query_repo.count_by_event(
                    event_id=event_id
                ),
            )
            yield {
                'event_type': LiveFeedEventType.INITIAL_STATE,
                'event_id': event_id,
                'attendance_count': activity.attendance_count,
                'recent_check_ins': activity.entries,
            }

            async for notification in stream:
                entry = notification['check_in']
                if not activity.record(entry):
                    continue
                yield {
                    'event_type': LiveFeedEventType.CHECK_IN,
                    'event_id': event_id,
                    'check_in': entry,
                    'attendance_count': activity.attendance_count,
                    'recent_check_ins': activity.entries,
                }

        except anyio.get_cancelled_exc_class():
            Logger.base.info(f'[LIVE_FEED] Client disconnected from event {event_id}')
            raise
        finally:
            with anyio.CancelScope(shield=True):
                await self.live_feed_broadcaster.unsubscribe(event_id=event_id, stream=stream)
