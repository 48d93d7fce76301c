import time
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from src.platform.exception.exceptions import ConstraintConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.rsvp_metrics import metrics
from src.service.rsvp.app.interface.i_attendance_command_repo import IAttendanceCommandRepo
from src.service.rsvp.app.interface.i_attendance_query_repo import IAttendanceQueryRepo
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.rsvp.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.rsvp.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.rsvp.domain.entity.attendance_record_entity import (
    AttendanceRecord,
    CheckInResult,
    RecentCheckIn,
)
from src.service.rsvp.domain.entity.user_entity import UNKNOWN_STUDENT_NAME
from src.service.rsvp.domain.enum.live_feed_event_type import LiveFeedEventType


class CheckInUseCase:
    """
    Idempotent check-in.

    Walk-ins are accepted: the reservation ledger is read only to tag the
    result. The (event, student) unique constraint is what makes concurrent
    duplicates safe: the losing insert is answered with the winner's record.
    Only a new insert is published to the live feed, after it is committed,
    and per event the feed sees check-ins in insertion order.
    """

    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        reservation_query_repo: IReservationQueryRepo,
        attendance_command_repo: IAttendanceCommandRepo,
        attendance_query_repo: IAttendanceQueryRepo,
        user_query_repo: IUserQueryRepo,
        live_feed_broadcaster: IInMemoryEventBroadcaster,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.reservation_query_repo = reservation_query_repo
        self.attendance_command_repo = attendance_command_repo
        self.attendance_query_repo = attendance_query_repo
        self.user_query_repo = user_query_repo
        self.live_feed_broadcaster = live_feed_broadcaster
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        attendance_command_repo: IAttendanceCommandRepo = Depends(
            Provide[Container.attendance_command_repo]
        ),
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
            reservation_query_repo=reservation_query_repo,
            attendance_command_repo=attendance_command_repo,
            attendance_query_repo=attendance_query_repo,
            user_query_repo=user_query_repo,
            live_feed_broadcaster=live_feed_broadcaster,
        )

    @Logger.io
    async def check_in(self, *, event_id: int, student_id: int) -> CheckInResult:
        """
        Raises:
            NotFoundError: unknown event
        """
        start = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.check_in',
            attributes={'event.id': event_id, 'student.id': student_id},
        ) as span:
            event = await self.event_query_repo.get_by_id(event_id=event_id)
            if not event:
                metrics.record_check_in(
                    result='not_found', walk_in=False, duration=time.perf_counter() - start
                )
                raise NotFoundError('Event not found')

            reservation = await self.reservation_query_repo.get(
                event_id=event_id, student_id=student_id
            )
            is_walk_in = reservation is None
            span.set_attribute('check_in.walk_in', is_walk_in)

            existing = await self.attendance_query_repo.get(
                event_id=event_id, student_id=student_id
            )
            if existing:
                return self._already_checked_in(existing, is_walk_in, start)

            # Resolved up front: nothing slow may be awaited under the publish lock
            name = await self._display_name(student_id)

            # Insert and broadcast as one step per event: delivery follows insertion order
            async with self.live_feed_broadcaster.publish_lock(event_id=event_id):
                record = AttendanceRecord.create(event_id=event_id, student_id=student_id)
                try:
                    await self.attendance_command_repo.create(record=record)
                except ConstraintConflictError:
                    # Lost a race against a concurrent check-in for the same pair
                    existing = await self.attendance_query_repo.get(
                        event_id=event_id, student_id=student_id
                    )
                    if existing is None:
                        raise
                    return self._already_checked_in(existing, is_walk_in, start)

                await self._publish(record, name)

            metrics.record_check_in(
                result='success', walk_in=is_walk_in, duration=time.perf_counter() - start
            )
            Logger.base.info(
                f'✅ [CHECK-IN] Student {student_id} checked in to event {event_id}'
                f'{" (walk-in)" if is_walk_in else ""}'
            )
            return CheckInResult(record=record, already_checked_in=False, is_walk_in=is_walk_in)

    def _already_checked_in(
        self, record: AttendanceRecord, is_walk_in: bool, start: float
    ) -> CheckInResult:
        metrics.record_check_in(
            result='already_checked_in', walk_in=is_walk_in, duration=time.perf_counter() - start
        )
        Logger.base.info(
            f'🔁 [CHECK-IN] Student {record.student_id} already checked in to event {record.event_id}'
        )
        return CheckInResult(record=record, already_checked_in=True, is_walk_in=is_walk_in)

    async def _display_name(self, student_id: int) -> str:
        student = await self.user_query_repo.get_by_id(student_id)
        return student.name if student else UNKNOWN_STUDENT_NAME

    async def _publish(self, record: AttendanceRecord, name: str) -> None:
        entry = RecentCheckIn(
            record_id=record.id,
            student_id=record.student_id,
            name=name,
            checked_in_at=record.checked_in_at,
        )
        await self.live_feed_broadcaster.broadcast(
            event_id=record.event_id,
            event_data={'event_type': LiveFeedEventType.CHECK_IN, 'check_in': entry},
        )
