from datetime import datetime, timedelta, timezone
import time
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import CancellationWindowClosedError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.rsvp_metrics import metrics
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.rsvp.app.interface.i_reservation_command_repo import IReservationCommandRepo
from src.service.rsvp.domain.entity.reservation_entity import CancellationOutcome


class CancelReservationUseCase:
    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        reservation_command_repo: IReservationCommandRepo,
        cancellation_window: timedelta | None = None,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.reservation_command_repo = reservation_command_repo
        self.cancellation_window = cancellation_window or timedelta(
            hours=settings.CANCELLATION_WINDOW_HOURS
        )

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        reservation_command_repo: IReservationCommandRepo = Depends(
            Provide[Container.reservation_command_repo]
        ),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            reservation_command_repo=reservation_command_repo,
        )

    @Logger.io
    async def cancel(
        self, *, event_id: int, student_id: int, now: Optional[datetime] = None
    ) -> CancellationOutcome:
        """
        Deleting a reservation that does not exist succeeds with cancelled=False.

        Raises:
            NotFoundError: unknown event
            CancellationWindowClosedError: the event started longer ago than the window;
                the reservation is left in place
        """
        start = time.perf_counter()
        now = now or datetime.now(timezone.utc)

        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            metrics.record_cancellation(result='not_found', duration=time.perf_counter() - start)
            raise NotFoundError('Event not found')

        try:
            event.validate_cancellation_window(now, self.cancellation_window)
        except CancellationWindowClosedError:
            metrics.record_cancellation(
                result='window_closed', duration=time.perf_counter() - start
            )
            raise

        cancelled = await self.reservation_command_repo.delete(
            event_id=event_id, student_id=student_id
        )
        metrics.record_cancellation(
            result='success' if cancelled else 'not_reserved',
            duration=time.perf_counter() - start,
        )
        Logger.base.info(
            f'🎟️ [CANCEL] Student {student_id} event {event_id}: '
            f'{"cancelled" if cancelled else "nothing to cancel"}'
        )
        return CancellationOutcome(event_id=event_id, student_id=student_id, cancelled=cancelled)
