import time
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    AlreadyReservedError,
    CapacityExceededError,
    ConstraintConflictError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.rsvp_metrics import metrics
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.rsvp.app.interface.i_reservation_command_repo import IReservationCommandRepo
from src.service.rsvp.domain.entity.reservation_entity import Reservation, ReservationOutcome


class ReserveSeatUseCase:
    """
    RSVP a student to an event.

    Capacity is advisory by default: the ledger accepts the insert and the
    outcome carries the true count, which may exceed capacity under races.
    With ENFORCE_CAPACITY the count check and the insert share one locked
    transaction and a full event raises CapacityExceededError.
    """

    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        reservation_command_repo: IReservationCommandRepo,
        enforce_capacity: bool | None = None,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.reservation_command_repo = reservation_command_repo
        self.enforce_capacity = (
            settings.ENFORCE_CAPACITY if enforce_capacity is None else enforce_capacity
        )
        self.tracer = trace.get_tracer(__name__)

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
    async def reserve(self, *, event_id: int, student_id: int) -> ReservationOutcome:
        """
        Raises:
            NotFoundError: unknown event
            AlreadyReservedError: the student already holds a reservation
            CapacityExceededError: enforcement on and the event is full
        """
        start = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.reserve_seat',
            attributes={'event.id': event_id, 'student.id': student_id},
        ):
            event = await self.event_query_repo.get_by_id(event_id=event_id)
            if not event:
                metrics.record_reservation(
                    result='not_found', duration=time.perf_counter() - start
                )
                raise NotFoundError('Event not found')

            reservation = Reservation.create(event_id=event_id, student_id=student_id)
            try:
                count = await self.reservation_command_repo.create(
                    reservation=reservation,
                    capacity=event.capacity if self.enforce_capacity else None,
                )
            except ConstraintConflictError as e:
                metrics.record_reservation(
                    result='already_reserved', duration=time.perf_counter() - start
                )
                raise AlreadyReservedError('You have already reserved a seat for this event') from e
            except CapacityExceededError:
                metrics.record_reservation(
                    result='capacity_exceeded', duration=time.perf_counter() - start
                )
                raise

            outcome = ReservationOutcome(
                reservation=reservation, reservation_count=count, capacity=event.capacity
            )
            if outcome.over_capacity:
                Logger.base.warning(
                    f'⚠️ [RESERVE] Event {event_id} over capacity: {count}/{event.capacity}'
                )

            metrics.record_reservation(result='success', duration=time.perf_counter() - start)
            Logger.base.info(
                f'🎟️ [RESERVE] Student {student_id} reserved event {event_id} '
                f'({count}/{event.capacity})'
            )
            return outcome
