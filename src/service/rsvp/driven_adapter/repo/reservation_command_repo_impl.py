from typing import Optional
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.integrity import is_unique_violation
from src.platform.database.repo_session import SessionFactory, SessionScopedRepo
from src.platform.exception.exceptions import CapacityExceededError, ConstraintConflictError
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_reservation_command_repo import IReservationCommandRepo
from src.service.rsvp.domain.entity.reservation_entity import Reservation
from src.service.rsvp.driven_adapter.model.event_model import EventModel
from src.service.rsvp.driven_adapter.model.reservation_model import ReservationModel


class ReservationCommandRepoImpl(SessionScopedRepo, IReservationCommandRepo):
    def __init__(self, session_factory: SessionFactory | None = None):
        super().__init__(session_factory)

    @staticmethod
    async def _count(session: AsyncSession, event_id: int) -> int:
        result = await session.execute(
            select(func.count())
            .select_from(ReservationModel)
            .where(ReservationModel.event_id == event_id)
        )
        return result.scalar_one()

    @Logger.io
    async def create(self, *, reservation: Reservation, capacity: Optional[int] = None) -> int:
        try:
            async with self._transaction() as session:
                if capacity is not None:
                    # Serialize reservers of this event so count-then-insert cannot overshoot
                    await session.execute(
                        select(EventModel.id)
                        .where(EventModel.id == reservation.event_id)
                        .with_for_update()
                    )
                    if await self._count(session, reservation.event_id) >= capacity:
                        raise CapacityExceededError('Event is at capacity')

                session.add(
                    ReservationModel(
                        id=uuid.UUID(str(reservation.id)),
                        event_id=reservation.event_id,
                        student_id=reservation.student_id,
                        created_at=reservation.created_at,
                    )
                )
                await session.flush()
                return await self._count(session, reservation.event_id)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ConstraintConflictError('Reservation already exists') from e
            raise

    @Logger.io
    async def delete(self, *, event_id: int, student_id: int) -> bool:
        async with self._transaction() as session:
            result = await session.execute(
                delete(ReservationModel).where(
                    ReservationModel.event_id == event_id,
                    ReservationModel.student_id == student_id,
                )
            )
            return result.rowcount > 0

    @Logger.io
    async def delete_by_event(self, *, event_id: int) -> int:
        async with self._transaction() as session:
            result = await session.execute(
                delete(ReservationModel).where(ReservationModel.event_id == event_id)
            )
            return result.rowcount
