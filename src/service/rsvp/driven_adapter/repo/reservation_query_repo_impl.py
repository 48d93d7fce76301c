from collections.abc import Iterable
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select

from src.platform.database.repo_session import SessionFactory, SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.rsvp.domain.entity.reservation_entity import Reservation, ReservedEvent
from src.service.rsvp.driven_adapter.model.event_model import EventModel
from src.service.rsvp.driven_adapter.model.reservation_model import ReservationModel
from src.service.rsvp.driven_adapter.repo.model_mapper import (
    event_to_entity,
    reservation_to_entity,
)


class ReservationQueryRepoImpl(SessionScopedRepo, IReservationQueryRepo):
    def __init__(self, session_factory: SessionFactory | None = None):
        super().__init__(session_factory)

    @Logger.io
    async def get(self, *, event_id: int, student_id: int) -> Optional[Reservation]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ReservationModel).where(
                    ReservationModel.event_id == event_id,
                    ReservationModel.student_id == student_id,
                )
            )
            model = result.scalar_one_or_none()
            return reservation_to_entity(model) if model else None

    @Logger.io
    async def list_by_event(self, *, event_id: int) -> List[Reservation]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ReservationModel)
                .where(ReservationModel.event_id == event_id)
                .order_by(ReservationModel.created_at.asc(), ReservationModel.id.asc())
            )
            return [reservation_to_entity(model) for model in result.scalars()]

    @Logger.io
    async def count_by_event(self, *, event_id: int) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.count())
                .select_from(ReservationModel)
                .where(ReservationModel.event_id == event_id)
            )
            return result.scalar_one()

    @Logger.io
    async def count_by_events(self, *, event_ids: Iterable[int]) -> dict[int, int]:
        ids = set(event_ids)
        counts = dict.fromkeys(ids, 0)
        if not ids:
            return counts

        async with self._get_session() as session:
            result = await session.execute(
                select(ReservationModel.event_id, func.count())
                .where(ReservationModel.event_id.in_(ids))
                .group_by(ReservationModel.event_id)
            )
            for event_id, count in result.all():
                counts[event_id] = count
        return counts

    @Logger.io
    async def list_upcoming_for_student(
        self, *, student_id: int, now: datetime
    ) -> List[ReservedEvent]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ReservationModel, EventModel)
                .join(EventModel, EventModel.id == ReservationModel.event_id)
                .where(ReservationModel.student_id == student_id, EventModel.event_date >= now)
                .order_by(ReservationModel.created_at.desc())
            )
            return [
                ReservedEvent(
                    reservation=reservation_to_entity(reservation_model),
                    event=event_to_entity(event_model),
                )
                for reservation_model, event_model in result.all()
            ]
