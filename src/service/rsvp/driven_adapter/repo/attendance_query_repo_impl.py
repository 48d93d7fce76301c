from typing import List, Optional

from sqlalchemy import func, select

from src.platform.database.repo_session import SessionFactory, SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_attendance_query_repo import IAttendanceQueryRepo
from src.service.rsvp.domain.entity.attendance_record_entity import AttendanceRecord
from src.service.rsvp.driven_adapter.model.check_in_model import CheckInModel
from src.service.rsvp.driven_adapter.repo.model_mapper import check_in_to_entity


class AttendanceQueryRepoImpl(SessionScopedRepo, IAttendanceQueryRepo):
    def __init__(self, session_factory: SessionFactory | None = None):
        super().__init__(session_factory)

    @Logger.io
    async def get(self, *, event_id: int, student_id: int) -> Optional[AttendanceRecord]:
        async with self._get_session() as session:
            result = await session.execute(
                select(CheckInModel).where(
                    CheckInModel.event_id == event_id,
                    CheckInModel.student_id == student_id,
                )
            )
            model = result.scalar_one_or_none()
            return check_in_to_entity(model) if model else None

    @Logger.io
    async def list_by_event(self, *, event_id: int) -> List[AttendanceRecord]:
        async with self._get_session() as session:
            result = await session.execute(
                select(CheckInModel)
                .where(CheckInModel.event_id == event_id)
                .order_by(CheckInModel.checked_in_at.asc(), CheckInModel.id.asc())
            )
            return [check_in_to_entity(model) for model in result.scalars()]

    @Logger.io
    async def list_recent(self, *, event_id: int, limit: int) -> List[AttendanceRecord]:
        async with self._get_session() as session:
            result = await session.execute(
                select(CheckInModel)
                .where(CheckInModel.event_id == event_id)
                .order_by(CheckInModel.checked_in_at.desc(), CheckInModel.id.desc())
                .limit(limit)
            )
            return [check_in_to_entity(model) for model in result.scalars()]

    @Logger.io
    async def count_by_event(self, *, event_id: int) -> int:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.count())
                .select_from(CheckInModel)
                .where(CheckInModel.event_id == event_id)
            )
            return result.scalar_one()
