import uuid

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from src.platform.database.integrity import is_unique_violation
from src.platform.database.repo_session import SessionFactory, SessionScopedRepo
from src.platform.exception.exceptions import ConstraintConflictError
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_attendance_command_repo import IAttendanceCommandRepo
from src.service.rsvp.domain.entity.attendance_record_entity import AttendanceRecord
from src.service.rsvp.driven_adapter.model.check_in_model import CheckInModel


class AttendanceCommandRepoImpl(SessionScopedRepo, IAttendanceCommandRepo):
    def __init__(self, session_factory: SessionFactory | None = None):
        super().__init__(session_factory)

    @Logger.io
    async def create(self, *, record: AttendanceRecord) -> AttendanceRecord:
        try:
            async with self._transaction() as session:
                session.add(
                    CheckInModel(
                        id=uuid.UUID(str(record.id)),
                        event_id=record.event_id,
                        student_id=record.student_id,
                        checked_in_at=record.checked_in_at,
                    )
                )
                await session.flush()
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ConstraintConflictError('Student already checked in') from e
            raise
        return record

    @Logger.io
    async def delete_by_event(self, *, event_id: int) -> int:
        async with self._transaction() as session:
            result = await session.execute(
                delete(CheckInModel).where(CheckInModel.event_id == event_id)
            )
            return result.rowcount
