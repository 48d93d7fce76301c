from datetime import datetime, timezone

import attrs
import uuid_utils as uuid
from uuid_utils import UUID

from src.service.rsvp.domain.entity.event_entity import as_utc


@attrs.define(frozen=True)
class AttendanceRecord:
    """Append-only check-in. At most one per (event, student)."""

    id: UUID
    event_id: int
    student_id: int
    checked_in_at: datetime = attrs.field(converter=as_utc)

    @classmethod
    def create(cls, *, event_id: int, student_id: int) -> 'AttendanceRecord':
        return cls(
            id=uuid.uuid7(),
            event_id=event_id,
            student_id=student_id,
            checked_in_at=datetime.now(timezone.utc),
        )


@attrs.define(frozen=True)
class CheckInResult:
    record: AttendanceRecord
    already_checked_in: bool
    is_walk_in: bool


@attrs.define(frozen=True)
class RecentCheckIn:
    """An attendance record resolved to a display name for observer feeds"""

    record_id: UUID
    student_id: int
    name: str
    checked_in_at: datetime
