from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel

from src.platform.types import UtilsUUID7
from src.service.rsvp.domain.entity.attendance_record_entity import CheckInResult, RecentCheckIn


class CheckInResponse(BaseModel):
    id: UtilsUUID7  # UUID7
    event_id: int
    student_id: int
    checked_in_at: datetime
    already_checked_in: bool
    is_walk_in: bool

    @classmethod
    def from_result(cls, result: CheckInResult) -> 'CheckInResponse':
        return cls(
            id=result.record.id,
            event_id=result.record.event_id,
            student_id=result.record.student_id,
            checked_in_at=result.record.checked_in_at,
            already_checked_in=result.already_checked_in,
            is_walk_in=result.is_walk_in,
        )


class RecentCheckInResponse(BaseModel):
    record_id: UtilsUUID7
    student_id: int
    name: str
    checked_in_at: datetime

    @classmethod
    def from_entry(cls, entry: RecentCheckIn) -> 'RecentCheckInResponse':
        return cls(
            record_id=entry.record_id,
            student_id=entry.student_id,
            name=entry.name,
            checked_in_at=entry.checked_in_at,
        )


class LiveFeedInitialStateResponse(BaseModel):
    event_type: Literal['initial_state']
    event_id: int
    attendance_count: int
    recent_check_ins: List[RecentCheckInResponse]


class LiveFeedCheckInResponse(BaseModel):
    event_type: Literal['check_in']
    event_id: int
    check_in: RecentCheckInResponse
    attendance_count: int
    recent_check_ins: List[RecentCheckInResponse]
