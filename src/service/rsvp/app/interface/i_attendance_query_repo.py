from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.rsvp.domain.entity.attendance_record_entity import AttendanceRecord


class IAttendanceQueryRepo(ABC):
    @abstractmethod
    async def get(self, *, event_id: int, student_id: int) -> Optional[AttendanceRecord]:
        pass

    @abstractmethod
    async def list_by_event(self, *, event_id: int) -> List[AttendanceRecord]:
        """Oldest check-in first"""
        pass

    @abstractmethod
    async def list_recent(self, *, event_id: int, limit: int) -> List[AttendanceRecord]:
        """Newest check-in first"""
        pass

    @abstractmethod
    async def count_by_event(self, *, event_id: int) -> int:
        pass
