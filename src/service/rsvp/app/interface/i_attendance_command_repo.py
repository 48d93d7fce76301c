from abc import ABC, abstractmethod

from src.service.rsvp.domain.entity.attendance_record_entity import AttendanceRecord


class IAttendanceCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, record: AttendanceRecord) -> AttendanceRecord:
        """
        Raises:
            ConstraintConflictError: the student is already checked in to the event
        """
        pass

    @abstractmethod
    async def delete_by_event(self, *, event_id: int) -> int:
        pass
