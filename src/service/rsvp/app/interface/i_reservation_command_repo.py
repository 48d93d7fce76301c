from abc import ABC, abstractmethod
from typing import Optional

from src.service.rsvp.domain.entity.reservation_entity import Reservation


class IReservationCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, reservation: Reservation, capacity: Optional[int] = None) -> int:
        """
        Insert one reservation and return the event's reservation count after it.

        With `capacity` set, the event is locked and the insert is refused when
        the count has already reached it.

        Raises:
            ConstraintConflictError: the student already holds a reservation for the event
            CapacityExceededError: `capacity` given and already reached
        """
        pass

    @abstractmethod
    async def delete(self, *, event_id: int, student_id: int) -> bool:
        """False when there was no reservation to delete"""
        pass

    @abstractmethod
    async def delete_by_event(self, *, event_id: int) -> int:
        pass
