from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime
from typing import List, Optional

from src.service.rsvp.domain.entity.reservation_entity import Reservation, ReservedEvent


class IReservationQueryRepo(ABC):
    @abstractmethod
    async def get(self, *, event_id: int, student_id: int) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def list_by_event(self, *, event_id: int) -> List[Reservation]:
        """Oldest reservation first"""
        pass

    @abstractmethod
    async def count_by_event(self, *, event_id: int) -> int:
        pass

    @abstractmethod
    async def count_by_events(self, *, event_ids: Iterable[int]) -> dict[int, int]:
        """Counts keyed by event id, 0 for events without reservations"""
        pass

    @abstractmethod
    async def list_upcoming_for_student(
        self, *, student_id: int, now: datetime
    ) -> List[ReservedEvent]:
        """Reservations for events that have not started yet, newest reservation first"""
        pass
