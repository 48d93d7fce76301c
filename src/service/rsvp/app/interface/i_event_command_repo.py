from abc import ABC, abstractmethod

from src.service.rsvp.domain.entity.event_entity import EventEntity


class IEventCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, event: EventEntity) -> EventEntity:
        pass

    @abstractmethod
    async def delete(self, *, event_id: int) -> bool:
        """Removes the event row only; callers clear both ledgers first"""
        pass
