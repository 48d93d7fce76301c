from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.service.rsvp.domain.entity.event_entity import EventEntity


class IEventQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        pass

    @abstractmethod
    async def list_upcoming(self, *, now: datetime) -> List[EventEntity]:
        """Events at or after `now`, soonest first"""
        pass

    @abstractmethod
    async def list_by_organization(self, *, organization_id: int) -> List[EventEntity]:
        """All events of one organization, latest event date first"""
        pass
