from datetime import datetime
from typing import List, Optional

from sqlalchemy import select

from src.platform.database.repo_session import SessionFactory, SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.rsvp.domain.entity.event_entity import EventEntity
from src.service.rsvp.driven_adapter.model.event_model import EventModel
from src.service.rsvp.driven_adapter.repo.model_mapper import event_to_entity


class EventQueryRepoImpl(SessionScopedRepo, IEventQueryRepo):
    def __init__(self, session_factory: SessionFactory | None = None):
        super().__init__(session_factory)

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[EventEntity]:
        async with self._get_session() as session:
            event_model = await session.get(EventModel, event_id)
            return event_to_entity(event_model) if event_model else None

    @Logger.io
    async def list_upcoming(self, *, now: datetime) -> List[EventEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(EventModel)
                .where(EventModel.event_date >= now)
                .order_by(EventModel.event_date.asc(), EventModel.id.asc())
            )
            return [event_to_entity(model) for model in result.scalars()]

    @Logger.io
    async def list_by_organization(self, *, organization_id: int) -> List[EventEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(EventModel)
                .where(EventModel.organization_id == organization_id)
                .order_by(EventModel.event_date.desc(), EventModel.id.desc())
            )
            return [event_to_entity(model) for model in result.scalars()]
