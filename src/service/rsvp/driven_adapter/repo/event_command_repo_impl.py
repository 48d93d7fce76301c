from sqlalchemy import delete

from src.platform.database.repo_session import SessionFactory, SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.rsvp.domain.entity.event_entity import EventEntity
from src.service.rsvp.driven_adapter.model.event_model import EventModel
from src.service.rsvp.driven_adapter.repo.model_mapper import event_to_entity


class EventCommandRepoImpl(SessionScopedRepo, IEventCommandRepo):
    def __init__(self, session_factory: SessionFactory | None = None):
        super().__init__(session_factory)

    @Logger.io
    async def create(self, *, event: EventEntity) -> EventEntity:
        event_model = EventModel(
            title=event.title,
            description=event.description,
            event_date=event.event_date,
            location=event.location,
            capacity=event.capacity,
            organization_id=event.organization_id,
        )
        if event.created_at is not None:
            event_model.created_at = event.created_at

        async with self._transaction() as session:
            session.add(event_model)
            await session.flush()
            await session.refresh(event_model)
            return event_to_entity(event_model)

    @Logger.io
    async def delete(self, *, event_id: int) -> bool:
        async with self._transaction() as session:
            result = await session.execute(delete(EventModel).where(EventModel.id == event_id))
            return result.rowcount > 0
