from datetime import datetime
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.rsvp.domain.entity.event_entity import EventEntity


class CreateEventUseCase:
    def __init__(self, *, event_command_repo: IEventCommandRepo) -> None:
        self.event_command_repo = event_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_command_repo: IEventCommandRepo = Depends(Provide[Container.event_command_repo]),
    ) -> Self:
        return cls(event_command_repo=event_command_repo)

    @Logger.io
    async def create_event(
        self,
        *,
        organization_id: int,
        title: str,
        description: str,
        event_date: datetime,
        location: str,
        capacity: int,
    ) -> EventEntity:
        event = EventEntity.create(
            title=title,
            description=description,
            event_date=event_date,
            location=location,
            capacity=capacity,
            organization_id=organization_id,
        )
        created = await self.event_command_repo.create(event=event)
        Logger.base.info(
            f'📅 [EVENT] Created event {created.id} "{created.title}" '
            f'(capacity={created.capacity}) for organization {organization_id}'
        )
        return created
