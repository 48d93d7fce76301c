from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.rsvp.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.rsvp.app.query.owned_event import get_owned_event
from src.service.rsvp.domain.reconciliation_domain import EventOverview


class GetEventUseCase:
    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        reservation_query_repo: IReservationQueryRepo,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(event_query_repo=event_query_repo, reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def get_event(self, *, event_id: int) -> EventOverview:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')

        count = await self.reservation_query_repo.count_by_event(event_id=event_id)
        return EventOverview(event=event, reservation_count=count)

    @Logger.io
    async def get_check_in_url(self, *, event_id: int, requester_id: int) -> str:
        """URL encoded into the QR code shown at the venue"""
        event = await get_owned_event(
            self.event_query_repo, event_id=event_id, requester_id=requester_id
        )
        return f'{settings.PUBLIC_BASE_URL.rstrip("/")}{event.check_in_path()}'
