from datetime import datetime, timezone
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.rsvp.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.rsvp.domain.entity.event_entity import EventEntity
from src.service.rsvp.domain.reconciliation_domain import (
    DashboardSummary,
    EventOverview,
    summarize_dashboard,
)


class ListEventsUseCase:
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
    async def list_events(
        self, *, organization_id: Optional[int] = None, now: Optional[datetime] = None
    ) -> List[EventOverview]:
        """Upcoming events soonest first, or every event of one organization"""
        if organization_id is not None:
            events = await self.event_query_repo.list_by_organization(
                organization_id=organization_id
            )
        else:
            events = await self.event_query_repo.list_upcoming(
                now=now or datetime.now(timezone.utc)
            )
        return await self._with_counts(events)

    @Logger.io
    async def get_organization_dashboard(self, *, organization_id: int) -> DashboardSummary:
        events = await self.event_query_repo.list_by_organization(organization_id=organization_id)
        return summarize_dashboard(await self._with_counts(events))

    async def _with_counts(self, events: List[EventEntity]) -> List[EventOverview]:
        counts = await self.reservation_query_repo.count_by_events(
            event_ids=[event.id for event in events if event.id is not None]
        )
        return [
            EventOverview(event=event, reservation_count=counts.get(event.id, 0))
            for event in events
        ]
