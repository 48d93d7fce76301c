from datetime import datetime, timedelta, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_attendance_query_repo import IAttendanceQueryRepo
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.rsvp.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.rsvp.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.rsvp.app.query.owned_event import get_owned_event
from src.service.rsvp.domain.reconciliation_domain import (
    EventReconciliationReport,
    RosterSortState,
    reconcile,
    recent_reservation_count,
    reservation_trend,
    sort_roster,
)


class GetEventReconciliationUseCase:
    """
    Organizer view of one event: both ledgers merged into a roster plus the
    derived counts and rates. Read-only; nothing is written back.
    """

    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        reservation_query_repo: IReservationQueryRepo,
        attendance_query_repo: IAttendanceQueryRepo,
        user_query_repo: IUserQueryRepo,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.reservation_query_repo = reservation_query_repo
        self.attendance_query_repo = attendance_query_repo
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        attendance_query_repo: IAttendanceQueryRepo = Depends(
            Provide[Container.attendance_query_repo]
        ),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            reservation_query_repo=reservation_query_repo,
            attendance_query_repo=attendance_query_repo,
            user_query_repo=user_query_repo,
        )

    @Logger.io
    async def get_reconciliation(
        self,
        *,
        event_id: int,
        requester_id: int,
        sort_state: RosterSortState = RosterSortState(),
        now: Optional[datetime] = None,
    ) -> EventReconciliationReport:
        now = now or datetime.now(timezone.utc)
        event = await get_owned_event(
            self.event_query_repo, event_id=event_id, requester_id=requester_id
        )

        reservations = await self.reservation_query_repo.list_by_event(event_id=event_id)
        attendance = await self.attendance_query_repo.list_by_event(event_id=event_id)
        profiles = await self.user_query_repo.get_by_ids(
            {r.student_id for r in reservations} | {a.student_id for a in attendance}
        )

        summary = reconcile(
            event=event, reservations=reservations, attendance=attendance, profiles=profiles
        )
        return EventReconciliationReport(
            event=event,
            summary=summary,
            sort_state=sort_state,
            roster=tuple(sort_roster(summary.roster, sort_state)),
            days_until_event=event.days_until(now),
            recent_reservation_count=recent_reservation_count(
                reservations,
                now=now,
                window=timedelta(hours=settings.RECENT_RESERVATION_WINDOW_HOURS),
            ),
            reservation_trend=tuple(reservation_trend(reservations)),
        )
