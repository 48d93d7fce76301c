from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_attendance_query_repo import IAttendanceQueryRepo
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.rsvp.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.rsvp.app.query.owned_event import get_owned_event
from src.service.rsvp.domain.entity.attendance_record_entity import RecentCheckIn
from src.service.rsvp.domain.recent_activity import to_recent_check_ins


class ListRecentCheckInsUseCase:
    def __init__(
        self,
        *,
        event_query_repo: IEventQueryRepo,
        attendance_query_repo: IAttendanceQueryRepo,
        user_query_repo: IUserQueryRepo,
    ) -> None:
        self.event_query_repo = event_query_repo
        self.attendance_query_repo = attendance_query_repo
        self.user_query_repo = user_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
        attendance_query_repo: IAttendanceQueryRepo = Depends(
            Provide[Container.attendance_query_repo]
        ),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    ) -> Self:
        return cls(
            event_query_repo=event_query_repo,
            attendance_query_repo=attendance_query_repo,
            user_query_repo=user_query_repo,
        )

    @Logger.io
    async def list_recent(
        self, *, event_id: int, requester_id: int, limit: int | None = None
    ) -> List[RecentCheckIn]:
        await get_owned_event(self.event_query_repo, event_id=event_id, requester_id=requester_id)
        records = await self.attendance_query_repo.list_recent(
            event_id=event_id, limit=limit or settings.RECENT_ACTIVITY_LIMIT
        )
        profiles = await self.user_query_repo.get_by_ids(r.student_id for r in records)
        return to_recent_check_ins(records, profiles)
