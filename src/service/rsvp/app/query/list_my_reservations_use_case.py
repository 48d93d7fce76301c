from datetime import datetime, timezone
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.rsvp.domain.entity.reservation_entity import ReservedEvent


class ListMyReservationsUseCase:
    def __init__(self, *, reservation_query_repo: IReservationQueryRepo) -> None:
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def list_my_reservations(
        self, *, student_id: int, now: Optional[datetime] = None
    ) -> List[ReservedEvent]:
        return await self.reservation_query_repo.list_upcoming_for_student(
            student_id=student_id, now=now or datetime.now(timezone.utc)
        )
