from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo


class DeleteEventUseCase:
    """
    Delete an event together with both of its ledgers.

    Reservations and check-ins go first, then the event row, all in one
    transaction: either everything is gone or nothing is.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, event_query_repo: IEventQueryRepo) -> None:
        self.uow = uow
        self.event_query_repo = event_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        event_query_repo: IEventQueryRepo = Depends(Provide[Container.event_query_repo]),
    ) -> Self:
        return cls(uow=uow, event_query_repo=event_query_repo)

    @Logger.io
    async def delete_event(self, *, event_id: int, requester_id: int) -> None:
        event = await self.event_query_repo.get_by_id(event_id=event_id)
        if not event:
            raise NotFoundError('Event not found')
        event.validate_owner(requester_id)

        async with self.uow:
            reservations = await self.uow.reservation_command_repo.delete_by_event(
                event_id=event_id
            )
            check_ins = await self.uow.attendance_command_repo.delete_by_event(event_id=event_id)
            deleted = await self.uow.event_command_repo.delete(event_id=event_id)
            if not deleted:
                raise NotFoundError('Event not found')
            await self.uow.commit()

        Logger.base.info(
            f'🗑️ [EVENT] Deleted event {event_id} '
            f'with {reservations} reservations and {check_ins} check-ins'
        )
