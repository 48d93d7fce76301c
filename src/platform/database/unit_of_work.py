"""
Unit of Work - one database transaction shared by several repositories

Used where an operation must touch more than one table atomically, e.g.
deleting an event together with its reservation and attendance ledgers.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import get_async_session


if TYPE_CHECKING:
    from src.service.rsvp.app.interface.i_attendance_command_repo import (
        IAttendanceCommandRepo,
    )
    from src.service.rsvp.app.interface.i_event_command_repo import IEventCommandRepo
    from src.service.rsvp.app.interface.i_reservation_command_repo import (
        IReservationCommandRepo,
    )


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            await uow.reservation_command_repo.delete_by_event(event_id=...)
            await uow.commit()

    Leaving the block without commit() rolls back.
    """

    event_command_repo: IEventCommandRepo
    reservation_command_repo: IReservationCommandRepo
    attendance_command_repo: IAttendanceCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.rsvp.driven_adapter.repo.attendance_command_repo_impl import (
            AttendanceCommandRepoImpl,
        )
        from src.service.rsvp.driven_adapter.repo.event_command_repo_impl import (
            EventCommandRepoImpl,
        )
        from src.service.rsvp.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )

        # Repositories share the UoW session instead of opening their own
        self.event_command_repo = EventCommandRepoImpl(session_factory=None)
        self.event_command_repo.session = self.session
        self.reservation_command_repo = ReservationCommandRepoImpl(session_factory=None)
        self.reservation_command_repo.session = self.session
        self.attendance_command_repo = AttendanceCommandRepoImpl(session_factory=None)
        self.attendance_command_repo.session = self.session

        return await super().__aenter__()

    async def _commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    return SqlAlchemyUnitOfWork(session)
