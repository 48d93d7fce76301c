from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy.ext.asyncio import AsyncSession


SessionFactory = Callable[..., AsyncContextManager[AsyncSession]]


class SessionScopedRepo:
    """
    Session handling shared by the SQLAlchemy repositories.

    Standalone, a repository opens a session per call from `session_factory`.
    Inside a unit of work, the UoW assigns `session` and owns commit/rollback.
    """

    def __init__(self, session_factory: SessionFactory | None = None) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        """Write scope: commits on success when standalone, defers to the UoW otherwise"""
        if self.session is not None:
            yield self.session
            await self.session.flush()
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        else:
            raise RuntimeError('No session or session_factory available')
