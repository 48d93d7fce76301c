from sqlalchemy.exc import IntegrityError

from src.platform.database.integrity import is_unique_violation
from src.platform.database.repo_session import SessionFactory, SessionScopedRepo
from src.platform.exception.exceptions import ConstraintConflictError
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.rsvp.domain.entity.user_entity import UserEntity
from src.service.rsvp.driven_adapter.model.user_model import UserModel
from src.service.rsvp.driven_adapter.repo.model_mapper import user_to_entity


class UserCommandRepoImpl(SessionScopedRepo, IUserCommandRepo):
    def __init__(self, session_factory: SessionFactory | None = None):
        super().__init__(session_factory)

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        user_model = UserModel(
            email=user_entity.email,
            hashed_password=user_entity.hashed_password,
            name=user_entity.name,
            role=user_entity.role.value,
            is_active=user_entity.is_active,
        )

        try:
            async with self._transaction() as session:
                session.add(user_model)
                await session.flush()
                await session.refresh(user_model)
                return user_to_entity(user_model)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ConstraintConflictError('Email already registered') from e
            raise
