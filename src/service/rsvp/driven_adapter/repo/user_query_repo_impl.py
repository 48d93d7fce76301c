from collections.abc import Iterable
from typing import Optional

from pydantic import SecretStr
from sqlalchemy import select

from src.platform.database.repo_session import SessionFactory, SessionScopedRepo
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.interface.i_password_hasher import IPasswordHasher
from src.service.rsvp.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.rsvp.domain.entity.user_entity import UserEntity
from src.service.rsvp.driven_adapter.model.user_model import UserModel
from src.service.rsvp.driven_adapter.repo.model_mapper import user_to_entity
from src.service.rsvp.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)


class UserQueryRepoImpl(SessionScopedRepo, IUserQueryRepo):
    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        password_hasher: IPasswordHasher | None = None,
    ):
        super().__init__(session_factory)
        self.password_hasher = password_hasher or BcryptPasswordHasher()

    @Logger.io
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        async with self._get_session() as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email))
            user_model = result.scalar_one_or_none()
            return user_to_entity(user_model) if user_model else None

    @Logger.io
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        async with self._get_session() as session:
            user_model = await session.get(UserModel, user_id)
            return user_to_entity(user_model) if user_model else None

    @Logger.io
    async def get_by_ids(self, user_ids: Iterable[int]) -> dict[int, UserEntity]:
        ids = set(user_ids)
        if not ids:
            return {}

        async with self._get_session() as session:
            result = await session.execute(select(UserModel).where(UserModel.id.in_(ids)))
            return {model.id: user_to_entity(model) for model in result.scalars()}

    @Logger.io
    async def exists_by_email(self, email: str) -> bool:
        async with self._get_session() as session:
            result = await session.execute(select(UserModel.id).where(UserModel.email == email))
            return result.scalar_one_or_none() is not None

    @Logger.io
    async def verify_password(self, email: str, plain_password: str) -> Optional[UserEntity]:
        user = await self.get_by_email(email)
        if not user:
            return None

        if not self.password_hasher.verify_password(
            plain_password=SecretStr(plain_password), hashed_password=user.hashed_password
        ):
            return None

        return user
