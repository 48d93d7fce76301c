from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Optional

from src.service.rsvp.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: Iterable[int]) -> dict[int, UserEntity]:
        """Profiles keyed by id; unknown ids are simply absent"""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def verify_password(self, email: str, plain_password: str) -> Optional[UserEntity]:
        pass
