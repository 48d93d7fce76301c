from abc import ABC, abstractmethod

from src.service.rsvp.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    @abstractmethod
    async def create(self, user_entity: UserEntity) -> UserEntity:
        """
        Raises:
            ConstraintConflictError: the email is already registered
        """
        pass
