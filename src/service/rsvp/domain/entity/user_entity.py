from datetime import datetime
from enum import Enum
from typing import Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import (
    AuthenticationError,
    DomainError,
    ForbiddenError,
    LoginError,
)
from src.service.rsvp.app.interface.i_password_hasher import IPasswordHasher


UNKNOWN_STUDENT_NAME = 'Unknown Student'


class UserRole(str, Enum):
    STUDENT = 'student'
    ORGANIZATION = 'organization'


@attrs.define
class UserEntity:
    email: str = ''
    name: str = ''
    hashed_password: str = attrs.field(default='', repr=False)
    id: Optional[int] = None
    role: UserRole = UserRole.STUDENT
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT

    @property
    def is_organization(self) -> bool:
        return self.role == UserRole.ORGANIZATION

    def validate_active(self) -> None:
        if not self.is_active:
            raise ForbiddenError('User is inactive')

    def validate_exists(self) -> None:
        if not self.id or not self.email:
            raise AuthenticationError('User not found')

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise LoginError('LOGIN_BAD_CREDENTIALS')

        return user_entity

    @staticmethod
    def validate_role(role: UserRole | str) -> None:
        valid_roles = [r.value for r in UserRole]
        if role not in valid_roles:
            raise DomainError(f'Invalid role: {role}. Must be one of: {", ".join(valid_roles)}')

    def set_password(self, plain_password: str, password_hasher: IPasswordHasher) -> None:
        if not isinstance(password_hasher, IPasswordHasher):
            raise TypeError('password_hasher must implement IPasswordHasher')

        self.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(plain_password)
        )
