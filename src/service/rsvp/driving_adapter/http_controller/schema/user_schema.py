"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr

from src.service.rsvp.domain.entity.user_entity import UserEntity, UserRole


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=8,
        max_length=72,
        description='Password must be 8-72 characters (bcrypt limit)',
    )
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.STUDENT

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'email': 'student@university.edu',
                'password': 'P@ssw0rd',
                'name': 'Jane Student',
                'role': 'student',
            }
        }
    )


class LoginRequest(BaseModel):
    email: EmailStr
    password: SecretStr = Field(..., min_length=1, max_length=72)


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool

    @classmethod
    def from_entity(cls, user: UserEntity) -> 'UserResponse':
        return cls(
            id=user.id or 0,
            email=user.email,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
        )
