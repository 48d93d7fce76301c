from fastapi import Depends
from opentelemetry import trace

from src.platform.exception.exceptions import ForbiddenError
from src.service.rsvp.domain.entity.user_entity import UserEntity
from src.service.rsvp.driving_adapter.http_controller.user_controller import get_current_user


async def require_student(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_student',
        attributes={
            'user.id': current_user.id or 0,
            'user.role': current_user.role.value,
        },
    ):
        if not current_user.is_student:
            raise ForbiddenError('Only students can perform this action')
        return current_user


async def require_organization(
    current_user: UserEntity = Depends(get_current_user),
) -> UserEntity:
    if not current_user.is_organization:
        raise ForbiddenError('Only organizations can perform this action')
    return current_user
