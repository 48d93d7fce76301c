from uuid_utils import UUID

from src.service.rsvp.domain.entity.attendance_record_entity import AttendanceRecord
from src.service.rsvp.domain.entity.event_entity import EventEntity
from src.service.rsvp.domain.entity.reservation_entity import Reservation
from src.service.rsvp.domain.entity.user_entity import UserEntity, UserRole
from src.service.rsvp.driven_adapter.model.check_in_model import CheckInModel
from src.service.rsvp.driven_adapter.model.event_model import EventModel
from src.service.rsvp.driven_adapter.model.reservation_model import ReservationModel
from src.service.rsvp.driven_adapter.model.user_model import UserModel


def user_to_entity(model: UserModel) -> UserEntity:
    return UserEntity(
        id=model.id,
        email=model.email,
        name=model.name,
        hashed_password=model.hashed_password,
        role=UserRole(model.role),
        is_active=model.is_active,
        created_at=model.created_at,
    )


def event_to_entity(model: EventModel) -> EventEntity:
    return EventEntity(
        id=model.id,
        title=model.title,
        description=model.description or '',
        event_date=model.event_date,
        location=model.location,
        capacity=model.capacity,
        organization_id=model.organization_id,
        created_at=model.created_at,
    )


def reservation_to_entity(model: ReservationModel) -> Reservation:
    return Reservation(
        id=UUID(str(model.id)),  # stdlib uuid.UUID -> uuid_utils.UUID
        event_id=model.event_id,
        student_id=model.student_id,
        created_at=model.created_at,
    )


def check_in_to_entity(model: CheckInModel) -> AttendanceRecord:
    return AttendanceRecord(
        id=UUID(str(model.id)),
        event_id=model.event_id,
        student_id=model.student_id,
        checked_in_at=model.checked_in_at,
    )
