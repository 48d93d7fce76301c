from datetime import datetime, timezone

import attrs
import uuid_utils as uuid
from uuid_utils import UUID

from src.service.rsvp.domain.entity.event_entity import EventEntity, as_utc


@attrs.define(frozen=True)
class Reservation:
    """One live RSVP per (event, student). Created or deleted, never updated."""

    id: UUID
    event_id: int
    student_id: int
    created_at: datetime = attrs.field(converter=as_utc)

    @classmethod
    def create(cls, *, event_id: int, student_id: int) -> 'Reservation':
        return cls(
            id=uuid.uuid7(),
            event_id=event_id,
            student_id=student_id,
            created_at=datetime.now(timezone.utc),
        )


@attrs.define(frozen=True)
class ReservationOutcome:
    reservation: Reservation
    reservation_count: int  # true count after the insert, may exceed capacity
    capacity: int

    @property
    def over_capacity(self) -> bool:
        return self.reservation_count > self.capacity


@attrs.define(frozen=True)
class CancellationOutcome:
    event_id: int
    student_id: int
    cancelled: bool  # False when there was nothing to cancel


@attrs.define(frozen=True)
class ReservedEvent:
    """A student's reservation joined with the event it belongs to"""

    reservation: Reservation
    event: EventEntity
