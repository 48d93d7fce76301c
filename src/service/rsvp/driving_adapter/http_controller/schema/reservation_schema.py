from datetime import datetime

from pydantic import BaseModel

from src.platform.types import UtilsUUID7
from src.service.rsvp.domain.entity.reservation_entity import (
    CancellationOutcome,
    ReservationOutcome,
    ReservedEvent,
)
from src.service.rsvp.driving_adapter.http_controller.schema.event_schema import EventResponse


class ReservationResponse(BaseModel):
    id: UtilsUUID7  # UUID7
    event_id: int
    student_id: int
    created_at: datetime
    reservation_count: int
    capacity: int
    over_capacity: bool

    @classmethod
    def from_outcome(cls, outcome: ReservationOutcome) -> 'ReservationResponse':
        reservation = outcome.reservation
        return cls(
            id=reservation.id,
            event_id=reservation.event_id,
            student_id=reservation.student_id,
            created_at=reservation.created_at,
            reservation_count=outcome.reservation_count,
            capacity=outcome.capacity,
            over_capacity=outcome.over_capacity,
        )


class CancellationResponse(BaseModel):
    event_id: int
    student_id: int
    cancelled: bool

    @classmethod
    def from_outcome(cls, outcome: CancellationOutcome) -> 'CancellationResponse':
        return cls(
            event_id=outcome.event_id,
            student_id=outcome.student_id,
            cancelled=outcome.cancelled,
        )


class MyReservationResponse(BaseModel):
    reservation_id: UtilsUUID7
    reserved_at: datetime
    event: EventResponse

    @classmethod
    def from_reserved_event(cls, item: ReservedEvent) -> 'MyReservationResponse':
        return cls(
            reservation_id=item.reservation.id,
            reserved_at=item.reservation.created_at,
            event=EventResponse.from_entity(item.event),
        )
