from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from src.service.rsvp.domain.entity.event_entity import EventEntity
from src.service.rsvp.domain.reconciliation_domain import DashboardSummary, EventOverview


class CreateEventRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field('', max_length=5000)
    event_date: datetime
    location: str = Field(..., min_length=1, max_length=255)
    capacity: int = Field(..., ge=1)

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'title': 'Fall Kickoff Mixer',
                'description': 'Meet the officers, free pizza',
                'event_date': '2026-09-05T18:00:00Z',
                'location': 'Student Union 210',
                'capacity': 50,
            }
        }
    )


class EventResponse(BaseModel):
    id: int
    title: str
    description: str
    event_date: datetime
    location: str
    capacity: int
    organization_id: int
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, event: EventEntity) -> 'EventResponse':
        return cls(
            id=event.id or 0,
            title=event.title,
            description=event.description,
            event_date=event.event_date,
            location=event.location,
            capacity=event.capacity,
            organization_id=event.organization_id,
            created_at=event.created_at,
        )


class EventWithCountResponse(EventResponse):
    reservation_count: int
    fill_rate: int = Field(..., description='Reservations over capacity in percent, clamped to 100')
    is_full: bool = Field(..., description='Advisory: reservations may still exceed capacity')

    @classmethod
    def from_overview(cls, overview: EventOverview) -> 'EventWithCountResponse':
        return cls(
            **EventResponse.from_entity(overview.event).model_dump(),
            reservation_count=overview.reservation_count,
            fill_rate=overview.fill_rate,
            is_full=overview.is_full,
        )


class DashboardResponse(BaseModel):
    total_events: int
    total_reservations: int
    avg_fill_rate: int
    events: List[EventWithCountResponse]

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> 'DashboardResponse':
        return cls(
            total_events=summary.total_events,
            total_reservations=summary.total_reservations,
            avg_fill_rate=summary.avg_fill_rate,
            events=[EventWithCountResponse.from_overview(o) for o in summary.events],
        )


class CheckInUrlResponse(BaseModel):
    event_id: int
    url: str
