from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel

from src.service.rsvp.domain.enum.roster_sort import RosterSortField, SortDirection
from src.service.rsvp.domain.reconciliation_domain import EventReconciliationReport, RosterEntry


class RosterEntryResponse(BaseModel):
    student_id: int
    name: str
    email: str
    has_reservation: bool
    has_check_in: bool
    is_walk_in: bool
    status: str
    reserved_at: Optional[datetime]
    checked_in_at: Optional[datetime]

    @classmethod
    def from_entry(cls, entry: RosterEntry) -> 'RosterEntryResponse':
        return cls(
            student_id=entry.student_id,
            name=entry.name,
            email=entry.email,
            has_reservation=entry.has_reservation,
            has_check_in=entry.has_check_in,
            is_walk_in=entry.is_walk_in,
            status=entry.status,
            reserved_at=entry.reserved_at,
            checked_in_at=entry.checked_in_at,
        )


class TrendPointResponse(BaseModel):
    day: date
    reservations: int


class ReconciliationResponse(BaseModel):
    event_id: int
    title: str
    event_date: datetime
    capacity: int
    reservation_count: int
    attendance_count: int
    matched_count: int
    walk_in_count: int
    actual_attendance: int
    fill_rate: int
    raw_fill_rate: int
    attendance_rate: int
    days_until_event: int
    recent_reservation_count: int
    reservation_trend: List[TrendPointResponse]
    sort_by: RosterSortField
    direction: SortDirection
    roster: List[RosterEntryResponse]

    @classmethod
    def from_report(cls, report: EventReconciliationReport) -> 'ReconciliationResponse':
        summary = report.summary
        return cls(
            event_id=report.event.id or 0,
            title=report.event.title,
            event_date=report.event.event_date,
            capacity=summary.capacity,
            reservation_count=summary.reservation_count,
            attendance_count=summary.attendance_count,
            matched_count=summary.matched_count,
            walk_in_count=summary.walk_in_count,
            actual_attendance=summary.actual_attendance,
            fill_rate=summary.fill_rate,
            raw_fill_rate=summary.raw_fill_rate,
            attendance_rate=summary.attendance_rate,
            days_until_event=report.days_until_event,
            recent_reservation_count=report.recent_reservation_count,
            reservation_trend=[
                TrendPointResponse(day=p.day, reservations=p.reservations)
                for p in report.reservation_trend
            ],
            sort_by=report.sort_state.field,
            direction=report.sort_state.direction,
            roster=[RosterEntryResponse.from_entry(e) for e in report.roster],
        )
