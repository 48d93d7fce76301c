"""
Reconciliation Domain

Pure functions over one event's reservation set and attendance set. Nothing
here touches the database; use cases load the ledgers and call in.

    reservation_count  = |reservations|
    attendance_count   = |attendance|
    walk_in_count      = attendees without a reservation
    actual_attendance  = max(reservation_count, attendance_count)
    fill_rate          = round(100 * actual_attendance / capacity), shown clamped to [0, 100]
    attendance_rate    = round(100 * |reserved ∩ attended| / reservation_count), 0 without reservations
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime, timedelta
from typing import Optional

import attrs

from src.service.rsvp.domain.entity.attendance_record_entity import AttendanceRecord
from src.service.rsvp.domain.entity.event_entity import EventEntity, as_utc
from src.service.rsvp.domain.entity.reservation_entity import Reservation
from src.service.rsvp.domain.entity.user_entity import UNKNOWN_STUDENT_NAME, UserEntity
from src.service.rsvp.domain.enum.roster_sort import RosterSortField, SortDirection


def percent(numerator: int, denominator: int) -> int:
    """round(100 * n / d) with halves rounded up, 0 when d is 0"""
    if denominator <= 0:
        return 0
    return (200 * numerator + denominator) // (2 * denominator)


def clamp_percent(value: int) -> int:
    return max(0, min(100, value))


@attrs.define(frozen=True)
class RosterEntry:
    student_id: int
    name: str
    email: str
    has_reservation: bool
    has_check_in: bool
    reserved_at: Optional[datetime]
    checked_in_at: Optional[datetime]
    position: int  # insertion order, the stable tie-break

    @property
    def is_walk_in(self) -> bool:
        return self.has_check_in and not self.has_reservation

    @property
    def status(self) -> str:
        if self.is_walk_in:
            return 'Walk-in'
        return 'Checked In' if self.has_check_in else 'Reserved'


@attrs.define(frozen=True)
class ReconciliationSummary:
    event_id: Optional[int]
    capacity: int
    reservation_count: int
    attendance_count: int
    matched_count: int  # reserved students who also checked in
    walk_in_count: int
    actual_attendance: int
    raw_fill_rate: int  # may exceed 100 when walk-ins overflow capacity
    fill_rate: int
    attendance_rate: int
    roster: tuple[RosterEntry, ...]


def reconcile(
    *,
    event: EventEntity,
    reservations: Iterable[Reservation],
    attendance: Iterable[AttendanceRecord],
    profiles: Mapping[int, UserEntity],
) -> ReconciliationSummary:
    # First row per student wins; the ledgers' unique constraints make this moot in practice
    reserved_at: dict[int, datetime] = {}
    for reservation in reservations:
        reserved_at.setdefault(reservation.student_id, reservation.created_at)

    checked_in_at: dict[int, datetime] = {}
    for record in attendance:
        checked_in_at.setdefault(record.student_id, record.checked_in_at)

    # Reserved students in ledger order, then walk-ins in check-in order
    student_ids = list(reserved_at)
    student_ids.extend(sid for sid in checked_in_at if sid not in reserved_at)

    roster = []
    for position, student_id in enumerate(student_ids):
        profile = profiles.get(student_id)
        roster.append(
            RosterEntry(
                student_id=student_id,
                name=profile.name if profile else UNKNOWN_STUDENT_NAME,
                email=profile.email if profile else '',
                has_reservation=student_id in reserved_at,
                has_check_in=student_id in checked_in_at,
                reserved_at=reserved_at.get(student_id),
                checked_in_at=checked_in_at.get(student_id),
                position=position,
            )
        )

    reservation_count = len(reserved_at)
    attendance_count = len(checked_in_at)
    matched_count = sum(1 for sid in checked_in_at if sid in reserved_at)
    actual_attendance = max(reservation_count, attendance_count)
    raw_fill_rate = percent(actual_attendance, event.capacity)

    return ReconciliationSummary(
        event_id=event.id,
        capacity=event.capacity,
        reservation_count=reservation_count,
        attendance_count=attendance_count,
        matched_count=matched_count,
        walk_in_count=attendance_count - matched_count,
        actual_attendance=actual_attendance,
        raw_fill_rate=raw_fill_rate,
        fill_rate=clamp_percent(raw_fill_rate),
        attendance_rate=percent(matched_count, reservation_count),
        roster=tuple(roster),
    )


# ============================ Roster sorting ============================


@attrs.define(frozen=True)
class RosterSortState:
    field: RosterSortField = RosterSortField.RESERVED_AT
    direction: SortDirection = SortDirection.DESC

    def toggle(self, field: RosterSortField) -> 'RosterSortState':
        """Same field flips the direction, a new field starts ascending"""
        if field == self.field:
            return attrs.evolve(self, direction=self.direction.flipped())
        return RosterSortState(field=field, direction=SortDirection.ASC)


def _sort_key(entry: RosterEntry, field: RosterSortField):
    if field == RosterSortField.NAME:
        return entry.name.casefold()
    if field == RosterSortField.EMAIL:
        return entry.email.casefold()
    if field == RosterSortField.RESERVED_AT:
        return entry.reserved_at
    return entry.has_check_in


def sort_roster(
    roster: Sequence[RosterEntry], state: RosterSortState = RosterSortState()
) -> list[RosterEntry]:
    """
    Stable sort on the selected field. Ties keep insertion order in both
    directions; entries without a reservation time go last either way.
    """
    ordered = sorted(roster, key=lambda e: e.position)
    present = [e for e in ordered if _sort_key(e, state.field) is not None]
    missing = [e for e in ordered if _sort_key(e, state.field) is None]

    # sorted() keeps equal keys in input order even with reverse=True
    present = sorted(
        present,
        key=lambda e: _sort_key(e, state.field),
        reverse=state.direction == SortDirection.DESC,
    )
    return present + missing


# ============================ Event statistics ============================


@attrs.define(frozen=True)
class TrendPoint:
    day: date
    reservations: int


def recent_reservation_count(
    reservations: Iterable[Reservation], *, now: datetime, window: timedelta
) -> int:
    since = as_utc(now) - window
    return sum(1 for r in reservations if r.created_at > since)


def reservation_trend(reservations: Iterable[Reservation]) -> list[TrendPoint]:
    """Reservations grouped by UTC calendar day, oldest day first"""
    counts: dict[date, int] = {}
    for reservation in reservations:
        day = reservation.created_at.date()
        counts[day] = counts.get(day, 0) + 1
    return [TrendPoint(day=day, reservations=counts[day]) for day in sorted(counts)]


# ============================ Organization dashboard ============================


@attrs.define(frozen=True)
class EventOverview:
    event: EventEntity
    reservation_count: int

    @property
    def raw_fill_rate(self) -> int:
        return percent(self.reservation_count, self.event.capacity)

    @property
    def fill_rate(self) -> int:
        return clamp_percent(self.raw_fill_rate)

    @property
    def is_full(self) -> bool:
        return self.event.is_full(self.reservation_count)


@attrs.define(frozen=True)
class DashboardSummary:
    total_events: int
    total_reservations: int
    avg_fill_rate: int
    events: tuple[EventOverview, ...]


def summarize_dashboard(overviews: Sequence[EventOverview]) -> DashboardSummary:
    total_reservations = sum(o.reservation_count for o in overviews)
    total_capacity = sum(o.event.capacity for o in overviews)
    return DashboardSummary(
        total_events=len(overviews),
        total_reservations=total_reservations,
        avg_fill_rate=percent(total_reservations, total_capacity) if overviews else 0,
        events=tuple(overviews),
    )


# ============================ Report ============================


@attrs.define(frozen=True)
class EventReconciliationReport:
    event: EventEntity
    summary: ReconciliationSummary
    sort_state: RosterSortState
    roster: tuple[RosterEntry, ...]  # sorted per sort_state
    days_until_event: int
    recent_reservation_count: int
    reservation_trend: tuple[TrendPoint, ...]
