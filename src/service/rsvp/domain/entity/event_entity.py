from datetime import datetime, timedelta, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import (
    CancellationWindowClosedError,
    DomainError,
    ForbiddenError,
)
from src.platform.logging.loguru_io import Logger


DEFAULT_CANCELLATION_WINDOW = timedelta(hours=24)


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise DomainError(f'Event {attribute.name} cannot be empty')


def _validate_capacity(instance: object, attribute: attrs.Attribute, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise DomainError('Event capacity must be a positive integer')


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@attrs.define
class EventEntity:
    title: str = attrs.field(validator=_validate_non_empty_string)
    event_date: datetime = attrs.field(converter=as_utc)
    location: str = attrs.field(validator=_validate_non_empty_string)
    capacity: int = attrs.field(validator=_validate_capacity)
    organization_id: int
    description: str = ''
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        title: str,
        description: str,
        event_date: datetime,
        location: str,
        capacity: int,
        organization_id: int,
    ) -> 'EventEntity':
        return cls(
            title=title.strip(),
            description=description.strip(),
            event_date=event_date,
            location=location.strip(),
            capacity=capacity,
            organization_id=organization_id,
            created_at=datetime.now(timezone.utc),
        )

    def is_owned_by(self, user_id: Optional[int]) -> bool:
        return user_id is not None and self.organization_id == user_id

    def validate_owner(self, user_id: Optional[int]) -> None:
        if not self.is_owned_by(user_id):
            raise ForbiddenError('Only the organization that owns this event can do this')

    def is_upcoming(self, now: datetime) -> bool:
        return self.event_date >= as_utc(now)

    def is_full(self, reservation_count: int) -> bool:
        """Advisory only: the ledger still accepts reservations past capacity"""
        return reservation_count >= self.capacity

    def cancellation_deadline(
        self, window: timedelta = DEFAULT_CANCELLATION_WINDOW
    ) -> datetime:
        return self.event_date + window

    def validate_cancellation_window(
        self, now: datetime, window: timedelta = DEFAULT_CANCELLATION_WINDOW
    ) -> None:
        """
        Raises:
            CancellationWindowClosedError: more than `window` has passed since the event started
        """
        if as_utc(now) - self.event_date > window:
            raise CancellationWindowClosedError(
                f'Reservations can no longer be cancelled: the event started more than '
                f'{int(window.total_seconds() // 3600)} hours ago'
            )

    def days_until(self, now: datetime) -> int:
        """Whole days until the event, truncated toward zero, negative once passed"""
        return int((self.event_date - as_utc(now)) / timedelta(days=1))

    def check_in_path(self) -> str:
        return f'/checkin/{self.id}'
