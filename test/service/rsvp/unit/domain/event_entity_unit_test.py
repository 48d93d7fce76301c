from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import (
    CancellationWindowClosedError,
    DomainError,
    ForbiddenError,
)
from src.service.rsvp.domain.entity.event_entity import EventEntity


START = datetime(2026, 6, 1, 18, 0, tzinfo=timezone.utc)


def _event(**overrides) -> EventEntity:
    fields = {
        'title': 'Career Fair',
        'event_date': START,
        'location': 'Student Union',
        'capacity': 100,
        'organization_id': 1,
        'id': 5,
    }
    fields.update(overrides)
    return EventEntity(**fields)


@pytest.mark.unit
class TestEventValidation:
    @pytest.mark.parametrize('capacity', [0, -1, True])
    def test_capacity_must_be_positive_integer(self, capacity):
        with pytest.raises(DomainError):
            _event(capacity=capacity)

    @pytest.mark.parametrize('field', ['title', 'location'])
    def test_blank_text_rejected(self, field):
        with pytest.raises(DomainError):
            _event(**{field: '   '})

    def test_create_strips_whitespace_and_stamps_created_at(self):
        event = EventEntity.create(
            title='  Career Fair ',
            description=' Bring a resume ',
            event_date=START,
            location=' Student Union ',
            capacity=10,
            organization_id=1,
        )

        assert event.title == 'Career Fair'
        assert event.description == 'Bring a resume'
        assert event.location == 'Student Union'
        assert event.created_at is not None

    def test_naive_date_is_taken_as_utc(self):
        event = _event(event_date=datetime(2026, 6, 1, 18, 0))

        assert event.event_date == START


@pytest.mark.unit
class TestEventOwnership:
    def test_owner_passes(self):
        _event().validate_owner(1)

    @pytest.mark.parametrize('user_id', [2, None])
    def test_other_user_forbidden(self, user_id):
        with pytest.raises(ForbiddenError):
            _event().validate_owner(user_id)


@pytest.mark.unit
class TestCancellationWindow:
    def test_before_event_allowed(self):
        _event().validate_cancellation_window(START - timedelta(days=3))

    def test_exactly_window_after_start_allowed(self):
        _event().validate_cancellation_window(START + timedelta(hours=24))

    def test_one_second_past_window_closed(self):
        with pytest.raises(CancellationWindowClosedError) as exc_info:
            _event().validate_cancellation_window(START + timedelta(hours=24, seconds=1))

        assert exc_info.value.status_code == 400

    def test_custom_window(self):
        with pytest.raises(CancellationWindowClosedError):
            _event().validate_cancellation_window(
                START + timedelta(hours=2), window=timedelta(hours=1)
            )


@pytest.mark.unit
class TestEventHelpers:
    def test_days_until_truncates(self):
        event = _event()

        assert event.days_until(START - timedelta(days=3, hours=5)) == 3
        assert event.days_until(START - timedelta(hours=23)) == 0
        assert event.days_until(START + timedelta(days=2)) == -2

    def test_is_full_at_capacity(self):
        event = _event(capacity=2)

        assert not event.is_full(1)
        assert event.is_full(2)
        assert event.is_full(3)

    def test_check_in_path(self):
        assert _event(id=42).check_in_path() == '/checkin/42'
