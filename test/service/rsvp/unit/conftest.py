"""
Unit test fixtures: in-memory ledgers wired into real use cases.
No database, no DI container wiring.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from src.service.rsvp.domain.entity.event_entity import EventEntity
from src.service.rsvp.domain.entity.user_entity import UserEntity, UserRole
from test.service.rsvp.unit.fakes import (
    FakeAttendanceLedger,
    FakeEventRepo,
    FakeReservationLedger,
    FakeUnitOfWork,
    FakeUserRepo,
)


ORGANIZER_ID = 1
OTHER_ORGANIZER_ID = 2
ALICE_ID = 10
BOB_ID = 11
CAROL_ID = 12
DAVE_ID = 13


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def user_repo() -> FakeUserRepo:
    return FakeUserRepo(
        [
            UserEntity(id=ORGANIZER_ID, email='org@test.com', name='Robotics Club',
                       role=UserRole.ORGANIZATION),
            UserEntity(id=OTHER_ORGANIZER_ID, email='other@test.com', name='Chess Club',
                       role=UserRole.ORGANIZATION),
            UserEntity(id=ALICE_ID, email='alice@test.com', name='Alice'),
            UserEntity(id=BOB_ID, email='bob@test.com', name='bob'),
            UserEntity(id=CAROL_ID, email='carol@test.com', name='Carol'),
            UserEntity(id=DAVE_ID, email='dave@test.com', name='Dave'),
        ]
    )


@pytest.fixture
def event_repo() -> FakeEventRepo:
    return FakeEventRepo()


@pytest.fixture
def reservation_ledger(event_repo: FakeEventRepo) -> FakeReservationLedger:
    return FakeReservationLedger(event_repo)


@pytest.fixture
def attendance_ledger() -> FakeAttendanceLedger:
    return FakeAttendanceLedger()


@pytest.fixture
def broadcaster() -> InMemoryEventBroadcasterImpl:
    return InMemoryEventBroadcasterImpl(buffer_size=10)


@pytest.fixture
def uow(
    event_repo: FakeEventRepo,
    reservation_ledger: FakeReservationLedger,
    attendance_ledger: FakeAttendanceLedger,
) -> FakeUnitOfWork:
    return FakeUnitOfWork(
        event_repo=event_repo,
        reservation_ledger=reservation_ledger,
        attendance_ledger=attendance_ledger,
    )


@pytest.fixture
def event(event_repo: FakeEventRepo, now: datetime) -> EventEntity:
    """Capacity 2, one week out, owned by ORGANIZER_ID"""
    return event_repo.add(
        EventEntity(
            title='Robot Build Night',
            event_date=now + timedelta(days=7),
            location='Engineering Hall 101',
            capacity=2,
            organization_id=ORGANIZER_ID,
            created_at=now,
        )
    )
