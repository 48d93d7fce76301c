from datetime import datetime, timedelta

import pytest

from src.platform.exception.exceptions import (
    AlreadyReservedError,
    CancellationWindowClosedError,
    CapacityExceededError,
    ConflictError,
    NotFoundError,
)
from src.service.rsvp.app.command.cancel_reservation_use_case import CancelReservationUseCase
from src.service.rsvp.app.command.reserve_seat_use_case import ReserveSeatUseCase
from src.service.rsvp.app.query.list_my_reservations_use_case import ListMyReservationsUseCase
from src.service.rsvp.domain.entity.event_entity import EventEntity
from test.service.rsvp.unit.conftest import ALICE_ID, BOB_ID, CAROL_ID
from test.service.rsvp.unit.fakes import FakeEventRepo, FakeReservationLedger


@pytest.fixture
def reserve_use_case(event_repo, reservation_ledger) -> ReserveSeatUseCase:
    return ReserveSeatUseCase(
        event_query_repo=event_repo,
        reservation_command_repo=reservation_ledger,
        enforce_capacity=False,
    )


@pytest.fixture
def cancel_use_case(event_repo, reservation_ledger) -> CancelReservationUseCase:
    return CancelReservationUseCase(
        event_query_repo=event_repo,
        reservation_command_repo=reservation_ledger,
        cancellation_window=timedelta(hours=24),
    )


@pytest.mark.unit
class TestReserveSeat:
    @pytest.mark.asyncio
    async def test_reserve_creates_one_reservation(
        self, reserve_use_case, reservation_ledger: FakeReservationLedger, event: EventEntity
    ):
        outcome = await reserve_use_case.reserve(event_id=event.id, student_id=ALICE_ID)

        assert outcome.reservation_count == 1
        assert outcome.capacity == 2
        assert not outcome.over_capacity
        assert await reservation_ledger.get(event_id=event.id, student_id=ALICE_ID) is not None

    @pytest.mark.asyncio
    async def test_duplicate_reservation_rejected(
        self, reserve_use_case, reservation_ledger: FakeReservationLedger, event: EventEntity
    ):
        """
        Given: Alice already reserved
        When: she reserves again
        Then: AlreadyReservedError (409) and still exactly one row
        """
        await reserve_use_case.reserve(event_id=event.id, student_id=ALICE_ID)

        with pytest.raises(AlreadyReservedError) as exc_info:
            await reserve_use_case.reserve(event_id=event.id, student_id=ALICE_ID)

        assert isinstance(exc_info.value, ConflictError)
        assert exc_info.value.status_code == 409
        assert await reservation_ledger.count_by_event(event_id=event.id) == 1

    @pytest.mark.asyncio
    async def test_capacity_is_advisory_by_default(
        self, reserve_use_case, event: EventEntity
    ):
        for student_id in (ALICE_ID, BOB_ID):
            await reserve_use_case.reserve(event_id=event.id, student_id=student_id)

        outcome = await reserve_use_case.reserve(event_id=event.id, student_id=CAROL_ID)

        assert outcome.reservation_count == 3
        assert outcome.over_capacity

    @pytest.mark.asyncio
    async def test_enforced_capacity_rejects_without_writing(
        self, event_repo: FakeEventRepo, reservation_ledger: FakeReservationLedger, event
    ):
        use_case = ReserveSeatUseCase(
            event_query_repo=event_repo,
            reservation_command_repo=reservation_ledger,
            enforce_capacity=True,
        )
        for student_id in (ALICE_ID, BOB_ID):
            await use_case.reserve(event_id=event.id, student_id=student_id)

        with pytest.raises(CapacityExceededError):
            await use_case.reserve(event_id=event.id, student_id=CAROL_ID)

        assert await reservation_ledger.get(event_id=event.id, student_id=CAROL_ID) is None
        assert await reservation_ledger.count_by_event(event_id=event.id) == 2

    @pytest.mark.asyncio
    async def test_unknown_event(self, reserve_use_case):
        with pytest.raises(NotFoundError):
            await reserve_use_case.reserve(event_id=999, student_id=ALICE_ID)


@pytest.mark.unit
class TestCancelReservation:
    @pytest.mark.asyncio
    async def test_cancel_removes_reservation(
        self, reserve_use_case, cancel_use_case, reservation_ledger, event, now: datetime
    ):
        await reserve_use_case.reserve(event_id=event.id, student_id=ALICE_ID)

        outcome = await cancel_use_case.cancel(event_id=event.id, student_id=ALICE_ID, now=now)

        assert outcome.cancelled
        assert await reservation_ledger.count_by_event(event_id=event.id) == 0

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self, cancel_use_case, event, now: datetime):
        outcome = await cancel_use_case.cancel(event_id=event.id, student_id=ALICE_ID, now=now)

        assert outcome.cancelled is False

    @pytest.mark.asyncio
    async def test_cancel_after_window_leaves_reservation(
        self, reserve_use_case, cancel_use_case, reservation_ledger, event
    ):
        """
        Given: Alice reserved an event that started 25 hours ago
        When: she cancels
        Then: the window is closed and her reservation stays
        """
        await reserve_use_case.reserve(event_id=event.id, student_id=ALICE_ID)
        too_late = event.event_date + timedelta(hours=25)

        with pytest.raises(CancellationWindowClosedError):
            await cancel_use_case.cancel(event_id=event.id, student_id=ALICE_ID, now=too_late)

        assert await reservation_ledger.get(event_id=event.id, student_id=ALICE_ID) is not None

    @pytest.mark.asyncio
    async def test_cancel_within_window_after_start(
        self, reserve_use_case, cancel_use_case, event
    ):
        await reserve_use_case.reserve(event_id=event.id, student_id=ALICE_ID)

        outcome = await cancel_use_case.cancel(
            event_id=event.id, student_id=ALICE_ID, now=event.event_date + timedelta(hours=24)
        )

        assert outcome.cancelled

    @pytest.mark.asyncio
    async def test_count_tracks_successful_reserves_minus_successful_cancels(
        self, reserve_use_case, cancel_use_case, reservation_ledger, event, now: datetime
    ):
        """
        Given: three students reserving, cancelling and re-reserving in an interleaved order,
               including a duplicate reserve and a cancel with nothing to cancel
        When: every call has been made
        Then: the ledger count equals successful reserves minus successful cancels
        """
        calls = [
            ('reserve', ALICE_ID),
            ('reserve', BOB_ID),
            ('cancel', ALICE_ID),
            ('reserve', BOB_ID),
            ('cancel', CAROL_ID),
            ('reserve', CAROL_ID),
            ('reserve', ALICE_ID),
            ('cancel', BOB_ID),
            ('cancel', BOB_ID),
            ('reserve', BOB_ID),
            ('cancel', CAROL_ID),
        ]
        reserved = cancelled = 0

        for action, student_id in calls:
            if action == 'reserve':
                try:
                    await reserve_use_case.reserve(event_id=event.id, student_id=student_id)
                    reserved += 1
                except AlreadyReservedError:
                    pass
            else:
                outcome = await cancel_use_case.cancel(
                    event_id=event.id, student_id=student_id, now=now
                )
                cancelled += outcome.cancelled

        assert (reserved, cancelled) == (5, 3)
        assert await reservation_ledger.count_by_event(event_id=event.id) == reserved - cancelled
        for student_id in (ALICE_ID, BOB_ID):
            assert await reservation_ledger.get(event_id=event.id, student_id=student_id)
        assert await reservation_ledger.get(event_id=event.id, student_id=CAROL_ID) is None

    @pytest.mark.asyncio
    async def test_unknown_event(self, cancel_use_case, now):
        with pytest.raises(NotFoundError):
            await cancel_use_case.cancel(event_id=999, student_id=ALICE_ID, now=now)


@pytest.mark.unit
class TestListMyReservations:
    @pytest.mark.asyncio
    async def test_lists_upcoming_reservations_only(
        self, reserve_use_case, reservation_ledger, event_repo, event, now: datetime
    ):
        past = event_repo.add(
            EventEntity(
                title='Last Week',
                event_date=now - timedelta(days=7),
                location='Gym',
                capacity=5,
                organization_id=1,
            )
        )
        await reserve_use_case.reserve(event_id=event.id, student_id=ALICE_ID)
        await reserve_use_case.reserve(event_id=past.id, student_id=ALICE_ID)
        use_case = ListMyReservationsUseCase(reservation_query_repo=reservation_ledger)

        items = await use_case.list_my_reservations(student_id=ALICE_ID, now=now)

        assert [item.event.id for item in items] == [event.id]
