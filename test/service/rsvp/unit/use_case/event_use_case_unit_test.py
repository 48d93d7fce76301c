from datetime import datetime, timedelta

import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import DomainError, ForbiddenError, NotFoundError
from src.service.rsvp.app.command.create_event_use_case import CreateEventUseCase
from src.service.rsvp.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.rsvp.app.query.get_event_use_case import GetEventUseCase
from src.service.rsvp.app.query.list_events_use_case import ListEventsUseCase
from src.service.rsvp.domain.entity.attendance_record_entity import AttendanceRecord
from src.service.rsvp.domain.entity.event_entity import EventEntity
from src.service.rsvp.domain.entity.reservation_entity import Reservation
from test.service.rsvp.unit.conftest import (
    ALICE_ID,
    BOB_ID,
    DAVE_ID,
    ORGANIZER_ID,
    OTHER_ORGANIZER_ID,
)


async def _fill_ledgers(reservation_ledger, attendance_ledger, event_id: int) -> None:
    for student_id in (ALICE_ID, BOB_ID):
        await reservation_ledger.create(
            reservation=Reservation.create(event_id=event_id, student_id=student_id)
        )
    for student_id in (ALICE_ID, DAVE_ID):
        await attendance_ledger.create(
            record=AttendanceRecord.create(event_id=event_id, student_id=student_id)
        )


@pytest.mark.unit
class TestCreateEvent:
    @pytest.mark.asyncio
    async def test_create_event(self, event_repo, now: datetime):
        use_case = CreateEventUseCase(event_command_repo=event_repo)

        created = await use_case.create_event(
            organization_id=ORGANIZER_ID,
            title='Robot Build Night',
            description='',
            event_date=now + timedelta(days=3),
            location='Engineering Hall',
            capacity=30,
        )

        assert created.id is not None
        assert await event_repo.get_by_id(event_id=created.id) is created

    @pytest.mark.asyncio
    async def test_zero_capacity_rejected(self, event_repo, now: datetime):
        use_case = CreateEventUseCase(event_command_repo=event_repo)

        with pytest.raises(DomainError):
            await use_case.create_event(
                organization_id=ORGANIZER_ID,
                title='Robot Build Night',
                description='',
                event_date=now,
                location='Engineering Hall',
                capacity=0,
            )

        assert event_repo.events == {}


@pytest.mark.unit
class TestDeleteEvent:
    @pytest.mark.asyncio
    async def test_delete_removes_event_and_both_ledgers(
        self, uow, event_repo, reservation_ledger, attendance_ledger, event
    ):
        await _fill_ledgers(reservation_ledger, attendance_ledger, event.id)
        use_case = DeleteEventUseCase(uow=uow, event_query_repo=event_repo)

        await use_case.delete_event(event_id=event.id, requester_id=ORGANIZER_ID)

        assert await event_repo.get_by_id(event_id=event.id) is None
        assert await reservation_ledger.count_by_event(event_id=event.id) == 0
        assert await attendance_ledger.count_by_event(event_id=event.id) == 0

    @pytest.mark.asyncio
    async def test_only_owner_can_delete(
        self, uow, event_repo, reservation_ledger, attendance_ledger, event
    ):
        await _fill_ledgers(reservation_ledger, attendance_ledger, event.id)
        use_case = DeleteEventUseCase(uow=uow, event_query_repo=event_repo)

        with pytest.raises(ForbiddenError):
            await use_case.delete_event(event_id=event.id, requester_id=OTHER_ORGANIZER_ID)

        assert await event_repo.get_by_id(event_id=event.id) is not None
        assert await reservation_ledger.count_by_event(event_id=event.id) == 2

    @pytest.mark.asyncio
    async def test_failure_midway_leaves_everything_in_place(
        self, uow, event_repo, reservation_ledger, attendance_ledger, event
    ):
        """
        Given: an event with reservations and check-ins
        When: the event row delete fails after the ledgers were cleared
        Then: the transaction rolls back and both ledgers are intact
        """
        await _fill_ledgers(reservation_ledger, attendance_ledger, event.id)
        event_repo.fail_on_delete = True
        use_case = DeleteEventUseCase(uow=uow, event_query_repo=event_repo)

        with pytest.raises(RuntimeError):
            await use_case.delete_event(event_id=event.id, requester_id=ORGANIZER_ID)

        assert await event_repo.get_by_id(event_id=event.id) is not None
        assert await reservation_ledger.count_by_event(event_id=event.id) == 2
        assert await attendance_ledger.count_by_event(event_id=event.id) == 2

    @pytest.mark.asyncio
    async def test_unknown_event(self, uow, event_repo):
        use_case = DeleteEventUseCase(uow=uow, event_query_repo=event_repo)

        with pytest.raises(NotFoundError):
            await use_case.delete_event(event_id=999, requester_id=ORGANIZER_ID)


@pytest.mark.unit
class TestEventQueries:
    @pytest.mark.asyncio
    async def test_get_event_includes_count(self, event_repo, reservation_ledger, event):
        await reservation_ledger.create(
            reservation=Reservation.create(event_id=event.id, student_id=ALICE_ID)
        )
        use_case = GetEventUseCase(
            event_query_repo=event_repo, reservation_query_repo=reservation_ledger
        )

        overview = await use_case.get_event(event_id=event.id)

        assert overview.reservation_count == 1
        assert overview.fill_rate == 50

    @pytest.mark.asyncio
    async def test_check_in_url_for_owner(self, event_repo, reservation_ledger, event):
        use_case = GetEventUseCase(
            event_query_repo=event_repo, reservation_query_repo=reservation_ledger
        )

        url = await use_case.get_check_in_url(event_id=event.id, requester_id=ORGANIZER_ID)

        assert url == f'{settings.PUBLIC_BASE_URL.rstrip("/")}/checkin/{event.id}'
        with pytest.raises(ForbiddenError):
            await use_case.get_check_in_url(event_id=event.id, requester_id=OTHER_ORGANIZER_ID)

    @pytest.mark.asyncio
    async def test_list_upcoming_and_dashboard(
        self, event_repo, reservation_ledger, event, now: datetime
    ):
        past = event_repo.add(
            EventEntity(
                title='Old Meetup',
                event_date=now - timedelta(days=1),
                location='Cafe',
                capacity=2,
                organization_id=ORGANIZER_ID,
            )
        )
        await reservation_ledger.create(
            reservation=Reservation.create(event_id=past.id, student_id=ALICE_ID)
        )
        use_case = ListEventsUseCase(
            event_query_repo=event_repo, reservation_query_repo=reservation_ledger
        )

        upcoming = await use_case.list_events(now=now)
        owned = await use_case.list_events(organization_id=ORGANIZER_ID)
        dashboard = await use_case.get_organization_dashboard(organization_id=ORGANIZER_ID)

        assert [o.event.id for o in upcoming] == [event.id]
        assert [o.event.id for o in owned] == [event.id, past.id]
        assert dashboard.total_events == 2
        assert dashboard.total_reservations == 1
        assert dashboard.avg_fill_rate == 25
