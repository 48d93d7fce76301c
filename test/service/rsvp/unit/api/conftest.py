"""
HTTP-level fixtures: the real app and routers, use cases built over the
in-memory ledgers through FastAPI dependency overrides.
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.app_factory import create_app
from src.service.rsvp.app.command.cancel_reservation_use_case import CancelReservationUseCase
from src.service.rsvp.app.command.check_in_use_case import CheckInUseCase
from src.service.rsvp.app.command.create_event_use_case import CreateEventUseCase
from src.service.rsvp.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.rsvp.app.command.reserve_seat_use_case import ReserveSeatUseCase
from src.service.rsvp.app.query.get_event_reconciliation_use_case import (
    GetEventReconciliationUseCase,
)
from src.service.rsvp.app.query.get_event_use_case import GetEventUseCase
from src.service.rsvp.app.query.list_events_use_case import ListEventsUseCase
from src.service.rsvp.app.query.list_my_reservations_use_case import ListMyReservationsUseCase
from src.service.rsvp.app.query.list_recent_check_ins_use_case import ListRecentCheckInsUseCase
from src.service.rsvp.app.query.stream_live_feed_use_case import StreamLiveFeedUseCase
from src.service.rsvp.domain.entity.user_entity import UserEntity
from src.service.rsvp.driving_adapter.http_controller.user_controller import get_current_user


@asynccontextmanager
async def _noop_lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield


@pytest.fixture
def app(event_repo, reservation_ledger, attendance_ledger, user_repo, broadcaster, uow) -> FastAPI:
    app = create_app(lifespan=_noop_lifespan, title_suffix=' (Test)')
    app.dependency_overrides.update(
        {
            CreateEventUseCase.depends: lambda: CreateEventUseCase(event_command_repo=event_repo),
            DeleteEventUseCase.depends: lambda: DeleteEventUseCase(
                uow=uow, event_query_repo=event_repo
            ),
            GetEventUseCase.depends: lambda: GetEventUseCase(
                event_query_repo=event_repo, reservation_query_repo=reservation_ledger
            ),
            ListEventsUseCase.depends: lambda: ListEventsUseCase(
                event_query_repo=event_repo, reservation_query_repo=reservation_ledger
            ),
            ReserveSeatUseCase.depends: lambda: ReserveSeatUseCase(
                event_query_repo=event_repo,
                reservation_command_repo=reservation_ledger,
                enforce_capacity=False,
            ),
            CancelReservationUseCase.depends: lambda: CancelReservationUseCase(
                event_query_repo=event_repo,
                reservation_command_repo=reservation_ledger,
                cancellation_window=timedelta(hours=24),
            ),
            ListMyReservationsUseCase.depends: lambda: ListMyReservationsUseCase(
                reservation_query_repo=reservation_ledger
            ),
            CheckInUseCase.depends: lambda: CheckInUseCase(
                event_query_repo=event_repo,
                reservation_query_repo=reservation_ledger,
                attendance_command_repo=attendance_ledger,
                attendance_query_repo=attendance_ledger,
                user_query_repo=user_repo,
                live_feed_broadcaster=broadcaster,
            ),
            ListRecentCheckInsUseCase.depends: lambda: ListRecentCheckInsUseCase(
                event_query_repo=event_repo,
                attendance_query_repo=attendance_ledger,
                user_query_repo=user_repo,
            ),
            GetEventReconciliationUseCase.depends: lambda: GetEventReconciliationUseCase(
                event_query_repo=event_repo,
                reservation_query_repo=reservation_ledger,
                attendance_query_repo=attendance_ledger,
                user_query_repo=user_repo,
            ),
            StreamLiveFeedUseCase.depends: lambda: StreamLiveFeedUseCase(
                event_query_repo=event_repo,
                attendance_query_repo=attendance_ledger,
                user_query_repo=user_repo,
                live_feed_broadcaster=broadcaster,
            ),
        }
    )
    return app


@pytest.fixture
def client(app: FastAPI):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def act_as(app: FastAPI, user_repo) -> Callable[[int], UserEntity]:
    """Log in by user id: the JWT cookie dependency is replaced by the stored profile"""

    def _act_as(user_id: int) -> UserEntity:
        user = user_repo.users[user_id]
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    return _act_as
