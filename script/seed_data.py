#!/usr/bin/env python3
"""
Database Seed Script

Creates one organization, a few students and one upcoming event, then
reserves and checks in some of the students so the reconciliation view has
a reserved-only attendee, a matched attendee and a walk-in.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from src.platform.database.orm_db_setting import Database, dispose_engine
from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.command.check_in_use_case import CheckInUseCase
from src.service.rsvp.app.command.create_event_use_case import CreateEventUseCase
from src.service.rsvp.app.command.create_user_use_case import UserUseCase
from src.service.rsvp.app.command.reserve_seat_use_case import ReserveSeatUseCase
from src.service.rsvp.domain.entity.user_entity import UserRole
from src.service.rsvp.driven_adapter.repo.attendance_command_repo_impl import (
    AttendanceCommandRepoImpl,
)
from src.service.rsvp.driven_adapter.repo.attendance_query_repo_impl import (
    AttendanceQueryRepoImpl,
)
from src.service.rsvp.driven_adapter.repo.event_command_repo_impl import EventCommandRepoImpl
from src.service.rsvp.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.rsvp.driven_adapter.repo.reservation_command_repo_impl import (
    ReservationCommandRepoImpl,
)
from src.service.rsvp.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.rsvp.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.rsvp.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.rsvp.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)


DEFAULT_PASSWORD = 'P@ssw0rd'


@dataclass
class UserConfig:
    email: str
    name: str
    role: UserRole


TEST_USERS = [
    UserConfig(email='org@t.com', name='Chess Club', role=UserRole.ORGANIZATION),
    UserConfig(email='s1@t.com', name='Ada Student', role=UserRole.STUDENT),
    UserConfig(email='s2@t.com', name='Ben Student', role=UserRole.STUDENT),
    UserConfig(email='s3@t.com', name='Cy Walkin', role=UserRole.STUDENT),
]


async def main() -> None:
    session_factory = Database().session
    hasher = BcryptPasswordHasher()
    user_query_repo = UserQueryRepoImpl(session_factory=session_factory, password_hasher=hasher)
    event_query_repo = EventQueryRepoImpl(session_factory=session_factory)

    user_use_case = UserUseCase(
        user_command_repo=UserCommandRepoImpl(session_factory=session_factory),
        user_query_repo=user_query_repo,
        password_hasher=hasher,
    )
    users = {}
    for config in TEST_USERS:
        users[config.email] = await user_use_case.create_user(
            email=config.email, password=DEFAULT_PASSWORD, name=config.name, role=config.role
        )
        Logger.base.info(f'👤 Created {config.role.value} {config.email}')

    event = await CreateEventUseCase(
        event_command_repo=EventCommandRepoImpl(session_factory=session_factory)
    ).create_event(
        organization_id=users['org@t.com'].id,
        title='Opening Night Blitz',
        description='Five-minute games, all levels welcome',
        event_date=datetime.now(timezone.utc) + timedelta(days=3),
        location='Library Room 4B',
        capacity=2,
    )

    reserve = ReserveSeatUseCase(
        event_query_repo=event_query_repo,
        reservation_command_repo=ReservationCommandRepoImpl(session_factory=session_factory),
    )
    for email in ('s1@t.com', 's2@t.com'):
        await reserve.reserve(event_id=event.id, student_id=users[email].id)

    check_in = CheckInUseCase(
        event_query_repo=event_query_repo,
        reservation_query_repo=ReservationQueryRepoImpl(session_factory=session_factory),
        attendance_command_repo=AttendanceCommandRepoImpl(session_factory=session_factory),
        attendance_query_repo=AttendanceQueryRepoImpl(session_factory=session_factory),
        user_query_repo=user_query_repo,
        live_feed_broadcaster=InMemoryEventBroadcasterImpl(),
    )
    for email in ('s1@t.com', 's3@t.com'):
        await check_in.check_in(event_id=event.id, student_id=users[email].id)

    Logger.base.info(f'✅ Seeded event {event.id}, password for every user: {DEFAULT_PASSWORD}')
    await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
