"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
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
from src.service.rsvp.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from core_setting)
    database = providers.Singleton(Database)

    # Security
    password_hasher = providers.Singleton(BcryptPasswordHasher)
    jwt_auth = providers.Singleton(JwtAuth)

    # Repositories (stateless - use session_factory per call)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl,
        session_factory=database.provided.session,
        password_hasher=password_hasher,
    )
    event_command_repo = providers.Singleton(
        EventCommandRepoImpl, session_factory=database.provided.session
    )
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    reservation_command_repo = providers.Singleton(
        ReservationCommandRepoImpl, session_factory=database.provided.session
    )
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )
    attendance_command_repo = providers.Singleton(
        AttendanceCommandRepoImpl, session_factory=database.provided.session
    )
    attendance_query_repo = providers.Singleton(
        AttendanceQueryRepoImpl, session_factory=database.provided.session
    )

    # Live attendance feed (per-process fan-out)
    live_feed_broadcaster = providers.Singleton(
        InMemoryEventBroadcasterImpl,
        buffer_size=config_service.provided.LIVE_FEED_BUFFER_SIZE,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
