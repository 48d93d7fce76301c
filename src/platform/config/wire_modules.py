"""
Wire Modules Configuration

Modules whose `Provide[...]` markers need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.rsvp.app.command import (
    cancel_reservation_use_case,
    check_in_use_case,
    create_event_use_case,
    create_user_use_case,
    delete_event_use_case,
    reserve_seat_use_case,
)
from src.service.rsvp.app.query import (
    get_event_reconciliation_use_case,
    get_event_use_case,
    list_events_use_case,
    list_my_reservations_use_case,
    list_recent_check_ins_use_case,
    stream_live_feed_use_case,
)
from src.service.rsvp.driving_adapter.http_controller import user_controller


WIRE_MODULES: list[ModuleType] = [
    create_user_use_case,
    create_event_use_case,
    delete_event_use_case,
    reserve_seat_use_case,
    cancel_reservation_use_case,
    check_in_use_case,
    get_event_use_case,
    list_events_use_case,
    list_my_reservations_use_case,
    list_recent_check_ins_use_case,
    get_event_reconciliation_use_case,
    stream_live_feed_use_case,
    user_controller,
]
