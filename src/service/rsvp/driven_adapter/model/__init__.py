"""
Database Models

Import all models here so they are registered on Base.metadata
"""

from src.service.rsvp.driven_adapter.model.check_in_model import CheckInModel
from src.service.rsvp.driven_adapter.model.event_model import EventModel
from src.service.rsvp.driven_adapter.model.reservation_model import ReservationModel
from src.service.rsvp.driven_adapter.model.user_model import UserModel

__all__ = [
    'CheckInModel',
    'EventModel',
    'ReservationModel',
    'UserModel',
]
