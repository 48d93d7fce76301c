from src.platform.exception.exceptions import NotFoundError
from src.service.rsvp.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.rsvp.domain.entity.event_entity import EventEntity


async def get_owned_event(
    event_query_repo: IEventQueryRepo, *, event_id: int, requester_id: int
) -> EventEntity:
    """
    Raises:
        NotFoundError: unknown event
        ForbiddenError: the requester does not own the event
    """
    event = await event_query_repo.get_by_id(event_id=event_id)
    if not event:
        raise NotFoundError('Event not found')
    event.validate_owner(requester_id)
    return event
