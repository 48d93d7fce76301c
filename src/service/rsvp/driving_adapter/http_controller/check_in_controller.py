from collections.abc import AsyncGenerator
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sse_starlette.sse import EventSourceResponse

from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.command.check_in_use_case import CheckInUseCase
from src.service.rsvp.app.query.list_recent_check_ins_use_case import ListRecentCheckInsUseCase
from src.service.rsvp.app.query.stream_live_feed_use_case import StreamLiveFeedUseCase
from src.service.rsvp.domain.entity.user_entity import UserEntity
from src.service.rsvp.domain.enum.live_feed_event_type import LiveFeedEventType
from src.service.rsvp.driving_adapter.http_controller.auth.role_auth import require_student
from src.service.rsvp.driving_adapter.http_controller.schema.check_in_schema import (
    CheckInResponse,
    LiveFeedCheckInResponse,
    LiveFeedInitialStateResponse,
    RecentCheckInResponse,
)
from src.service.rsvp.driving_adapter.http_controller.user_controller import get_current_user


router = APIRouter()


@router.post('/{event_id}/check_in')
@Logger.io
async def check_in(
    event_id: int,
    response: Response,
    current_user: UserEntity = Depends(require_student),
    use_case: CheckInUseCase = Depends(CheckInUseCase.depends),
) -> CheckInResponse:
    """Repeated check-ins answer 200 with the original record, a new one answers 201"""
    result = await use_case.check_in(event_id=event_id, student_id=current_user.id or 0)
    response.status_code = (
        status.HTTP_200_OK if result.already_checked_in else status.HTTP_201_CREATED
    )
    return CheckInResponse.from_result(result)


@router.get('/{event_id}/check_in/recent')
@Logger.io
async def list_recent_check_ins(
    event_id: int,
    limit: Optional[int] = Query(None, ge=1, le=100),
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListRecentCheckInsUseCase = Depends(ListRecentCheckInsUseCase.depends),
) -> List[RecentCheckInResponse]:
    entries = await use_case.list_recent(
        event_id=event_id, requester_id=current_user.id or 0, limit=limit
    )
    return [RecentCheckInResponse.from_entry(entry) for entry in entries]


@router.get('/{event_id}/live')
async def stream_live_feed(
    event_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: StreamLiveFeedUseCase = Depends(StreamLiveFeedUseCase.depends),
) -> EventSourceResponse:
    """SSE live attendance for the event organizer"""
    await use_case.get_event(event_id=event_id, requester_id=current_user.id or 0)

    async def event_generator() -> AsyncGenerator[dict, None]:
        async for data in use_case.stream(event_id=event_id):
            recent = [RecentCheckInResponse.from_entry(e) for e in data['recent_check_ins']]
            event_type = data['event_type']
            if event_type == LiveFeedEventType.INITIAL_STATE:
                payload = LiveFeedInitialStateResponse(
                    event_type=event_type.value,
                    event_id=data['event_id'],
                    attendance_count=data['attendance_count'],
                    recent_check_ins=recent,
                )
            else:
                payload = LiveFeedCheckInResponse(
                    event_type=event_type.value,
                    event_id=data['event_id'],
                    check_in=RecentCheckInResponse.from_entry(data['check_in']),
                    attendance_count=data['attendance_count'],
                    recent_check_ins=recent,
                )
            yield {
                'event': event_type.value,
                'data': payload.model_dump_json(),
            }

    return EventSourceResponse(event_generator())
