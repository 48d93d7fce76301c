from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.command.create_event_use_case import CreateEventUseCase
from src.service.rsvp.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.rsvp.app.query.get_event_reconciliation_use_case import (
    GetEventReconciliationUseCase,
)
from src.service.rsvp.app.query.get_event_use_case import GetEventUseCase
from src.service.rsvp.app.query.list_events_use_case import ListEventsUseCase
from src.service.rsvp.domain.entity.user_entity import UserEntity
from src.service.rsvp.domain.enum.roster_sort import RosterSortField, SortDirection
from src.service.rsvp.domain.reconciliation_domain import RosterSortState
from src.service.rsvp.driving_adapter.http_controller.auth.role_auth import (
    require_organization,
)
from src.service.rsvp.driving_adapter.http_controller.roster_csv import (
    render_roster_csv,
    roster_csv_filename,
)
from src.service.rsvp.driving_adapter.http_controller.schema.event_schema import (
    CheckInUrlResponse,
    CreateEventRequest,
    DashboardResponse,
    EventResponse,
    EventWithCountResponse,
)
from src.service.rsvp.driving_adapter.http_controller.schema.reconciliation_schema import (
    ReconciliationResponse,
)
from src.service.rsvp.driving_adapter.http_controller.user_controller import get_current_user


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: CreateEventRequest,
    current_user: UserEntity = Depends(require_organization),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.create_event(
        organization_id=current_user.id or 0,
        title=request.title,
        description=request.description,
        event_date=request.event_date,
        location=request.location,
        capacity=request.capacity,
    )
    return EventResponse.from_entity(event)


@router.get('')
@Logger.io
async def list_events(
    organization_id: Optional[int] = None,
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventWithCountResponse]:
    overviews = await use_case.list_events(organization_id=organization_id)
    return [EventWithCountResponse.from_overview(o) for o in overviews]


@router.get('/dashboard')
@Logger.io
async def get_dashboard(
    current_user: UserEntity = Depends(require_organization),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> DashboardResponse:
    summary = await use_case.get_organization_dashboard(organization_id=current_user.id or 0)
    return DashboardResponse.from_summary(summary)


@router.get('/{event_id}')
@Logger.io
async def get_event(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventWithCountResponse:
    overview = await use_case.get_event(event_id=event_id)
    return EventWithCountResponse.from_overview(overview)


@router.delete('/{event_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_event(
    event_id: int,
    current_user: UserEntity = Depends(require_organization),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> None:
    await use_case.delete_event(event_id=event_id, requester_id=current_user.id or 0)


@router.get('/{event_id}/check_in_url')
@Logger.io
async def get_check_in_url(
    event_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> CheckInUrlResponse:
    url = await use_case.get_check_in_url(event_id=event_id, requester_id=current_user.id or 0)
    return CheckInUrlResponse(event_id=event_id, url=url)


@router.get('/{event_id}/reconciliation')
@Logger.io
async def get_reconciliation(
    event_id: int,
    sort_by: RosterSortField = RosterSortField.RESERVED_AT,
    direction: SortDirection = SortDirection.DESC,
    toggle: Optional[RosterSortField] = Query(
        None, description='Column header clicked: flips the direction or switches field'
    ),
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetEventReconciliationUseCase = Depends(GetEventReconciliationUseCase.depends),
) -> ReconciliationResponse:
    sort_state = RosterSortState(field=sort_by, direction=direction)
    if toggle is not None:
        sort_state = sort_state.toggle(toggle)

    report = await use_case.get_reconciliation(
        event_id=event_id, requester_id=current_user.id or 0, sort_state=sort_state
    )
    return ReconciliationResponse.from_report(report)


@router.get('/{event_id}/roster.csv')
@Logger.io
async def export_roster_csv(
    event_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetEventReconciliationUseCase = Depends(GetEventReconciliationUseCase.depends),
) -> Response:
    report = await use_case.get_reconciliation(
        event_id=event_id, requester_id=current_user.id or 0
    )
    return Response(
        content=render_roster_csv(report.roster),
        media_type='text/csv',
        headers={
            'Content-Disposition': (
                f'attachment; filename="{roster_csv_filename(report.event.title)}"'
            )
        },
    )
