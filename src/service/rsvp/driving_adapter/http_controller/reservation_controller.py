from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.rsvp.app.command.cancel_reservation_use_case import CancelReservationUseCase
from src.service.rsvp.app.command.reserve_seat_use_case import ReserveSeatUseCase
from src.service.rsvp.app.query.list_my_reservations_use_case import ListMyReservationsUseCase
from src.service.rsvp.domain.entity.user_entity import UserEntity
from src.service.rsvp.driving_adapter.http_controller.auth.role_auth import require_student
from src.service.rsvp.driving_adapter.http_controller.schema.reservation_schema import (
    CancellationResponse,
    MyReservationResponse,
    ReservationResponse,
)


router = APIRouter()


@router.post('/event/{event_id}/reservation', status_code=status.HTTP_201_CREATED)
@Logger.io
async def reserve(
    event_id: int,
    current_user: UserEntity = Depends(require_student),
    use_case: ReserveSeatUseCase = Depends(ReserveSeatUseCase.depends),
) -> ReservationResponse:
    outcome = await use_case.reserve(event_id=event_id, student_id=current_user.id or 0)
    return ReservationResponse.from_outcome(outcome)


@router.delete('/event/{event_id}/reservation')
@Logger.io
async def cancel_reservation(
    event_id: int,
    current_user: UserEntity = Depends(require_student),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> CancellationResponse:
    outcome = await use_case.cancel(event_id=event_id, student_id=current_user.id or 0)
    return CancellationResponse.from_outcome(outcome)


@router.get('/reservation/my')
@Logger.io
async def list_my_reservations(
    current_user: UserEntity = Depends(require_student),
    use_case: ListMyReservationsUseCase = Depends(ListMyReservationsUseCase.depends),
) -> List[MyReservationResponse]:
    items = await use_case.list_my_reservations(student_id=current_user.id or 0)
    return [MyReservationResponse.from_reserved_event(item) for item in items]
