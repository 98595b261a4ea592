from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.get_booking_use_case import GetBookingUseCase
from src.service.cinema.app.query.list_user_bookings_use_case import ListUserBookingsUseCase
from src.service.cinema.app.service.reservation_service import ReservationService
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingResponse,
    CancelBookingResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@inject
def get_reservation_service(
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> ReservationService:
    return service


@router.get('', response_model=List[BookingResponse])
@Logger.io
def list_user_bookings(
    user: str = Query(min_length=1),
    use_case: ListUserBookingsUseCase = Depends(ListUserBookingsUseCase.depends),
) -> List[BookingResponse]:
    return [BookingResponse.from_entity(b) for b in use_case.list_user_bookings(user=user)]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
def create_booking(
    request: BookingCreateRequest,
    service: ReservationService = Depends(get_reservation_service),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('show.id', request.show_id)
        span.set_attribute('seat.count', len(request.seat_ids))

        booking = service.reserve(
            show_id=request.show_id.strip().upper(),
            user=request.user,
            seat_ids=request.seat_ids,
        )
        return BookingResponse.from_entity(booking)


@router.get('/{booking_id}')
@Logger.io
def get_booking(
    booking_id: str,
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    return BookingResponse.from_entity(use_case.get_by_id(booking_id=booking_id))


@router.delete('/{booking_id}', status_code=status.HTTP_200_OK)
@Logger.io
def cancel_booking(
    booking_id: str,
    service: ReservationService = Depends(get_reservation_service),
) -> CancelBookingResponse:
    booking = service.cancel(booking_id.strip().upper())
    return CancelBookingResponse.from_entity(booking)
