from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.service.reservation_service import ReservationService
from src.service.cinema.driving_adapter.http_controller.booking_controller import (
    get_reservation_service,
)
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import SaveResponse


router = APIRouter()


@router.post('/save')
@Logger.io
def save_bookings(
    service: ReservationService = Depends(get_reservation_service),
) -> SaveResponse:
    """Write the ledger to disk now. The service also saves on shutdown."""
    return SaveResponse(saved_bookings=service.save())
