from typing import List, Optional

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.get_seat_map_use_case import GetSeatMapUseCase
from src.service.cinema.app.query.get_show_use_case import GetShowUseCase
from src.service.cinema.app.query.list_shows_use_case import ListShowsUseCase
from src.service.cinema.driving_adapter.http_controller.schema.show_schema import (
    SeatMapResponse,
    SeatResponse,
    ShowResponse,
)


router = APIRouter()


@router.get('', response_model=List[ShowResponse])
@Logger.io
def list_shows(
    movie_id: Optional[str] = None,
    use_case: ListShowsUseCase = Depends(ListShowsUseCase.depends),
) -> List[ShowResponse]:
    return [ShowResponse.from_entity(show) for show in use_case.list_shows(movie_id=movie_id)]


@router.get('/{show_id}')
@Logger.io
def get_show(
    show_id: str,
    use_case: GetShowUseCase = Depends(GetShowUseCase.depends),
) -> ShowResponse:
    return ShowResponse.from_entity(use_case.get_by_id(show_id=show_id))


@router.get('/{show_id}/seat')
@Logger.io
def get_seat_map(
    show_id: str,
    use_case: GetSeatMapUseCase = Depends(GetSeatMapUseCase.depends),
) -> SeatMapResponse:
    seat_map = use_case.get_seat_map(show_id=show_id)
    return SeatMapResponse(
        show_id=seat_map.show.id,
        available_seats=seat_map.available_count,
        seats=[SeatResponse(seat_id=seat.seat_id, state=seat.state.value) for seat in seat_map.seats],
        rendered=seat_map.rendered,
    )
