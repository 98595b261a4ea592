from typing import List, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.seat_map_entity import SeatView
from src.service.cinema.domain.entity.show_entity import Show
from src.service.cinema.domain.enum import SeatState
from src.service.cinema.domain.reservation_errors import UnknownShowError
from src.service.cinema.domain.show_catalog import IShowCatalog


@attrs.define(frozen=True)
class SeatMapView:
    show: Show
    seats: List[SeatView]
    rendered: str

    @property
    def available_count(self) -> int:
        return sum(1 for seat in self.seats if seat.state is SeatState.AVAILABLE)


class GetSeatMapUseCase:
    def __init__(self, show_catalog: IShowCatalog) -> None:
        self.show_catalog = show_catalog

    @classmethod
    @inject
    def depends(
        cls, show_catalog: IShowCatalog = Depends(Provide[Container.show_catalog])
    ) -> Self:
        return cls(show_catalog=show_catalog)

    @Logger.io
    def get_seat_map(self, *, show_id: str) -> SeatMapView:
        """Point-in-time seat states of a show, plus the text grid shown at the counter."""
        show = self.show_catalog.get_show(show_id.strip().upper())
        if show is None:
            raise UnknownShowError(show_id)
        seats = show.seat_map.snapshot()
        return SeatMapView(show=show, seats=seats, rendered=show.seat_map.render())
