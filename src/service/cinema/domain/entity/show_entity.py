from datetime import datetime
from decimal import Decimal

import attrs

from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.seat_map_entity import SeatMap


@attrs.define(frozen=True, eq=False)
class Show:
    """A scheduled screening. Immutable apart from the state of its seat map."""

    id: str
    movie: Movie
    start_time: datetime
    screen: str
    price_per_seat: Decimal
    seat_map: SeatMap = attrs.field(repr=False)

    def available_seats_count(self) -> int:
        return self.seat_map.available_count()
