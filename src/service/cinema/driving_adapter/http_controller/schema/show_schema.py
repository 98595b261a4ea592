from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel

from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.show_entity import Show


class MovieResponse(BaseModel):
    id: str
    title: str
    language: str
    duration_minutes: int
    genre: str

    @classmethod
    def from_entity(cls, movie: Movie) -> 'MovieResponse':
        return cls(
            id=movie.id,
            title=movie.title,
            language=movie.language,
            duration_minutes=movie.duration_minutes,
            genre=movie.genre,
        )


class ShowResponse(BaseModel):
    id: str
    movie_id: str
    movie_title: str
    start_time: datetime
    screen: str
    price_per_seat: Decimal
    total_seats: int
    available_seats: int

    @classmethod
    def from_entity(cls, show: Show) -> 'ShowResponse':
        return cls(
            id=show.id,
            movie_id=show.movie.id,
            movie_title=show.movie.title,
            start_time=show.start_time,
            screen=show.screen,
            price_per_seat=show.price_per_seat,
            total_seats=len(show.seat_map),
            available_seats=show.available_seats_count(),
        )


class SeatResponse(BaseModel):
    seat_id: str
    state: str  # available / booked


class SeatMapResponse(BaseModel):
    show_id: str
    available_seats: int
    seats: List[SeatResponse]
    rendered: str

    class Config:
        json_schema_extra = {
            'example': {
                'show_id': 'S101',
                'available_seats': 38,
                'seats': [
                    {'seat_id': 'A1', 'state': 'booked'},
                    {'seat_id': 'A2', 'state': 'booked'},
                    {'seat_id': 'A3', 'state': 'available'},
                ],
                'rendered': 'Seat legend: [O] available  [X] booked\n...',
            }
        }
