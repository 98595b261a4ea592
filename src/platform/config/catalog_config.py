"""Static catalog of movies and shows loaded once at startup."""

from decimal import Decimal
from typing import Final, TypedDict


class MovieConfig(TypedDict):
    id: str
    title: str
    language: str
    duration_minutes: int
    genre: str


class ShowConfig(TypedDict):
    id: str
    movie_id: str
    day_offset: int  # days from today
    hour: int
    minute: int
    screen: str
    price: Decimal


MOVIES: Final[list[MovieConfig]] = [
    {
        'id': 'M001',
        'title': 'The Timekeeper',
        'language': 'English',
        'duration_minutes': 130,
        'genre': 'Sci-Fi',
    },
    {
        'id': 'M002',
        'title': 'Dil Se Again',
        'language': 'Hindi',
        'duration_minutes': 150,
        'genre': 'Romance/Drama',
    },
    {
        'id': 'M003',
        'title': "The Chef's Secret",
        'language': 'Hindi',
        'duration_minutes': 120,
        'genre': 'Comedy',
    },
]

SHOWS: Final[list[ShowConfig]] = [
    {
        'id': 'S101',
        'movie_id': 'M001',
        'day_offset': 0,
        'hour': 13,
        'minute': 30,
        'screen': 'Screen 1',
        'price': Decimal('200.00'),
    },
    {
        'id': 'S102',
        'movie_id': 'M001',
        'day_offset': 0,
        'hour': 19,
        'minute': 0,
        'screen': 'Screen 1',
        'price': Decimal('250.00'),
    },
    {
        'id': 'S201',
        'movie_id': 'M002',
        'day_offset': 0,
        'hour': 15,
        'minute': 0,
        'screen': 'Screen 2',
        'price': Decimal('220.00'),
    },
    {
        'id': 'S301',
        'movie_id': 'M003',
        'day_offset': 1,
        'hour': 11,
        'minute': 0,
        'screen': 'Screen 3',
        'price': Decimal('150.00'),
    },
]
