"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.query import (
    get_booking_use_case,
    get_seat_map_use_case,
    get_show_use_case,
    list_movies_use_case,
    list_shows_use_case,
    list_user_bookings_use_case,
)
from src.service.cinema.driving_adapter.http_controller import booking_controller


WIRE_MODULES: list[ModuleType] = [
    list_movies_use_case,
    list_shows_use_case,
    get_show_use_case,
    get_seat_map_use_case,
    get_booking_use_case,
    list_user_bookings_use_case,
    booking_controller,
]
