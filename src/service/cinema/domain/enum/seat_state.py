"""Seat State Enum"""

from enum import StrEnum


class SeatState(StrEnum):
    AVAILABLE = 'available'
    BOOKED = 'booked'
