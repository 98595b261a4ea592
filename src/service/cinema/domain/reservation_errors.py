"""Reservation domain errors.

Validation errors are expected business outcomes and are returned to the
caller. Infrastructure errors cover the durable ledger.
"""

from decimal import Decimal
from typing import Iterable

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    InfrastructureError,
    NotFoundError,
)
from src.service.cinema.domain.value_object.seat_position import seat_sort_key


class UnknownShowError(NotFoundError):
    def __init__(self, show_id: str) -> None:
        self.show_id = show_id
        super().__init__(f'Show {show_id} not found')


class UnknownBookingError(NotFoundError):
    def __init__(self, booking_id: str) -> None:
        self.booking_id = booking_id
        super().__init__(f'Booking {booking_id} not found')


class UnknownSeatError(DomainError):
    def __init__(self, seat_ids: Iterable[str]) -> None:
        self.seat_ids = sorted(set(seat_ids), key=seat_sort_key)
        super().__init__(f'Unknown seats: {", ".join(self.seat_ids)}', 400)


class SeatUnavailableError(ConflictError):
    def __init__(self, seat_ids: Iterable[str]) -> None:
        self.seat_ids = sorted(set(seat_ids), key=seat_sort_key)
        super().__init__(f'These seats are not available: {", ".join(self.seat_ids)}')


class EmptySeatSelectionError(DomainError):
    def __init__(self) -> None:
        super().__init__('No seats selected', 400)


class PaymentDeclinedError(DomainError):
    def __init__(self, amount: Decimal) -> None:
        self.amount = amount
        super().__init__(f'Payment of {amount:.2f} was declined, booking aborted', 402)


class PersistenceIOError(InfrastructureError):
    def __init__(self, message: str, *, booking_id: str | None = None) -> None:
        # Set when the in-memory operation committed but the save failed
        self.booking_id = booking_id
        super().__init__(message)


class IntegrityViolationError(InfrastructureError):
    pass
