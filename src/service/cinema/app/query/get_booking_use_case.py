from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.service.cinema.domain.aggregate.booking_ledger import BookingLedger
from src.service.cinema.domain.entity.booking_entity import Booking


class GetBookingUseCase:
    def __init__(self, booking_ledger: BookingLedger) -> None:
        self.booking_ledger = booking_ledger

    @classmethod
    @inject
    def depends(
        cls, booking_ledger: BookingLedger = Depends(Provide[Container.booking_ledger])
    ) -> Self:
        return cls(booking_ledger=booking_ledger)

    def get_by_id(self, *, booking_id: str) -> Booking:
        """Raises UnknownBookingError when no active booking has this id."""
        return self.booking_ledger.get(booking_id.strip().upper())
