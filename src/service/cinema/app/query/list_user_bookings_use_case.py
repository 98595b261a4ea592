from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.aggregate.booking_ledger import BookingLedger
from src.service.cinema.domain.entity.booking_entity import Booking


class ListUserBookingsUseCase:
    def __init__(self, booking_ledger: BookingLedger) -> None:
        self.booking_ledger = booking_ledger

    @classmethod
    @inject
    def depends(
        cls, booking_ledger: BookingLedger = Depends(Provide[Container.booking_ledger])
    ) -> Self:
        return cls(booking_ledger=booking_ledger)

    @Logger.io
    def list_user_bookings(self, *, user: str) -> List[Booking]:
        bookings = list(self.booking_ledger.find_by_user(user))
        Logger.base.info(f'[LIST_BOOKINGS] {len(bookings)} bookings for {user}')
        return bookings
