"""
Booking Ledger

Authoritative store of active bookings. Every reservation and cancellation
goes through here so that, for every show, the booked seats of its seat map
are exactly the seats of the ledger's bookings for that show.

The ledger lock only guards the booking dictionary. Seat locks are taken by
SeatMap and are never held while waiting for the ledger lock.
"""

from collections.abc import Iterable, Iterator
import threading

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.show_entity import Show
from src.service.cinema.domain.reservation_errors import (
    EmptySeatSelectionError,
    IntegrityViolationError,
    SeatUnavailableError,
    UnknownBookingError,
    UnknownSeatError,
    UnknownShowError,
)
from src.service.cinema.domain.service.booking_id_generator import BookingIdGenerator
from src.service.cinema.domain.show_catalog import IShowCatalog
from src.service.cinema.domain.value_object import LedgerSnapshot, normalize_seat_ids


class BookingLedger:
    def __init__(self, *, show_catalog: IShowCatalog, id_generator: BookingIdGenerator) -> None:
        self.show_catalog = show_catalog
        self.id_generator = id_generator
        self._bookings: dict[str, Booking] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._bookings)

    def __contains__(self, booking_id: object) -> bool:
        with self._lock:
            return booking_id in self._bookings

    def __repr__(self) -> str:
        return f'BookingLedger(bookings={len(self)})'

    def require_show(self, show_id: str) -> Show:
        show = self.show_catalog.get_show(show_id)
        if show is None:
            raise UnknownShowError(show_id)
        return show

    @Logger.io
    def create(self, *, show_id: str, user: str, seat_ids: Iterable[str]) -> Booking:
        """
        Reserve seat_ids on show_id for user and record the booking.

        Raises:
            UnknownShowError, EmptySeatSelectionError, UnknownSeatError,
            SeatUnavailableError: the ledger and the seat map are unchanged
        """
        show = self.require_show(show_id)
        requested = normalize_seat_ids(seat_ids)
        if not requested:
            raise EmptySeatSelectionError()
        if unknown := show.seat_map.unknown_seat_ids(requested):
            raise UnknownSeatError(unknown)

        booking = Booking.create(
            id=self.id_generator.next_id(),
            user=user,
            show_id=show.id,
            seat_ids=requested,
            price_per_seat=show.price_per_seat,
        )
        show.seat_map.reserve_all(booking.seat_ids, booking.id)
        with self._lock:
            self._bookings[booking.id] = booking
        return booking

    @Logger.io
    def cancel(self, booking_id: str) -> Booking:
        """Remove the booking and free its seats. Returns the removed booking."""
        with self._lock:
            booking = self._bookings.pop(booking_id, None)
        if booking is None:
            raise UnknownBookingError(booking_id)

        show = self.show_catalog.get_show(booking.show_id)
        if show is None:
            # Shows are static, so this means the catalog changed under the ledger
            Logger.base.warning(
                f'[CANCEL] Show {booking.show_id} of booking {booking_id} no longer exists, '
                'ledger entry removed without seat release'
            )
            return booking

        show.seat_map.release_all(booking.seat_ids)
        return booking

    def get(self, booking_id: str) -> Booking:
        with self._lock:
            booking = self._bookings.get(booking_id)
        if booking is None:
            raise UnknownBookingError(booking_id)
        return booking

    @Logger.io
    def find_by_user(self, user: str) -> Iterator[Booking]:
        """Bookings whose user label matches case-insensitively, oldest first."""
        with self._lock:
            bookings = list(self._bookings.values())
        for booking in bookings:
            if booking.belongs_to(user):
                yield booking

    def bookings_for_show(self, show_id: str) -> list[Booking]:
        with self._lock:
            return [booking for booking in self._bookings.values() if booking.show_id == show_id]

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            return LedgerSnapshot(bookings=self._bookings.values())

    @Logger.io
    def restore(self, snapshot: LedgerSnapshot) -> int:
        """
        Reconcile seat maps from a loaded snapshot.

        Every booking re-reserves its original seats. Two bookings claiming the
        same seat, a repeated booking id, or a booking pointing at an unknown
        show or seat is an integrity violation: nothing is restored and the
        caller must not proceed.
        """
        with self._lock:
            if self._bookings:
                raise DomainError('Bookings can only be restored into an empty ledger')
            try:
                for booking in snapshot.bookings:
                    self._restore_one(booking)
            except IntegrityViolationError:
                self._rollback()
                raise
            self.id_generator.observe(self._bookings)
            return len(self._bookings)

    def _restore_one(self, booking: Booking) -> None:
        if booking.id in self._bookings:
            raise IntegrityViolationError(f'Booking id {booking.id} appears more than once')
        if len(set(booking.seat_ids)) != len(booking.seat_ids):
            raise IntegrityViolationError(f'Booking {booking.id} lists the same seat twice')

        show = self.show_catalog.get_show(booking.show_id)
        if show is None:
            raise IntegrityViolationError(
                f'Booking {booking.id} references unknown show {booking.show_id}'
            )

        try:
            show.seat_map.reserve_all(booking.seat_ids, booking.id)
        except SeatUnavailableError as e:
            holders = sorted({show.seat_map.booking_id_of(seat_id) or '?' for seat_id in e.seat_ids})
            raise IntegrityViolationError(
                f'Booking {booking.id} claims seats {", ".join(e.seat_ids)} on show '
                f'{show.id} already held by {", ".join(holders)}'
            ) from e
        except (UnknownSeatError, EmptySeatSelectionError) as e:
            raise IntegrityViolationError(
                f'Booking {booking.id} has invalid seats for show {show.id}: {e.message}'
            ) from e

        self._bookings[booking.id] = booking

    def _rollback(self) -> None:
        for booking in self._bookings.values():
            show = self.show_catalog.get_show(booking.show_id)
            if show is not None:
                show.seat_map.release_all(booking.seat_ids)
        self._bookings.clear()

    def verify_consistency(self) -> None:
        """
        Raises:
            IntegrityViolationError: some show's booked seats differ from the
                seats its ledger bookings hold
        """
        with self._lock:
            expected: dict[str, dict[str, str]] = {}
            for booking in self._bookings.values():
                holdings = expected.setdefault(booking.show_id, {})
                for seat_id in booking.seat_ids:
                    holdings[seat_id] = booking.id

        for show in self.show_catalog.all_shows():
            actual = show.seat_map.booked_seats()
            wanted = expected.pop(show.id, {})
            if actual != wanted:
                drift = sorted(set(actual.items()) ^ set(wanted.items()))
                raise IntegrityViolationError(
                    f'Seat map of show {show.id} disagrees with the ledger: {drift}'
                )
        if expected:
            raise IntegrityViolationError(
                f'Ledger holds bookings for unknown shows: {", ".join(sorted(expected))}'
            )
