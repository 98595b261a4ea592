"""
Reservation Service

Façade over the booking ledger, the durable store and the payment gateway.

Reserve flow:
1. Validate show and seats (nothing is charged for seats already taken)
2. Charge payment - no ledger or seat state changes before this succeeds
3. Ledger create (atomic seat reservation + identity)
4. Save ledger (outside every seat lock)

Cancel flow:
1. Ledger cancel (remove booking + release seats)
2. Refund
3. Save ledger

A save failure after step 3 / step 1 does not undo the committed operation;
it is raised as PersistenceIOError carrying the booking id and the caller may
retry save().
"""

from collections.abc import Iterable
import threading
import time

from opentelemetry import trace

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import ReservationMetrics
from src.service.cinema.app.interface import IBookingStore, IPaymentGateway
from src.service.cinema.domain.aggregate.booking_ledger import BookingLedger
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.reservation_errors import (
    EmptySeatSelectionError,
    PaymentDeclinedError,
    PersistenceIOError,
    SeatUnavailableError,
    UnknownSeatError,
)
from src.service.cinema.domain.value_object import normalize_seat_ids


_RESULT_BY_ERROR: dict[type[CustomBaseError], str] = {
    SeatUnavailableError: 'unavailable',
    UnknownSeatError: 'unknown_seat',
    EmptySeatSelectionError: 'empty_selection',
    PaymentDeclinedError: 'payment_declined',
}


class ReservationService:
    def __init__(
        self,
        *,
        ledger: BookingLedger,
        booking_store: IBookingStore,
        payment_gateway: IPaymentGateway,
        metrics: ReservationMetrics,
    ) -> None:
        self.ledger = ledger
        self.booking_store = booking_store
        self.payment_gateway = payment_gateway
        self.metrics = metrics
        self.tracer = trace.get_tracer(__name__)
        # Snapshot and write happen together so an older snapshot never lands last
        self._save_lock = threading.Lock()

    @Logger.io
    def reserve(self, *, show_id: str, user: str, seat_ids: Iterable[str]) -> Booking:
        with self.tracer.start_as_current_span(
            'service.reserve', attributes={'show.id': show_id}
        ) as span:
            started = time.perf_counter()
            try:
                booking = self._reserve(show_id=show_id, user=user, seat_ids=seat_ids)
            except CustomBaseError as e:
                span.set_attribute('error', True)
                self.metrics.record_seat_reservation(
                    show_id=show_id,
                    result=_RESULT_BY_ERROR.get(type(e), 'rejected'),
                    duration=time.perf_counter() - started,
                )
                raise

            span.set_attribute('booking.id', booking.id)
            self.metrics.record_seat_reservation(
                show_id=show_id, result='success', duration=time.perf_counter() - started
            )
            Logger.base.info(
                f'[RESERVE] Booking {booking.id} for {booking.user} on show {show_id}: '
                f'{", ".join(booking.seat_ids)} ({booking.amount:.2f})'
            )
            self._persist_after(booking)
            return booking

    def _reserve(self, *, show_id: str, user: str, seat_ids: Iterable[str]) -> Booking:
        show = self.ledger.require_show(show_id)
        requested = normalize_seat_ids(seat_ids)
        if not requested:
            raise EmptySeatSelectionError()
        if unknown := show.seat_map.unknown_seat_ids(requested):
            raise UnknownSeatError(unknown)
        if taken := [seat_id for seat_id in requested if not show.seat_map.is_available(seat_id)]:
            raise SeatUnavailableError(taken)

        amount = show.price_per_seat * len(requested)
        if not self.payment_gateway.charge(amount):
            raise PaymentDeclinedError(amount)

        try:
            return self.ledger.create(show_id=show_id, user=user, seat_ids=requested)
        except CustomBaseError:
            # Lost a race for a seat (or invalid user) after charging
            self.payment_gateway.refund(amount)
            raise

    @Logger.io
    def cancel(self, booking_id: str) -> Booking:
        with self.tracer.start_as_current_span(
            'service.cancel', attributes={'booking.id': booking_id}
        ):
            booking = self.ledger.cancel(booking_id)
            self.metrics.record_cancellation(show_id=booking.show_id, result='success')
            self.payment_gateway.refund(booking.amount)
            Logger.base.info(
                f'[CANCEL] Booking {booking_id} cancelled, refund of {booking.amount:.2f} issued'
            )
            self._persist_after(booking)
            return booking

    @Logger.io
    def save(self) -> int:
        """Write the current ledger durably. Returns the number of bookings saved."""
        started = time.perf_counter()
        with self._save_lock:
            snapshot = self.ledger.snapshot()
            try:
                self.booking_store.save(snapshot)
            except PersistenceIOError:
                self.metrics.record_ledger_save(
                    result='failure', duration=time.perf_counter() - started
                )
                raise
        self.metrics.record_ledger_save(result='success', duration=time.perf_counter() - started)
        Logger.base.info(f'[PERSIST] Saved {len(snapshot)} bookings')
        return len(snapshot)

    @Logger.io
    def restore(self) -> int:
        """
        Load the durable ledger and re-derive every show's seat occupancy.

        An unreadable record degrades to an empty ledger. IntegrityViolationError
        (overlapping claims) propagates: startup must stop.
        """
        try:
            snapshot = self.booking_store.load()
        except PersistenceIOError as e:
            Logger.base.warning(f'[RESTORE] {e.message}, starting with no bookings')
            try:
                moved_to = self.booking_store.quarantine()
            except PersistenceIOError as quarantine_error:
                Logger.base.error(f'[RESTORE] {quarantine_error.message}')
            else:
                if moved_to is not None:
                    Logger.base.warning(f'[RESTORE] Unreadable record moved to {moved_to}')
            return 0

        if snapshot is None:
            Logger.base.info('[RESTORE] No saved bookings, starting empty')
            return 0

        restored = self.ledger.restore(snapshot)
        self.ledger.verify_consistency()
        self._refresh_seat_gauges()
        Logger.base.info(f'[RESTORE] Loaded {restored} bookings from disk')
        return restored

    def _persist_after(self, booking: Booking) -> None:
        self._refresh_seat_gauges(booking.show_id)
        try:
            self.save()
        except PersistenceIOError as e:
            raise PersistenceIOError(
                f'Booking {booking.id} is committed but could not be saved: {e.message}',
                booking_id=booking.id,
            ) from e

    def _refresh_seat_gauges(self, *show_ids: str) -> None:
        for show in self.ledger.show_catalog.all_shows():
            if not show_ids or show.id in show_ids:
                self.metrics.update_seats_booked(
                    show_id=show.id, count=len(show.seat_map.booked_seats())
                )
