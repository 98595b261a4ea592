"""
Unit tests for BookingLedger

Tests:
- create: amount, identity, seat normalization, failure leaves no trace
- cancel: frees seats, unknown ids, show missing from the catalog
- find_by_user: case-insensitive, insertion order, lazy
- Ledger and seat maps agree after long random create/cancel sequences
"""

from collections.abc import Iterator
from decimal import Decimal
import random
from unittest.mock import patch

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.aggregate.booking_ledger import BookingLedger
from src.service.cinema.domain.reservation_errors import (
    EmptySeatSelectionError,
    SeatUnavailableError,
    UnknownBookingError,
    UnknownSeatError,
    UnknownShowError,
)
from src.service.cinema.driven_adapter.repo.show_catalog_impl import ShowCatalogImpl
from test.constants import ALICE, BOB, S101_PRICE, SHOW_S101, SHOW_S102


pytestmark = pytest.mark.unit


def _booked(show_catalog: ShowCatalogImpl, show_id: str) -> dict[str, str]:
    show = show_catalog.get_show(show_id)
    assert show is not None
    return show.seat_map.booked_seats()


class TestCreateBooking:
    def test_booking_holds_exactly_its_seats(
        self, ledger: BookingLedger, show_catalog: ShowCatalogImpl
    ) -> None:
        booking = ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1', 'A2'])

        assert booking.id == 'B-0001'
        assert booking.user == ALICE
        assert booking.seat_ids == ('A1', 'A2')
        assert booking.amount == S101_PRICE * 2 == Decimal('400.00')
        assert booking.created_at.second == 0
        assert _booked(show_catalog, SHOW_S101) == {'A1': 'B-0001', 'A2': 'B-0001'}
        assert booking.id in ledger
        ledger.verify_consistency()

    def test_seat_ids_are_normalized(self, ledger: BookingLedger) -> None:
        booking = ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=[' a1', 'A1 ', 'b2'])

        assert booking.seat_ids == ('A1', 'B2')
        assert booking.amount == Decimal('400.00')

    def test_ids_are_sequential(self, ledger: BookingLedger) -> None:
        first = ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1'])
        second = ledger.create(show_id=SHOW_S102, user=BOB, seat_ids=['A1'])

        assert (first.id, second.id) == ('B-0001', 'B-0002')

    def test_unknown_show(self, ledger: BookingLedger) -> None:
        with pytest.raises(UnknownShowError) as exc_info:
            ledger.create(show_id='S999', user=ALICE, seat_ids=['A1'])

        assert exc_info.value.status_code == 404
        assert len(ledger) == 0

    def test_empty_selection(self, ledger: BookingLedger) -> None:
        with pytest.raises(EmptySeatSelectionError):
            ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['  ', ''])

    def test_unknown_seat(self, ledger: BookingLedger, show_catalog: ShowCatalogImpl) -> None:
        with pytest.raises(UnknownSeatError) as exc_info:
            ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1', 'F1'])

        assert exc_info.value.seat_ids == ['F1']
        assert _booked(show_catalog, SHOW_S101) == {}
        assert len(ledger) == 0

    def test_blank_user_is_rejected(self, ledger: BookingLedger) -> None:
        with pytest.raises(DomainError):
            ledger.create(show_id=SHOW_S101, user='   ', seat_ids=['A1'])

    def test_conflict_leaves_ledger_and_seats_unchanged(
        self, ledger: BookingLedger, show_catalog: ShowCatalogImpl
    ) -> None:
        ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1', 'A2'])
        before = _booked(show_catalog, SHOW_S101)

        with pytest.raises(SeatUnavailableError) as exc_info:
            ledger.create(show_id=SHOW_S101, user=BOB, seat_ids=['A2', 'A3'])

        assert exc_info.value.seat_ids == ['A2']
        assert _booked(show_catalog, SHOW_S101) == before
        assert len(ledger) == 1
        ledger.verify_consistency()

    def test_failed_attempt_does_not_reuse_ids(self, ledger: BookingLedger) -> None:
        ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1'])
        with pytest.raises(SeatUnavailableError):
            ledger.create(show_id=SHOW_S101, user=BOB, seat_ids=['A1'])

        booking = ledger.create(show_id=SHOW_S101, user=BOB, seat_ids=['A2'])

        assert booking.id == 'B-0003'

    def test_same_seat_on_different_shows_is_independent(self, ledger: BookingLedger) -> None:
        ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1'])
        ledger.create(show_id=SHOW_S102, user=BOB, seat_ids=['A1'])

        assert len(ledger) == 2


class TestCancelBooking:
    def test_cancel_frees_the_seats(
        self, ledger: BookingLedger, show_catalog: ShowCatalogImpl
    ) -> None:
        booking = ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1', 'A2'])

        removed = ledger.cancel(booking.id)

        assert removed == booking
        assert booking.id not in ledger
        assert _booked(show_catalog, SHOW_S101) == {}
        ledger.create(show_id=SHOW_S101, user=BOB, seat_ids=['A1', 'A2'])

    def test_unknown_booking(self, ledger: BookingLedger) -> None:
        with pytest.raises(UnknownBookingError) as exc_info:
            ledger.cancel('B-9999')

        assert exc_info.value.status_code == 404

    def test_second_cancel_is_unknown(self, ledger: BookingLedger) -> None:
        booking = ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1'])
        ledger.cancel(booking.id)

        with pytest.raises(UnknownBookingError):
            ledger.cancel(booking.id)

    def test_missing_show_still_removes_the_entry(
        self, ledger: BookingLedger, show_catalog: ShowCatalogImpl
    ) -> None:
        booking = ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1'])

        with patch.object(show_catalog, 'get_show', return_value=None):
            removed = ledger.cancel(booking.id)

        assert removed.id == booking.id
        assert len(ledger) == 0


class TestFindByUser:
    def test_matches_case_insensitively_in_insertion_order(self, ledger: BookingLedger) -> None:
        first = ledger.create(show_id=SHOW_S101, user='Alice', seat_ids=['A1'])
        ledger.create(show_id=SHOW_S101, user=BOB, seat_ids=['A2'])
        third = ledger.create(show_id=SHOW_S102, user='ALICE', seat_ids=['C3'])

        found = list(ledger.find_by_user(' alice '))

        assert [b.id for b in found] == [first.id, third.id]

    def test_no_match_yields_nothing(self, ledger: BookingLedger) -> None:
        ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1'])

        assert list(ledger.find_by_user('carol')) == []

    def test_is_lazy(self, ledger: BookingLedger) -> None:
        ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A1'])
        ledger.create(show_id=SHOW_S101, user=ALICE, seat_ids=['A2'])

        results = ledger.find_by_user(ALICE)

        assert isinstance(results, Iterator)
        assert next(results).seat_ids == ('A1',)


class TestLedgerSeatMapAgreement:
    def test_random_creates_and_cancels_keep_ledger_and_seats_in_sync(
        self, ledger: BookingLedger, show_catalog: ShowCatalogImpl
    ) -> None:
        rng = random.Random(20260115)
        show_ids = [show.id for show in show_catalog.all_shows()]
        seat_ids = list(show_catalog.all_shows()[0].seat_map.seat_ids)
        live: list[str] = []

        for _ in range(1000):
            if live and rng.random() < 0.4:
                ledger.cancel(live.pop(rng.randrange(len(live))))
                continue
            try:
                booking = ledger.create(
                    show_id=rng.choice(show_ids),
                    user=rng.choice([ALICE, BOB]),
                    seat_ids=rng.sample(seat_ids, rng.randint(1, 4)),
                )
            except SeatUnavailableError:
                continue
            live.append(booking.id)

        ledger.verify_consistency()
        assert len(ledger) == len(live)
        holders = [
            booking_id
            for show in show_catalog.all_shows()
            for booking_id in show.seat_map.booked_seats().values()
        ]
        assert set(holders) == set(live)
