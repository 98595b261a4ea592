import pytest

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.value_object import SeatPosition, normalize_seat_ids, seat_sort_key


pytestmark = pytest.mark.unit


class TestSeatPosition:
    def test_parses_row_and_column(self) -> None:
        position = SeatPosition.from_seat_id('C12')

        assert position == SeatPosition(row='C', column=12)
        assert position.seat_id == 'C12'

    @pytest.mark.parametrize('seat_id', ['', 'A', '1A', 'A0', 'a1', 'AA1'])
    def test_rejects_malformed_ids(self, seat_id: str) -> None:
        with pytest.raises(DomainError):
            SeatPosition.from_seat_id(seat_id)


class TestSeatSortKey:
    def test_orders_columns_numerically(self) -> None:
        assert sorted(['A10', 'B1', 'A2', 'A1'], key=seat_sort_key) == ['A1', 'A2', 'A10', 'B1']

    def test_malformed_ids_still_have_a_total_order(self) -> None:
        ids = ['zz', 'A1', '??', 'A01']
        assert sorted(ids, key=seat_sort_key) == sorted(reversed(ids), key=seat_sort_key)


class TestNormalizeSeatIds:
    def test_trims_upper_cases_and_drops_repeats(self) -> None:
        assert normalize_seat_ids([' a1 ', 'A2', 'a1', '', '  ', 'b3']) == ['A1', 'A2', 'B3']

    def test_empty_input(self) -> None:
        assert normalize_seat_ids([]) == []
