"""
Seat Map Entity

Per-show collection of seats with all-or-nothing multi-seat reserve/release.

Locking discipline:
- Each seat owns a lock; no lock guards the map as a whole.
- A request's seat ids are de-duplicated and sorted with ``seat_sort_key``
  and locks are taken in that order before any availability check, so two
  requests over overlapping seats can never wait on each other in a cycle.
- Locks are released right after the mutation, or as soon as validation fails.
- The set of seat ids is fixed at construction, so unknown-id checks need no lock.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
import threading
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.enum import SeatState
from src.service.cinema.domain.reservation_errors import (
    EmptySeatSelectionError,
    SeatUnavailableError,
    UnknownSeatError,
)
from src.service.cinema.domain.value_object.seat_position import SeatPosition, seat_sort_key


@attrs.define
class Seat:
    id: str
    state: SeatState = SeatState.AVAILABLE
    booking_id: Optional[str] = None
    lock: threading.Lock = attrs.field(factory=threading.Lock, eq=False, repr=False)

    def book(self, booking_id: str) -> None:
        self.state = SeatState.BOOKED
        self.booking_id = booking_id

    def release(self) -> None:
        self.state = SeatState.AVAILABLE
        self.booking_id = None


@attrs.define(frozen=True)
class SeatView:
    """Read-only copy of a seat at snapshot time."""

    seat_id: str
    state: SeatState
    booking_id: Optional[str] = None


class SeatMap:
    def __init__(self, seat_ids: Iterable[str]) -> None:
        self._seats: dict[str, Seat] = {}
        for seat_id in seat_ids:
            if seat_id in self._seats:
                raise DomainError(f'Duplicate seat id: {seat_id}')
            self._seats[seat_id] = Seat(id=seat_id)
        if not self._seats:
            raise DomainError('A seat map needs at least one seat')

    @classmethod
    def grid(cls, *, rows: int, cols: int) -> 'SeatMap':
        """Rows labelled A, B, C..., columns numbered from 1 (A1..E8 for 5x8)."""
        return cls(
            SeatPosition(row=chr(ord('A') + r), column=c).seat_id
            for r in range(rows)
            for c in range(1, cols + 1)
        )

    def __len__(self) -> int:
        return len(self._seats)

    def __contains__(self, seat_id: object) -> bool:
        return seat_id in self._seats

    def __repr__(self) -> str:
        return f'SeatMap(seats={len(self._seats)})'

    @property
    def seat_ids(self) -> tuple[str, ...]:
        return tuple(self._seats)

    def unknown_seat_ids(self, seat_ids: Iterable[str]) -> list[str]:
        return [seat_id for seat_id in seat_ids if seat_id not in self._seats]

    def is_available(self, seat_id: str) -> bool:
        seat = self._seats.get(seat_id)
        if seat is None:
            return False
        with seat.lock:
            return seat.state is SeatState.AVAILABLE

    def booking_id_of(self, seat_id: str) -> Optional[str]:
        seat = self._seats.get(seat_id)
        if seat is None:
            return None
        with seat.lock:
            return seat.booking_id

    @contextmanager
    def _locked(self, seat_ids: set[str]) -> Iterator[list[Seat]]:
        seats = [self._seats[seat_id] for seat_id in sorted(seat_ids, key=seat_sort_key)]
        acquired: list[Seat] = []
        try:
            for seat in seats:
                seat.lock.acquire()
                acquired.append(seat)
            yield seats
        finally:
            for seat in reversed(acquired):
                seat.lock.release()

    @Logger.io
    def reserve_all(self, seat_ids: Iterable[str], booking_id: str) -> None:
        """
        Book every seat for booking_id, or none of them.

        Raises:
            EmptySeatSelectionError: no seat ids given
            UnknownSeatError: some ids are not part of this map (nothing changes)
            SeatUnavailableError: some seats are already booked (nothing changes)
        """
        requested = set(seat_ids)
        if not requested:
            raise EmptySeatSelectionError()
        if unknown := self.unknown_seat_ids(requested):
            raise UnknownSeatError(unknown)

        with self._locked(requested) as seats:
            if unavailable := [seat.id for seat in seats if seat.state is SeatState.BOOKED]:
                raise SeatUnavailableError(unavailable)
            for seat in seats:
                seat.book(booking_id)

    @Logger.io
    def release_all(self, seat_ids: Iterable[str]) -> None:
        """
        Mark every seat available again. Releasing an available seat is a no-op.

        Raises:
            UnknownSeatError: some ids are not part of this map (nothing changes)
        """
        requested = set(seat_ids)
        if unknown := self.unknown_seat_ids(requested):
            raise UnknownSeatError(unknown)

        with self._locked(requested) as seats:
            for seat in seats:
                seat.release()

    def snapshot(self) -> list[SeatView]:
        views = []
        for seat in self._seats.values():
            with seat.lock:
                views.append(SeatView(seat_id=seat.id, state=seat.state, booking_id=seat.booking_id))
        return views

    def booked_seats(self) -> dict[str, str]:
        """seat id -> owning booking id, for every booked seat."""
        return {
            view.seat_id: view.booking_id or ''
            for view in self.snapshot()
            if view.state is SeatState.BOOKED
        }

    def available_count(self) -> int:
        return sum(1 for view in self.snapshot() if view.state is SeatState.AVAILABLE)

    def render(self) -> str:
        """Text seat map: one line per row, [O] available, [X] booked."""
        views = self.snapshot()
        rows: dict[str, list[SeatView]] = {}
        max_col = 0
        for view in sorted(views, key=lambda v: seat_sort_key(v.seat_id)):
            position = SeatPosition.from_seat_id(view.seat_id)
            rows.setdefault(position.row, []).append(view)
            max_col = max(max_col, position.column)

        lines = [
            'Seat legend: [O] available  [X] booked',
            '   ' + ''.join(f'{c:3d}' for c in range(1, max_col + 1)),
        ]
        for row, row_views in rows.items():
            cells = ''.join(
                ' [X]' if view.state is SeatState.BOOKED else ' [O]' for view in row_views
            )
            lines.append(f'{row}  {cells}')
        return '\n'.join(lines)
