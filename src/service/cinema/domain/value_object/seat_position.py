"""
Seat Position Value Object

A seat is addressed by row letter + column number, e.g. "A1" .. "E8".
"""

import re
from typing import Iterable

import attrs

from src.platform.exception.exceptions import DomainError


_SEAT_ID_PATTERN = re.compile(r'^([A-Z])([1-9]\d*)$')


@attrs.define(frozen=True, order=True)
class SeatPosition:
    """Seat Position (Value Object)"""

    row: str
    column: int

    @property
    def seat_id(self) -> str:
        return f'{self.row}{self.column}'

    @classmethod
    def from_seat_id(cls, seat_id: str) -> 'SeatPosition':
        match = _SEAT_ID_PATTERN.match(seat_id)
        if not match:
            raise DomainError(f'Invalid seat ID format: {seat_id}. Expected: row letter + number')
        return cls(row=match.group(1), column=int(match.group(2)))


def seat_sort_key(seat_id: str) -> tuple[str, int, str]:
    """Canonical seat order: row letter, then numeric column (A2 before A10).

    Also the lock acquisition order of SeatMap, so it must be total over any
    string, well-formed or not.
    """
    match = _SEAT_ID_PATTERN.match(seat_id)
    if match:
        return match.group(1), int(match.group(2)), seat_id
    return seat_id, -1, seat_id


def normalize_seat_ids(seat_ids: Iterable[str]) -> list[str]:
    """Trim and upper-case caller input, dropping blanks and repeats (first wins)."""
    normalized: dict[str, None] = {}
    for raw in seat_ids:
        seat_id = raw.strip().upper()
        if seat_id:
            normalized.setdefault(seat_id, None)
    return list(normalized)
