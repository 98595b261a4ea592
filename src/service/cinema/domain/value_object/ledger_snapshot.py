from typing import TYPE_CHECKING

import attrs


if TYPE_CHECKING:
    from src.service.cinema.domain.entity.booking_entity import Booking


# Bump when the durable record layout changes
SNAPSHOT_SCHEMA_VERSION = 1


@attrs.define(frozen=True)
class LedgerSnapshot:
    """Point-in-time copy of the booking ledger, in insertion order."""

    bookings: tuple['Booking', ...] = attrs.field(converter=tuple, factory=tuple)
    schema_version: int = SNAPSHOT_SCHEMA_VERSION

    def __len__(self) -> int:
        return len(self.bookings)
