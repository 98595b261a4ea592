from src.service.cinema.domain.value_object.ledger_snapshot import (
    SNAPSHOT_SCHEMA_VERSION,
    LedgerSnapshot,
)
from src.service.cinema.domain.value_object.seat_position import (
    SeatPosition,
    normalize_seat_ids,
    seat_sort_key,
)


__all__ = [
    'SNAPSHOT_SCHEMA_VERSION',
    'LedgerSnapshot',
    'SeatPosition',
    'normalize_seat_ids',
    'seat_sort_key',
]
