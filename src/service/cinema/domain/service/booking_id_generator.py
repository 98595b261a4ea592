"""
Booking Id Generator

Monotonic counter: B-0001, B-0002, ... Numbers past the pad width keep growing
(B-10000). After a restart the counter is seeded from the highest id found in
the restored ledger, so a new id never collides with a live booking even when
cancellations have shrunk the ledger below its highest number.
"""

import re
import threading
from typing import Iterable


class BookingIdGenerator:
    def __init__(self, *, prefix: str = 'B-', width: int = 4, last_issued: int = 0) -> None:
        self.prefix = prefix
        self.width = width
        self._last_issued = last_issued
        self._pattern = re.compile(rf'^{re.escape(prefix)}(\d+)$')
        self._lock = threading.Lock()

    @property
    def last_issued(self) -> int:
        with self._lock:
            return self._last_issued

    def next_id(self) -> str:
        with self._lock:
            self._last_issued += 1
            number = self._last_issued
        return f'{self.prefix}{number:0{self.width}d}'

    def observe(self, booking_ids: Iterable[str]) -> None:
        """Advance past every id seen; ids in another format are ignored."""
        numbers = [
            int(match.group(1))
            for booking_id in booking_ids
            if (match := self._pattern.match(booking_id))
        ]
        if not numbers:
            return
        with self._lock:
            self._last_issued = max(self._last_issued, *numbers)
