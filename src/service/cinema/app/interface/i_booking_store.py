"""
Booking Store Interface

Durable record of the booking ledger.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from src.service.cinema.domain.value_object import LedgerSnapshot


class IBookingStore(ABC):
    @abstractmethod
    def save(self, snapshot: LedgerSnapshot) -> None:
        """
        Replace the durable record with snapshot.

        A crash at any point leaves either the previous record or the new one,
        never a partially written file.

        Raises:
            PersistenceIOError: the record could not be written
        """
        pass

    @abstractmethod
    def load(self) -> Optional[LedgerSnapshot]:
        """
        Returns:
            The stored snapshot, or None when nothing has been saved yet

        Raises:
            PersistenceIOError: the record exists but cannot be read or parsed
        """
        pass

    @abstractmethod
    def quarantine(self) -> Optional[Path]:
        """Move an unreadable record aside so the next save does not overwrite it."""
        pass
