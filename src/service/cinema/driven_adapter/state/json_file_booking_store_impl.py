"""
JSON File Booking Store

Durable ledger record: a single orjson document.

    {
      "schema_version": 1,
      "bookings": {
        "B-0001": {"id": "B-0001", "user": "alice", "show_id": "S101",
                   "seat_ids": ["A1", "A2"], "amount": "400.00",
                   "created_at": "2026-10-19T13:05"},
        ...
      }
    }

Bookings keep ledger insertion order; created_at is UTC at minute precision.

Write path: temp file in the same directory -> flush + fsync -> os.replace over
the record -> fsync the directory. A crash leaves the old or the new record.
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
import os
from pathlib import Path
import tempfile
import threading
from typing import Any, Dict, Optional

import orjson

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface import IBookingStore
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.reservation_errors import PersistenceIOError
from src.service.cinema.domain.value_object import SNAPSHOT_SCHEMA_VERSION, LedgerSnapshot


CREATED_AT_FORMAT = '%Y-%m-%dT%H:%M'
_BOOKING_FIELDS = frozenset({'id', 'user', 'show_id', 'seat_ids', 'amount', 'created_at'})


class JsonFileBookingStoreImpl(IBookingStore):
    def __init__(self, *, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f'JsonFileBookingStoreImpl(path={str(self.path)!r})'

    @Logger.io
    def save(self, snapshot: LedgerSnapshot) -> None:
        data = orjson.dumps(_encode_snapshot(snapshot), option=orjson.OPT_INDENT_2)
        with self._lock:
            self._write_atomic(data)
        Logger.base.debug(f'[STORE] Wrote {len(snapshot)} bookings to {self.path}')

    def _write_atomic(self, data: bytes) -> None:
        tmp_path: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp'
            )
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
            _fsync_dir(self.path.parent)
        except OSError as e:
            raise PersistenceIOError(f'Could not write bookings to {self.path}: {e}') from e
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except FileNotFoundError:
                    pass

    @Logger.io
    def load(self) -> Optional[LedgerSnapshot]:
        with self._lock:
            try:
                raw = self.path.read_bytes()
            except FileNotFoundError:
                return None
            except OSError as e:
                raise PersistenceIOError(f'Could not read {self.path}: {e}') from e

        try:
            document = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise PersistenceIOError(f'{self.path} is not valid JSON: {e}') from e

        return _decode_snapshot(document, source=self.path)

    @Logger.io
    def quarantine(self) -> Optional[Path]:
        stamp = datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S')
        target = self.path.with_name(f'{self.path.name}.corrupt-{stamp}')
        with self._lock:
            try:
                os.replace(self.path, target)
            except FileNotFoundError:
                return None
            except OSError as e:
                raise PersistenceIOError(f'Could not move {self.path} aside: {e}') from e
        return target


def _fsync_dir(directory: Path) -> None:
    # Not supported on every platform (e.g. Windows)
    try:
        fd = os.open(directory, os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


def _encode_snapshot(snapshot: LedgerSnapshot) -> Dict[str, Any]:
    return {
        'schema_version': snapshot.schema_version,
        'bookings': {booking.id: _encode_booking(booking) for booking in snapshot.bookings},
    }


def _encode_booking(booking: Booking) -> Dict[str, Any]:
    return {
        'id': booking.id,
        'user': booking.user,
        'show_id': booking.show_id,
        'seat_ids': list(booking.seat_ids),
        'amount': f'{booking.amount:.2f}',
        'created_at': booking.created_at.astimezone(timezone.utc).strftime(CREATED_AT_FORMAT),
    }


def _decode_snapshot(document: Any, *, source: Path) -> LedgerSnapshot:
    if not isinstance(document, dict):
        raise PersistenceIOError(f'{source}: top level must be an object')

    version = document.get('schema_version')
    if version != SNAPSHOT_SCHEMA_VERSION:
        raise PersistenceIOError(f'{source}: unsupported schema_version {version!r}')

    records = document.get('bookings')
    if not isinstance(records, dict):
        raise PersistenceIOError(f'{source}: "bookings" must be an object')

    bookings = []
    for key, record in records.items():
        try:
            booking = _decode_booking(record)
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise PersistenceIOError(f'{source}: malformed booking {key!r}: {e}') from e
        if booking.id != key:
            raise PersistenceIOError(f'{source}: booking stored under {key!r} has id {booking.id!r}')
        bookings.append(booking)

    return LedgerSnapshot(bookings=bookings, schema_version=version)


def _decode_booking(record: Any) -> Booking:
    if not isinstance(record, dict):
        raise TypeError('record must be an object')
    if missing := _BOOKING_FIELDS - record.keys():
        raise KeyError(', '.join(sorted(missing)))

    for field in ('id', 'user', 'show_id', 'amount', 'created_at'):
        if not isinstance(record[field], str):
            raise TypeError(f'{field} must be a string')
    seat_ids = record['seat_ids']
    if not isinstance(seat_ids, list) or not all(isinstance(s, str) for s in seat_ids):
        raise TypeError('seat_ids must be a list of strings')

    amount = Decimal(record['amount'])
    if not amount.is_finite() or amount < 0:
        raise ValueError(f'invalid amount {record["amount"]!r}')

    created_at = datetime.fromisoformat(record['created_at'])
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)

    # attrs validators reject an empty seat list
    return Booking(
        id=record['id'],
        user=record['user'],
        show_id=record['show_id'],
        seat_ids=seat_ids,
        amount=amount,
        created_at=created_at,
    )
