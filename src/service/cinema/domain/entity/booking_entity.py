from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.reservation_errors import EmptySeatSelectionError


_CENTS = Decimal('0.01')


def _minute_precision(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


@attrs.define(frozen=True)
class Booking:
    id: str
    user: str
    show_id: str
    seat_ids: tuple[str, ...] = attrs.field(
        converter=tuple,
        validator=[
            attrs.validators.min_len(1),
            attrs.validators.deep_iterable(member_validator=attrs.validators.instance_of(str)),
        ],
    )
    amount: Decimal = attrs.field(validator=attrs.validators.instance_of(Decimal))
    created_at: datetime = attrs.field(converter=_minute_precision)

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: str,
        user: str,
        show_id: str,
        seat_ids: Sequence[str],
        price_per_seat: Decimal,
    ) -> 'Booking':
        user = user.strip()
        if not user:
            raise DomainError('User name is required')
        if not seat_ids:
            raise EmptySeatSelectionError()
        if len(set(seat_ids)) != len(seat_ids):
            raise DomainError('A seat can only appear once in a booking')

        return cls(
            id=id,
            user=user,
            show_id=show_id,
            seat_ids=tuple(seat_ids),
            amount=(price_per_seat * len(seat_ids)).quantize(_CENTS),
            created_at=datetime.now(timezone.utc),
        )

    def belongs_to(self, user: str) -> bool:
        return self.user.casefold() == user.strip().casefold()
