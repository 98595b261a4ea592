from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from src.service.cinema.domain.entity.booking_entity import Booking


class BookingCreateRequest(BaseModel):
    user: str = Field(min_length=1)
    show_id: str
    seat_ids: List[str]  # e.g. ["A1", "a2"]; case and surrounding spaces are ignored

    class Config:
        json_schema_extra = {
            'example': {
                'user': 'alice',
                'show_id': 'S101',
                'seat_ids': ['A1', 'A2'],
            }
        }


class BookingResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'id': 'B-0001',
                'user': 'alice',
                'show_id': 'S101',
                'seat_ids': ['A1', 'A2'],
                'amount': '400.00',
                'created_at': '2026-10-19T13:05:00Z',
            }
        }
    )

    id: str
    user: str
    show_id: str
    seat_ids: List[str]
    amount: Decimal
    created_at: datetime

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            user=booking.user,
            show_id=booking.show_id,
            seat_ids=list(booking.seat_ids),
            amount=booking.amount,
            created_at=booking.created_at,
        )


class CancelBookingResponse(BookingResponse):
    refunded_amount: Decimal

    @classmethod
    def from_entity(cls, booking: Booking) -> 'CancelBookingResponse':
        return cls(
            id=booking.id,
            user=booking.user,
            show_id=booking.show_id,
            seat_ids=list(booking.seat_ids),
            amount=booking.amount,
            created_at=booking.created_at,
            refunded_amount=booking.amount,
        )


class SaveResponse(BaseModel):
    saved_bookings: int
