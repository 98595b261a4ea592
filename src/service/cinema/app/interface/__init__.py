from src.service.cinema.app.interface.i_booking_store import IBookingStore
from src.service.cinema.app.interface.i_payment_gateway import IPaymentGateway


__all__ = ['IBookingStore', 'IPaymentGateway']
