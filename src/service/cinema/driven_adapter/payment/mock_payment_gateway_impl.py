from decimal import Decimal
import time

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface import IPaymentGateway


class MockPaymentGatewayImpl(IPaymentGateway):
    """
    Simulated payment provider.

    Approves every positive amount unless constructed with approve=False.
    delay_seconds stands in for the round trip to a real provider.
    """

    def __init__(self, *, delay_seconds: float = 0.0, approve: bool = True) -> None:
        self.delay_seconds = delay_seconds
        self.approve = approve

    @Logger.io
    def charge(self, amount: Decimal) -> bool:
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)
        if amount <= 0:
            Logger.base.warning(f'[PAYMENT] Refusing non-positive charge {amount}')
            return False
        if not self.approve:
            Logger.base.info(f'[PAYMENT] Charge of {amount:.2f} declined')
            return False
        Logger.base.info(f'[PAYMENT] Charged {amount:.2f}')
        return True

    @Logger.io
    def refund(self, amount: Decimal) -> None:
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)
        Logger.base.info(f'[PAYMENT] Refunded {amount:.2f}')
