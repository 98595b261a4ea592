from abc import ABC, abstractmethod
from decimal import Decimal


class IPaymentGateway(ABC):
    @abstractmethod
    def charge(self, amount: Decimal) -> bool:
        """Returns True when the payment went through."""
        pass

    @abstractmethod
    def refund(self, amount: Decimal) -> None:
        pass
