"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.metrics.reservation_metrics import metrics as reservation_metrics
from src.service.cinema.app.service.reservation_service import ReservationService
from src.service.cinema.domain.aggregate.booking_ledger import BookingLedger
from src.service.cinema.domain.service.booking_id_generator import BookingIdGenerator
from src.service.cinema.driven_adapter.payment.mock_payment_gateway_impl import (
    MockPaymentGatewayImpl,
)
from src.service.cinema.driven_adapter.repo.show_catalog_impl import ShowCatalogImpl
from src.service.cinema.driven_adapter.state.json_file_booking_store_impl import (
    JsonFileBookingStoreImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Catalog is built once; every show owns its seat map for the process lifetime
    show_catalog = providers.Singleton(
        ShowCatalogImpl.from_config,
        rows=config_service.provided.SEAT_ROWS,
        cols=config_service.provided.SEAT_COLS,
    )

    booking_id_generator = providers.Singleton(
        BookingIdGenerator,
        prefix=config_service.provided.BOOKING_ID_PREFIX,
        width=config_service.provided.BOOKING_ID_WIDTH,
    )

    booking_ledger = providers.Singleton(
        BookingLedger,
        show_catalog=show_catalog,
        id_generator=booking_id_generator,
    )

    # Driven adapters
    booking_store = providers.Singleton(
        JsonFileBookingStoreImpl,
        path=config_service.provided.BOOKINGS_FILE,
    )
    payment_gateway = providers.Singleton(
        MockPaymentGatewayImpl,
        delay_seconds=config_service.provided.PAYMENT_DELAY_SECONDS,
    )

    metrics = providers.Object(reservation_metrics)

    reservation_service = providers.Singleton(
        ReservationService,
        ledger=booking_ledger,
        booking_store=booking_store,
        payment_gateway=payment_gateway,
        metrics=metrics,
    )


container = Container()


def setup() -> None:
    """Build the singletons eagerly so catalog or config errors surface at startup."""
    container.config_service()
    container.reservation_service()


def cleanup() -> None:
    container.reset_singletons()
