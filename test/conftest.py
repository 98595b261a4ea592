"""
Test Configuration and Fixtures

- Unit tests (test/**/unit/): build the domain objects directly, no HTTP app
- Integration tests: drive the FastAPI test app through TestClient, with the
  bookings file redirected to a per-test temporary directory
"""

# =============================================================================
# Environment setup MUST happen before any application import: the logging
# config reads TEST_LOG_DIR at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('DEPLOY_ENV', 'test')


_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.core_setting import Settings  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.service.cinema.domain.aggregate.booking_ledger import BookingLedger  # noqa: E402
from src.service.cinema.domain.service.booking_id_generator import (  # noqa: E402
    BookingIdGenerator,
)
from src.service.cinema.driven_adapter.repo.show_catalog_impl import (  # noqa: E402
    ShowCatalogImpl,
)
from src.service.cinema.driven_adapter.state.json_file_booking_store_impl import (  # noqa: E402
    JsonFileBookingStoreImpl,
)
from test.constants import FIXED_TODAY  # noqa: E402


# =============================================================================
# Domain Fixtures
# =============================================================================
@pytest.fixture
def show_catalog() -> ShowCatalogImpl:
    return ShowCatalogImpl.from_config(rows=5, cols=8, today=FIXED_TODAY)


@pytest.fixture
def id_generator() -> BookingIdGenerator:
    return BookingIdGenerator(prefix='B-', width=4)


@pytest.fixture
def ledger(show_catalog: ShowCatalogImpl, id_generator: BookingIdGenerator) -> BookingLedger:
    return BookingLedger(show_catalog=show_catalog, id_generator=id_generator)


@pytest.fixture
def bookings_file(tmp_path: Path) -> Path:
    return tmp_path / 'data' / 'bookings.json'


@pytest.fixture
def booking_store(bookings_file: Path) -> JsonFileBookingStoreImpl:
    return JsonFileBookingStoreImpl(path=bookings_file)


# =============================================================================
# HTTP Fixtures
# =============================================================================
@pytest.fixture
def test_settings(bookings_file: Path) -> Settings:
    return Settings(BOOKINGS_FILE=bookings_file, PAYMENT_DELAY_SECONDS=0.0)  # type: ignore


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """
    Fresh engine per test: singletons are rebuilt on startup so seat maps and
    the ledger never leak between tests.
    """
    from test.test_main import app

    container.reset_singletons()
    with container.config_service.override(providers.Object(test_settings)):
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    container.reset_singletons()


@pytest.fixture
def booking_payload() -> dict[str, Any]:
    return {'user': 'alice', 'show_id': 'S101', 'seat_ids': ['A1', 'A2']}
