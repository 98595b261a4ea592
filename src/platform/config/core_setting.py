from pathlib import Path
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.platform.constant.path import DATA_DIR


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Seat Reservation Engine'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # env files: JSON list, e.g. ["http://localhost:3000"]

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # Durable booking ledger
    BOOKINGS_FILE: Path = DATA_DIR / 'bookings.json'

    # Booking identifiers: B-0001, B-0002, ...
    BOOKING_ID_PREFIX: str = 'B-'
    BOOKING_ID_WIDTH: int = 4

    # Simulated payment gateway
    PAYMENT_DELAY_SECONDS: float = 0.0

    # Tracing exporters (no SDK provider is installed when both are off)
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None
    OTEL_CONSOLE_EXPORT: bool = False

    # Seat map shape for every show (rows A.., columns 1..)
    SEAT_ROWS: int = 5
    SEAT_COLS: int = 8

    @field_validator('SEAT_ROWS', mode='after')
    @classmethod
    def check_seat_rows(cls, v: int) -> int:
        if not 1 <= v <= 26:
            raise ValueError('SEAT_ROWS must be between 1 and 26')
        return v

    @field_validator('SEAT_COLS', 'BOOKING_ID_WIDTH', mode='after')
    @classmethod
    def check_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError('must be a positive integer')
        return v


settings = Settings()  # type: ignore
