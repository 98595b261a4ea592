"""
Unit tests for Settings

Tests:
- The shipped .env.example loads (it is the fallback when no .env exists)
- CORS origins accept a JSON list from env files and a comma list from code
"""

from pathlib import Path

import pytest

from src.platform.config.core_setting import Settings


pytestmark = pytest.mark.unit

ENV_EXAMPLE = Path(__file__).resolve().parents[3] / '.env.example'


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ('BACKEND_CORS_ORIGINS', 'SEAT_ROWS', 'SEAT_COLS', 'BOOKING_ID_PREFIX'):
        monkeypatch.delenv(name, raising=False)


class TestEnvExample:
    def test_env_example_loads(self) -> None:
        settings = Settings(_env_file=ENV_EXAMPLE)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://localhost:3000']
        assert settings.BOOKING_ID_PREFIX == 'B-'
        assert (settings.SEAT_ROWS, settings.SEAT_COLS) == (5, 8)


class TestCorsOrigins:
    def test_json_list_in_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / '.env'
        env_file.write_text('BACKEND_CORS_ORIGINS=["http://a.test", "http://b.test"]\n')

        settings = Settings(_env_file=env_file)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_comma_list_passed_directly(self) -> None:
        settings = Settings(BACKEND_CORS_ORIGINS='http://a.test, http://b.test')  # type: ignore[arg-type]

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']


class TestSeatGrid:
    def test_rejects_more_rows_than_letters(self) -> None:
        with pytest.raises(ValueError):
            Settings(SEAT_ROWS=27)
