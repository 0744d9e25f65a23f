from decimal import Decimal

from pydantic import ValidationError
import pytest

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container


@pytest.mark.unit
class TestSettings:
    def test_default_pricing_ratios(self):
        settings = Settings()

        assert settings.DAILY_RATE_RATIO == Decimal('0.10')
        assert settings.LATE_FEE_RATIO == Decimal('0.15')

    def test_pricing_ratios_from_environment(self, monkeypatch):
        monkeypatch.setenv('DAILY_RATE_RATIO', '0.2')

        assert Settings().DAILY_RATE_RATIO == Decimal('0.2')

    def test_negative_ratio_rejected(self, monkeypatch):
        monkeypatch.setenv('LATE_FEE_RATIO', '-0.1')

        with pytest.raises(ValidationError):
            Settings()

    def test_database_url_built_from_postgres_fields(self, monkeypatch):
        monkeypatch.delenv('DATABASE_URL_OVERRIDE', raising=False)
        monkeypatch.setenv('POSTGRES_SERVER', 'db')
        monkeypatch.setenv('POSTGRES_USER', 'lib')
        monkeypatch.setenv('POSTGRES_PASSWORD', 'pw')
        monkeypatch.setenv('POSTGRES_DB', 'rentals')
        monkeypatch.setenv('POSTGRES_PORT', '6543')

        assert Settings().DATABASE_URL_ASYNC == 'postgresql+asyncpg://lib:pw@db:6543/rentals'

    def test_database_url_override_wins(self, monkeypatch):
        monkeypatch.setenv('DATABASE_URL_OVERRIDE', 'postgresql+asyncpg://u:p@h/x')

        assert Settings().DATABASE_URL_ASYNC == 'postgresql+asyncpg://u:p@h/x'

    def test_cors_origins_comma_separated(self):
        settings = Settings(BACKEND_CORS_ORIGINS='http://a.com, http://b.com')  # type: ignore[arg-type]

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.com', 'http://b.com']

    def test_container_pricing_follows_settings(self):
        container = Container()

        pricing = container.rental_pricing()

        assert pricing.daily_rate_ratio == container.config_service().DAILY_RATE_RATIO
        assert pricing.late_fee_ratio == container.config_service().LATE_FEE_RATIO

    def test_ratio_with_three_places_kept_exact(self, monkeypatch):
        monkeypatch.setenv('DAILY_RATE_RATIO', '0.125')

        assert Settings().DAILY_RATE_RATIO == Decimal('0.125')

    def test_ratio_beyond_six_places_rejected(self, monkeypatch):
        monkeypatch.setenv('DAILY_RATE_RATIO', '0.1234567')

        with pytest.raises(ValidationError, match='at most 6 decimal places'):
            Settings()
