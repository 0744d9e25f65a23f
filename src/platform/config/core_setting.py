from decimal import Decimal
from pathlib import Path
from typing import List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.platform.config.business_config import RentalPricingDefaults


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Library Rental Service'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Database
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'library'
    POSTGRES_PASSWORD: SecretStr = SecretStr('library')
    POSTGRES_DB: str = 'library_rental_db'
    POSTGRES_PORT: int = 5432
    DATABASE_URL_OVERRIDE: str = ''  # full async URL, wins over POSTGRES_*

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    # Database pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Rental pricing policy (ratios of the book list price)
    DAILY_RATE_RATIO: Decimal = RentalPricingDefaults.DAILY_RATE_RATIO
    LATE_FEE_RATIO: Decimal = RentalPricingDefaults.LATE_FEE_RATIO

    @field_validator('DAILY_RATE_RATIO', 'LATE_FEE_RATIO')
    @classmethod
    def validate_ratio(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError('pricing ratios must not be negative')
        places = RentalPricingDefaults.MAX_RATIO_DECIMAL_PLACES
        exponent = v.as_tuple().exponent
        if isinstance(exponent, int) and -exponent > places:
            raise ValueError(f'pricing ratios allow at most {places} decimal places')
        return v


settings = Settings()  # type: ignore
