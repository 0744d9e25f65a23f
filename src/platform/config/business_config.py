"""Business logic configuration and constants."""

from decimal import Decimal
from typing import Final


class RentalLimits:
    """Rental-related business limits."""

    MIN_RENTAL_DAYS: Final[int] = 1
    MAX_RENTAL_DAYS: Final[int] = 365


class RentalPricingDefaults:
    """Default pricing ratios, applied to the book list price."""

    DAILY_RATE_RATIO: Final[Decimal] = Decimal('0.10')
    LATE_FEE_RATIO: Final[Decimal] = Decimal('0.15')

    # Book prices carry 2 places, reservation.daily_rate stores 8
    MAX_RATIO_DECIMAL_PLACES: Final[int] = 6


class MoneyFormat:
    """Constants for monetary rounding."""

    CENTS: Final[Decimal] = Decimal('0.01')
