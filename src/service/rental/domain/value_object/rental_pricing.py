from decimal import ROUND_HALF_UP, Decimal

import attrs

from src.platform.config.business_config import MoneyFormat, RentalPricingDefaults


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(MoneyFormat.CENTS, rounding=ROUND_HALF_UP)


@attrs.define(frozen=True)
class RentalPricing:
    """
    Fee policy applied to a book's list price.

    daily_rate = price * daily_rate_ratio (kept unrounded, frozen on the reservation)
    total_fee  = cents(daily_rate * rental_days)
    late_fee   = cents(price * late_fee_ratio * days_late)
    """

    daily_rate_ratio: Decimal = RentalPricingDefaults.DAILY_RATE_RATIO
    late_fee_ratio: Decimal = RentalPricingDefaults.LATE_FEE_RATIO

    def daily_rate(self, *, price: Decimal) -> Decimal:
        return price * self.daily_rate_ratio

    def total_fee(self, *, daily_rate: Decimal, rental_days: int) -> Decimal:
        return to_cents(daily_rate * rental_days)

    def late_fee(self, *, price: Decimal, days_late: int) -> Decimal:
        return to_cents(price * self.late_fee_ratio * days_late)
