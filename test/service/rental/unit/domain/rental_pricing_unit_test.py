from decimal import Decimal

import pytest

from src.service.rental.domain.value_object.rental_pricing import RentalPricing, to_cents


@pytest.mark.unit
class TestRentalPricing:
    @pytest.fixture
    def pricing(self) -> RentalPricing:
        return RentalPricing()

    def test_daily_rate_is_ten_percent_of_price_unrounded(self, pricing):
        assert pricing.daily_rate(price=Decimal('15.99')) == Decimal('1.599')

    def test_total_fee_rounds_half_up_to_cents(self, pricing):
        daily_rate = pricing.daily_rate(price=Decimal('15.99'))

        assert pricing.total_fee(daily_rate=daily_rate, rental_days=5) == Decimal('8.00')

    @pytest.mark.parametrize('rental_days', [1, 2, 7, 30, 365])
    def test_total_fee_matches_rounded_product(self, pricing, rental_days):
        daily_rate = pricing.daily_rate(price=Decimal('19.99'))

        total_fee = pricing.total_fee(daily_rate=daily_rate, rental_days=rental_days)

        assert total_fee == to_cents(daily_rate * rental_days)
        assert total_fee.as_tuple().exponent == -2

    def test_late_fee_is_fifteen_percent_per_day_late(self, pricing):
        assert pricing.late_fee(price=Decimal('15.99'), days_late=3) == Decimal('7.20')

    def test_half_cent_rounds_up(self):
        assert to_cents(Decimal('0.125')) == Decimal('0.13')
        assert to_cents(Decimal('2.005')) == Decimal('2.01')

    def test_ratios_are_configurable(self):
        pricing = RentalPricing(daily_rate_ratio=Decimal('0.20'), late_fee_ratio=Decimal('0.50'))

        assert pricing.daily_rate(price=Decimal('10.00')) == Decimal('2.00')
        assert pricing.late_fee(price=Decimal('10.00'), days_late=2) == Decimal('10.00')
