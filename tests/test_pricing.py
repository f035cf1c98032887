# ================================
# PRICING TESTS (test_pricing.py)
# ================================

from datetime import date, timedelta
from decimal import Decimal

import pytest

from campus_storage.core.exceptions import InvalidRangeError, ValidationError
from campus_storage.services.pricing_service import PricingService

DAY_0 = date(2025, 9, 1)


class TestPrice:

    @pytest.mark.parametrize("days,months,total", [
        (45, 2, Decimal("200")),
        (30, 1, Decimal("100")),
        (1, 1, Decimal("100")),
        (31, 2, Decimal("200")),
        (60, 2, Decimal("200")),
        (61, 3, Decimal("300")),
    ])
    def test_partial_months_bill_as_full(self, days, months, total):
        quote = PricingService.price(100, DAY_0, DAY_0 + timedelta(days=days))
        assert quote == (days, months, total)

    def test_rate_precision_is_kept(self):
        quote = PricingService.price(Decimal("49.99"), DAY_0, DAY_0 + timedelta(days=45))
        assert quote.total == Decimal("99.98")

    @pytest.mark.parametrize("offset", [0, -1, -30])
    def test_end_not_after_start_is_invalid_range(self, offset):
        with pytest.raises(InvalidRangeError):
            PricingService.price(100, DAY_0, DAY_0 + timedelta(days=offset))

    def test_invalid_range_is_a_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            PricingService.price(100, DAY_0, DAY_0)
        assert exc_info.value.status_code == 422
        assert exc_info.value.error_code == "INVALID_RANGE"

    @pytest.mark.parametrize("rate", [0, -10, "0.00"])
    def test_non_positive_rate_rejected(self, rate):
        with pytest.raises(ValidationError):
            PricingService.price(rate, DAY_0, DAY_0 + timedelta(days=10))

    def test_missing_dates_rejected(self):
        with pytest.raises(ValidationError):
            PricingService.price(100, None, DAY_0)

    def test_billing_month_length_is_configurable(self):
        assert PricingService.billed_months(45, days_per_month=15) == 3
        assert PricingService.billed_months(45) == 2
