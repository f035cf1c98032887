"""
Pricing Service

Billing for storage bookings: every started block of BILLING_DAYS_PER_MONTH
days is charged as a full month at the listing's monthly rate.
"""

import math
from datetime import date
from decimal import Decimal
from typing import NamedTuple, Optional, Union

from campus_storage.config import settings
from campus_storage.core.exceptions import InvalidRangeError, ValidationError


class PriceQuote(NamedTuple):
    days: int
    months: int
    total: Decimal


class PricingService:
    """Service for booking price calculations"""

    @staticmethod
    def billed_months(days: int, days_per_month: Optional[int] = None) -> int:
        """Round up to whole billing months; a partial month bills as a full one"""
        days_per_month = days_per_month or settings.BILLING_DAYS_PER_MONTH
        return math.ceil(days / days_per_month)

    @staticmethod
    def price(
        monthly_rate: Union[Decimal, int, float, str],
        start: date,
        end: date,
        days_per_month: Optional[int] = None
    ) -> PriceQuote:
        """Calculate (days, months, total) for the window [start, end)"""
        if start is None or end is None:
            raise ValidationError("Start and end dates are required")

        rate = Decimal(str(monthly_rate))
        if rate <= 0:
            raise ValidationError("Monthly rate must be positive")

        days = (end - start).days
        if days <= 0:
            raise InvalidRangeError()

        months = PricingService.billed_months(days, days_per_month)
        return PriceQuote(days=days, months=months, total=rate * months)
