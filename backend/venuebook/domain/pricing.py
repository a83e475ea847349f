from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..models import PricingMode
from ..utils.time import is_weekend
from .venue import VenueTerms

DEPOSIT_RATIO = Decimal("0.10")
_WHOLE_UNITS = Decimal("1")


@dataclass(frozen=True)
class RateQuote:
    applicable_rate: Decimal
    deposit_amount: Decimal


ZERO_QUOTE = RateQuote(applicable_rate=Decimal("0"), deposit_amount=Decimal("0"))


def applicable_rate(venue: VenueTerms, event_date: date) -> Decimal:
    if venue.rate_mode == PricingMode.SPLIT:
        rate = venue.rate_weekend if is_weekend(event_date) else venue.rate_weekday
    else:
        rate = venue.rate
    return Decimal(rate or 0)


def deposit_for(rate: Decimal) -> Decimal:
    """Deposit due to secure a reservation, rounded half-up to whole units."""
    if rate <= 0:
        return Decimal("0")
    return (rate * DEPOSIT_RATIO).quantize(_WHOLE_UNITS, rounding=ROUND_HALF_UP)


def quote(venue: VenueTerms, event_date: Optional[date]) -> RateQuote:
    if event_date is None:
        return ZERO_QUOTE
    rate = applicable_rate(venue, event_date)
    return RateQuote(applicable_rate=rate, deposit_amount=deposit_for(rate))
