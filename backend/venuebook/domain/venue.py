from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..models import PricingMode, Venue
from ..utils.time import to_minutes

DEFAULT_OPEN_TIME = "00:00"
DEFAULT_CLOSE_TIME = "23:59"


@dataclass(frozen=True)
class VenueTerms:
    """The slice of a venue the scheduler reads: hours, rates and capacity."""

    venue_id: int
    name: str = ""
    open_time: str = DEFAULT_OPEN_TIME
    close_time: str = DEFAULT_CLOSE_TIME
    rate_mode: PricingMode = PricingMode.SINGLE
    rate: Optional[Decimal] = None
    rate_weekday: Optional[Decimal] = None
    rate_weekend: Optional[Decimal] = None
    capacity_max: Optional[int] = None

    @classmethod
    def from_model(cls, venue: Venue) -> "VenueTerms":
        """Raises MalformedTimeError if the stored hours are not HH:MM."""
        open_time = venue.open_time or DEFAULT_OPEN_TIME
        close_time = venue.close_time or DEFAULT_CLOSE_TIME
        to_minutes(open_time)
        to_minutes(close_time)
        return cls(
            venue_id=venue.id,
            name=venue.name,
            open_time=open_time,
            close_time=close_time,
            rate_mode=venue.rate_mode or PricingMode.SINGLE,
            rate=venue.rate,
            rate_weekday=venue.rate_weekday,
            rate_weekend=venue.rate_weekend,
            # Zero or negative capacity means "no cap".
            capacity_max=venue.capacity_max if venue.capacity_max and venue.capacity_max > 0 else None,
        )
