"""Tiered price resolution.

Every purchasable item carries a small price schedule: a standard price,
an optional early-bird price valid until an end date, and (for the bundled
full/evening packages only) a flash deal bounded by a start and end date.

Resolution precedence is flash deal, then early bird, then standard. A tier
wins only when its price is positive and its window contains ``now``; both
window ends are inclusive. Anything missing or malformed resolves to zero
rather than raising, so a partially configured event still prices.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

ZERO = Decimal("0")


def positive(price: Decimal | None) -> bool:
    return price is not None and price > 0


def within(start: datetime | None, end: datetime | None, now: datetime) -> bool:
    if start is None or end is None:
        return False
    return start <= now <= end


def not_after(end: datetime | None, now: datetime) -> bool:
    if end is None:
        return False
    return now <= end


@dataclass(frozen=True)
class PriceSchedule:
    """Standard / early-bird / flash pricing for a single item."""

    standard: Decimal | None = None
    early_bird: Decimal | None = None
    early_bird_ends_at: datetime | None = None
    flash: Decimal | None = None
    flash_starts_at: datetime | None = None
    flash_ends_at: datetime | None = None

    def flash_active(self, now: datetime) -> bool:
        return positive(self.flash) and within(self.flash_starts_at, self.flash_ends_at, now)

    def early_bird_active(self, now: datetime) -> bool:
        return positive(self.early_bird) and not_after(self.early_bird_ends_at, now)

    def resolve(self, now: datetime) -> Decimal:
        if self.flash_active(now):
            return self.flash
        if self.early_bird_active(now):
            return self.early_bird
        if positive(self.standard):
            return self.standard
        return ZERO


@dataclass(frozen=True)
class AccommodationPricing:
    """Multi-night accommodation package pricing.

    Prices already account for occupancy: a couple pays the ``double``
    column, a solo attendee the ``single`` one. There is no flash step.
    """

    single: Decimal | None = None
    double: Decimal | None = None
    early_bird_single: Decimal | None = None
    early_bird_double: Decimal | None = None
    early_bird_ends_at: datetime | None = None

    def resolve(self, now: datetime, couple: bool) -> Decimal:
        if couple:
            schedule = PriceSchedule(self.double, self.early_bird_double, self.early_bird_ends_at)
        else:
            schedule = PriceSchedule(self.single, self.early_bird_single, self.early_bird_ends_at)
        return schedule.resolve(now)


def resolve_price(item, now: datetime) -> Decimal:
    """Return the applicable unit price for a schedule or a priced item.

    ``item`` is either a :class:`PriceSchedule` or anything exposing one as
    ``.pricing`` (workshops, social events, tables). ``None`` prices at zero.
    """
    if item is None:
        return ZERO
    schedule = item if isinstance(item, PriceSchedule) else getattr(item, "pricing", None)
    if schedule is None:
        return ZERO
    return schedule.resolve(now)


def workshop_unit_price(workshop, event, now: datetime) -> Decimal:
    """Price of one workshop seat.

    Event-wide workshop pricing takes precedence over the workshop's own
    listing: an active event early bird first, then a configured event
    standard price, and only then the workshop's own schedule.
    """
    if event is not None:
        event_pricing = event.workshop_pricing
        if event_pricing.early_bird_active(now):
            return event_pricing.early_bird
        if positive(event_pricing.standard):
            return event_pricing.standard
    return resolve_price(workshop, now)
