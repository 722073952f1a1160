"""Unit tests for tiered price resolution.

Run with: pytest tests/test_pricing.py -v
"""

from datetime import timedelta
from decimal import Decimal

from factories import NOW, build_event, build_workshop

from festival.domain.pricing import (
    AccommodationPricing,
    PriceSchedule,
    resolve_price,
    workshop_unit_price,
)

ONE_SECOND = timedelta(seconds=1)


def all_tiers_active() -> PriceSchedule:
    return PriceSchedule(
        standard=Decimal("1500"),
        early_bird=Decimal("1200"),
        early_bird_ends_at=NOW + timedelta(days=7),
        flash=Decimal("999"),
        flash_starts_at=NOW - timedelta(days=1),
        flash_ends_at=NOW + timedelta(days=1),
    )


class TestTierPrecedence:
    """Flash beats early bird beats standard."""

    def test_flash_wins_when_all_tiers_active(self):
        assert all_tiers_active().resolve(NOW) == Decimal("999")

    def test_early_bird_wins_outside_flash_window(self):
        later = NOW + timedelta(days=3)
        assert all_tiers_active().resolve(later) == Decimal("1200")

    def test_standard_after_every_window(self):
        later = NOW + timedelta(days=30)
        assert all_tiers_active().resolve(later) == Decimal("1500")

    def test_zero_flash_price_is_skipped(self):
        """A non-positive flash price never wins even inside its window."""
        schedule = PriceSchedule(
            standard=Decimal("1500"),
            early_bird=Decimal("1200"),
            early_bird_ends_at=NOW + timedelta(days=7),
            flash=Decimal("0"),
            flash_starts_at=NOW - timedelta(days=1),
            flash_ends_at=NOW + timedelta(days=1),
        )
        assert schedule.resolve(NOW) == Decimal("1200")

    def test_early_bird_without_end_date_is_skipped(self):
        schedule = PriceSchedule(standard=Decimal("1500"), early_bird=Decimal("1200"))
        assert schedule.resolve(NOW) == Decimal("1500")

    def test_unconfigured_schedule_resolves_to_zero(self):
        """Missing prices resolve to zero instead of failing."""
        assert PriceSchedule().resolve(NOW) == Decimal("0")

    def test_resolve_price_of_none_is_zero(self):
        assert resolve_price(None, NOW) == Decimal("0")


class TestWindowBoundaries:
    """Window ends are inclusive."""

    def test_early_bird_one_second_before_end(self):
        schedule = PriceSchedule(Decimal("1500"), Decimal("1200"), NOW)
        assert schedule.resolve(NOW - ONE_SECOND) == Decimal("1200")

    def test_early_bird_at_exact_end(self):
        schedule = PriceSchedule(Decimal("1500"), Decimal("1200"), NOW)
        assert schedule.resolve(NOW) == Decimal("1200")

    def test_early_bird_one_second_after_end(self):
        schedule = PriceSchedule(Decimal("1500"), Decimal("1200"), NOW)
        assert schedule.resolve(NOW + ONE_SECOND) == Decimal("1500")

    def test_flash_at_exact_start_and_end(self):
        schedule = PriceSchedule(
            standard=Decimal("1500"),
            flash=Decimal("999"),
            flash_starts_at=NOW,
            flash_ends_at=NOW + timedelta(hours=1),
        )
        assert schedule.resolve(NOW - ONE_SECOND) == Decimal("1500")
        assert schedule.resolve(NOW) == Decimal("999")
        assert schedule.resolve(NOW + timedelta(hours=1)) == Decimal("999")
        assert schedule.resolve(NOW + timedelta(hours=1) + ONE_SECOND) == Decimal("1500")


class TestAccommodationPricing:
    """Accommodation packages price by occupancy, without a flash step."""

    pricing = AccommodationPricing(
        single=Decimal("3000"),
        double=Decimal("5000"),
        early_bird_single=Decimal("2700"),
        early_bird_double=Decimal("4500"),
        early_bird_ends_at=NOW + timedelta(days=7),
    )

    def test_solo_uses_single_column(self):
        assert self.pricing.resolve(NOW, couple=False) == Decimal("2700")

    def test_couple_uses_double_column(self):
        assert self.pricing.resolve(NOW, couple=True) == Decimal("4500")

    def test_standard_after_early_bird(self):
        later = NOW + timedelta(days=8)
        assert self.pricing.resolve(later, couple=True) == Decimal("5000")


class TestWorkshopUnitPrice:
    """Event-wide workshop pricing overrides the workshop's own listing."""

    def test_falls_back_to_workshop_schedule(self):
        event = build_event()
        workshop = build_workshop(event, pricing=PriceSchedule(standard=Decimal("180")))
        assert workshop_unit_price(workshop, event, NOW) == Decimal("180")

    def test_event_standard_overrides_workshop(self):
        event = build_event(workshop_pricing=PriceSchedule(standard=Decimal("150")))
        workshop = build_workshop(event)
        assert workshop_unit_price(workshop, event, NOW) == Decimal("150")

    def test_event_early_bird_wins_while_active(self):
        event = build_event(
            workshop_pricing=PriceSchedule(
                standard=Decimal("150"),
                early_bird=Decimal("120"),
                early_bird_ends_at=NOW + timedelta(days=1),
            )
        )
        workshop = build_workshop(event)
        assert workshop_unit_price(workshop, event, NOW) == Decimal("120")
        assert workshop_unit_price(workshop, event, NOW + timedelta(days=2)) == Decimal("150")

    def test_without_event(self):
        workshop = build_workshop(build_event())
        assert workshop_unit_price(workshop, None, NOW) == Decimal("180")
