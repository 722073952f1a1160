"""Domain record builders shared by the test modules."""

import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from festival.domain import (
    Addon,
    AddonId,
    Capacity,
    Event,
    EventId,
    Money,
    PackageType,
    SocialEvent,
    SocialEventId,
    Table,
    TableId,
    Workshop,
    WorkshopId,
)
from festival.domain.pricing import PriceSchedule

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def build_event(**overrides) -> Event:
    defaults = dict(
        id=EventId(uuid.uuid4()),
        name="Desert Tango Festival 2026",
        year=2026,
        venue="Dubai",
        starts_at=NOW + timedelta(days=60),
        ends_at=NOW + timedelta(days=64),
        registration_opens_at=NOW - timedelta(days=30),
        registration_closes_at=NOW + timedelta(days=55),
        is_current=True,
        package_pricing={
            PackageType.FULL: PriceSchedule(
                standard=Decimal("1500"),
                early_bird=Decimal("1200"),
                early_bird_ends_at=NOW + timedelta(weeks=1),
            ),
            PackageType.EVENING: PriceSchedule(standard=Decimal("600")),
        },
    )
    defaults.update(overrides)
    return Event(**defaults)


def build_workshop(event: Event, **overrides) -> Workshop:
    defaults = dict(
        id=WorkshopId(uuid.uuid4()),
        event_id=event.id,
        title="Colgadas",
        instructor="Maestro",
        level="advanced",
        date=date(2026, 5, 1),
        time="10:00",
        pricing=PriceSchedule(standard=Decimal("180")),
        capacity=Capacity(40),
        leader_capacity=Capacity(20),
        follower_capacity=Capacity(20),
    )
    defaults.update(overrides)
    return Workshop(**defaults)


def build_workshops(event: Event, count: int, price: Decimal = Decimal("180")) -> list[Workshop]:
    """``count`` workshops in distinct hourly slots."""
    return [
        build_workshop(
            event,
            title=f"Workshop {index + 1}",
            date=date(2026, 5, 1 + index // 8),
            time=f"{10 + index % 8:02d}:00",
            pricing=PriceSchedule(standard=price),
        )
        for index in range(count)
    ]


def build_social_event(event: Event, **overrides) -> SocialEvent:
    defaults = dict(
        id=SocialEventId(uuid.uuid4()),
        event_id=event.id,
        name="Opening Milonga",
        kind="regular",
        date=date(2026, 5, 1),
        time="22:00",
        venue="Ballroom",
        pricing=PriceSchedule(standard=Decimal("90")),
        capacity=Capacity(200),
    )
    defaults.update(overrides)
    return SocialEvent(**defaults)


def build_table(event: Event, **overrides) -> Table:
    defaults = dict(
        id=TableId(uuid.uuid4()),
        event_id=event.id,
        table_number=1,
        total_seats=Capacity(6),
        occupied_seats=0,
        pricing=PriceSchedule(standard=Decimal("250")),
    )
    defaults.update(overrides)
    return Table(**defaults)


def build_addon(event: Event, **overrides) -> Addon:
    defaults = dict(
        id=AddonId(uuid.uuid4()),
        event_id=event.id,
        name="Festival T-shirt",
        price=Money(Decimal("75")),
        category="merch",
    )
    defaults.update(overrides)
    return Addon(**defaults)
