"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in festival/models.py (persistence layer).
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal

from festival.domain.errors import CapacityError, OccupancyUnderflowError
from festival.domain.pricing import AccommodationPricing, PriceSchedule
from festival.domain.value_objects import (
    AddonId,
    Capacity,
    EventId,
    Money,
    PackageType,
    PaymentMethod,
    PaymentStatus,
    RegistrationId,
    Role,
    SocialEventId,
    TableId,
    WorkshopId,
)


@dataclass(frozen=True)
class Event:
    """Domain representation of a festival edition and its embedded pricing."""

    id: EventId
    name: str
    year: int
    venue: str
    starts_at: datetime
    ends_at: datetime
    registration_opens_at: datetime
    registration_closes_at: datetime
    is_active: bool = True
    is_current: bool = False
    description: str = ""
    workshop_pricing: PriceSchedule = field(default_factory=PriceSchedule)
    package_pricing: dict[PackageType, PriceSchedule] = field(default_factory=dict)
    accommodation_pricing: dict[PackageType, AccommodationPricing] = field(default_factory=dict)

    def package_schedule(self, package_type: PackageType) -> PriceSchedule:
        return self.package_pricing.get(package_type, PriceSchedule())

    def accommodation(self, package_type: PackageType) -> AccommodationPricing:
        return self.accommodation_pricing.get(package_type, AccommodationPricing())


@dataclass(frozen=True)
class Workshop:
    """Domain representation of a Workshop."""

    id: WorkshopId
    event_id: EventId
    title: str
    instructor: str
    level: str
    date: date
    time: str
    pricing: PriceSchedule
    capacity: Capacity
    leader_capacity: Capacity
    follower_capacity: Capacity
    description: str = ""

    @property
    def slot(self) -> tuple[date, str]:
        return (self.date, self.time)


@dataclass(frozen=True)
class SocialEvent:
    """Domain representation of a social dance (milonga)."""

    id: SocialEventId
    event_id: EventId
    name: str
    kind: str
    date: date
    time: str
    venue: str
    pricing: PriceSchedule
    capacity: Capacity
    description: str = ""


@dataclass(frozen=True)
class Table:
    """Domain representation of a dinner Table.

    ``occupied_seats`` is the one stored counter in the system.
    """

    id: TableId
    event_id: EventId
    table_number: int
    total_seats: Capacity
    occupied_seats: int
    pricing: PriceSchedule
    is_vip: bool = False
    is_active: bool = True

    @property
    def available_seats(self) -> int:
        return self.total_seats.value - self.occupied_seats

    def with_occupancy_delta(self, delta: int) -> "Table":
        desired = self.occupied_seats + delta
        if delta > 0 and desired > self.total_seats.value:
            raise CapacityError(
                f"Table {self.table_number} does not have enough available seats."
            )
        if desired < 0:
            raise OccupancyUnderflowError(self.table_number)
        return replace(self, occupied_seats=desired)


@dataclass(frozen=True)
class Addon:
    """Domain representation of an Addon."""

    id: AddonId
    event_id: EventId
    name: str
    price: Money
    category: str
    description: str = ""
    options: dict = field(default_factory=dict)


@dataclass(frozen=True)
class AttendeeInfo:
    first_name: str
    last_name: str
    email: str
    phone: str
    country: str
    level: str


@dataclass(frozen=True)
class AddonSelection:
    addon_id: AddonId
    quantity: int
    options: dict = field(default_factory=dict)


@dataclass(frozen=True)
class RegistrationDraft:
    """What a registrant has selected, before pricing and persistence."""

    package_type: PackageType
    role: Role
    event_id: EventId | None = None
    leader_info: AttendeeInfo | None = None
    follower_info: AttendeeInfo | None = None
    workshop_ids: tuple[WorkshopId, ...] = ()
    social_event_ids: tuple[SocialEventId, ...] = ()
    table_number: int | None = None
    addons: tuple[AddonSelection, ...] = ()
    payment_method: PaymentMethod | None = None


@dataclass(frozen=True)
class Registration:
    """Domain representation of a committed Registration."""

    id: RegistrationId
    event_id: EventId
    package_type: PackageType
    role: Role
    total_amount: Money
    created_at: datetime
    leader_info: AttendeeInfo | None = None
    follower_info: AttendeeInfo | None = None
    workshop_ids: tuple[WorkshopId, ...] = ()
    social_event_ids: tuple[SocialEventId, ...] = ()
    table_number: int | None = None
    addons: tuple[AddonSelection, ...] = ()
    payment_method: PaymentMethod | None = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_intent_id: str | None = None
    table_id: TableId | None = None


@dataclass(frozen=True)
class PricingTier:
    """Event-wide, date-bounded promotion."""

    id: str
    event_id: EventId
    name: str
    starts_at: datetime
    ends_at: datetime
    discount_percentage: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    priority: int = 0
    is_active: bool = True
    description: str = ""


@dataclass(frozen=True)
class PackageConfiguration:
    """Generalized package pricing used by the quote path."""

    id: str
    event_id: EventId
    package_type: PackageType
    name: str
    base_price: Decimal
    couple_multiplier: Decimal = Decimal("2.00")
    included_workshops: int = 0
    includes_socials: bool = False
    includes_gala_dinner: bool = False
    workshop_overage_price: Decimal = Decimal("0")
    custom_workshop_pricing: dict[int, Decimal] = field(default_factory=dict)
    is_active: bool = True
    sort_order: int = 0
    description: str = ""
