"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Self
from uuid import UUID

CENT = Decimal("0.01")


@dataclass(frozen=True)
class EntityId:
    """Opaque identifier backed by a UUID."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


class EventId(EntityId):
    """Unique identifier for an Event."""


class WorkshopId(EntityId):
    """Unique identifier for a Workshop."""


class SocialEventId(EntityId):
    """Unique identifier for a SocialEvent."""


class TableId(EntityId):
    """Unique identifier for a dinner Table."""


class AddonId(EntityId):
    """Unique identifier for an Addon."""


class RegistrationId(EntityId):
    """Unique identifier for a Registration."""


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def rounded(self) -> Self:
        return type(self)(self.amount.quantize(CENT, rounding=ROUND_HALF_UP))

    def __mul__(self, factor) -> "Money":
        return Money(self.amount * Decimal(str(factor)))

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


class PackageType(str, Enum):
    """Top-level product a registrant buys."""

    FULL = "full"
    EVENING = "evening"
    CUSTOM = "custom"
    PREMIUM_4_NIGHTS = "premium-accommodation-4nights"
    PREMIUM_3_NIGHTS = "premium-accommodation-3nights"


class Role(str, Enum):
    """Who the registration is for."""

    LEADER = "leader"
    FOLLOWER = "follower"
    COUPLE = "couple"

    @property
    def is_couple(self) -> bool:
        return self is Role.COUPLE


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    STRIPE = "stripe"
    OFFLINE = "offline"


class ResourceKind(str, Enum):
    """Purchasable resources that have an occupancy or enrollment."""

    WORKSHOP = "workshop"
    SOCIAL = "social"
    TABLE = "table"
