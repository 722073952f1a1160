from festival.domain.models import (
    Addon,
    AddonSelection,
    AttendeeInfo,
    Event,
    PackageConfiguration,
    PricingTier,
    Registration,
    RegistrationDraft,
    SocialEvent,
    Table,
    Workshop,
)
from festival.domain.value_objects import (
    AddonId,
    Capacity,
    EventId,
    Money,
    PackageType,
    PaymentMethod,
    PaymentStatus,
    RegistrationId,
    ResourceKind,
    Role,
    SocialEventId,
    TableId,
    WorkshopId,
)

__all__ = [
    "Addon",
    "AddonSelection",
    "AttendeeInfo",
    "Event",
    "PackageConfiguration",
    "PricingTier",
    "Registration",
    "RegistrationDraft",
    "SocialEvent",
    "Table",
    "Workshop",
    "AddonId",
    "EventId",
    "RegistrationId",
    "SocialEventId",
    "TableId",
    "WorkshopId",
    "Money",
    "Capacity",
    "PackageType",
    "PaymentMethod",
    "PaymentStatus",
    "ResourceKind",
    "Role",
]
