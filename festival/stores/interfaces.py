"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from festival.domain import (
    Addon,
    AddonId,
    Event,
    EventId,
    PackageConfiguration,
    PackageType,
    PaymentStatus,
    PricingTier,
    Registration,
    RegistrationDraft,
    RegistrationId,
    SocialEvent,
    SocialEventId,
    Table,
    TableId,
    Workshop,
    WorkshopId,
)
from festival.domain.value_objects import Money


class FestivalStore(ABC):
    """Interface for festival persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager; writes inside it commit or roll back together."""
        ...

    # events

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events, newest year first."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def get_current_event(self) -> Event | None:
        """Return the event flagged current, or None."""
        ...

    @abstractmethod
    def set_current_event(self, event_id: EventId) -> Event:
        """Clear the current flag everywhere, then set it on ``event_id``."""
        ...

    # catalog

    @abstractmethod
    def get_workshops(self, event_id: EventId) -> list[Workshop]:
        ...

    @abstractmethod
    def get_workshop(self, workshop_id: WorkshopId) -> Workshop | None:
        ...

    @abstractmethod
    def get_social_events(self, event_id: EventId) -> list[SocialEvent]:
        ...

    @abstractmethod
    def get_social_event(self, social_event_id: SocialEventId) -> SocialEvent | None:
        ...

    @abstractmethod
    def get_tables(self, event_id: EventId) -> list[Table]:
        """Return active tables ordered by table number."""
        ...

    @abstractmethod
    def get_table(self, event_id: EventId, table_number: int) -> Table | None:
        """Return the active table with this number, or None."""
        ...

    @abstractmethod
    def get_addons(self, event_id: EventId) -> list[Addon]:
        ...

    @abstractmethod
    def get_addon(self, addon_id: AddonId) -> Addon | None:
        ...

    # inventory

    @abstractmethod
    def adjust_table_occupancy(self, table_id: TableId, delta: int) -> Table:
        """Serialize a read-modify-write of ``occupied_seats`` for one table.

        Seats are released onto the booked table even after it is deactivated;
        only booking requires an active table.

        Raises:
            ResourceNotFoundError: If the table does not exist, or is inactive
                and ``delta`` books seats.
            CapacityError: If seats would exceed the table's total.
            OccupancyUnderflowError: If seats would drop below zero.
        """
        ...

    # registrations

    @abstractmethod
    def add_registration(
        self,
        event_id: EventId,
        draft: RegistrationDraft,
        total_amount: Money,
        table_id: TableId | None = None,
    ) -> Registration:
        """Persist a new registration with a pending payment status.

        ``table_id`` records the table row booked for ``draft.table_number``.
        """
        ...

    @abstractmethod
    def get_registration(self, registration_id: RegistrationId) -> Registration | None:
        ...

    @abstractmethod
    def list_registrations(self, event_id: EventId | None = None) -> list[Registration]:
        """Return live registrations, oldest first."""
        ...

    @abstractmethod
    def delete_registration(self, registration_id: RegistrationId) -> None:
        ...

    @abstractmethod
    def update_payment(
        self,
        registration_id: RegistrationId,
        status: PaymentStatus | None = None,
        payment_intent_id: str | None = None,
    ) -> Registration:
        ...

    # promotions

    @abstractmethod
    def get_pricing_tiers(self, event_id: EventId) -> list[PricingTier]:
        ...

    @abstractmethod
    def get_package_configurations(self, event_id: EventId) -> list[PackageConfiguration]:
        """Return package configurations ordered by sort order."""
        ...

    @abstractmethod
    def get_package_configuration(
        self, event_id: EventId, package_type: PackageType
    ) -> PackageConfiguration | None:
        """Return the active configuration for this package type, or None."""
        ...
