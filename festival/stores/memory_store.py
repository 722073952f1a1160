"""In-process implementation of the FestivalStore.

All reads and writes go through one re-entrant lock, so every table's
occupancy read-modify-write is serialized. ``atomic()`` snapshots state and
restores it when the block raises.
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import replace

from django.utils import timezone

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
from festival.domain.errors import EventNotFoundError, RegistrationNotFoundError, ResourceNotFoundError
from festival.domain.value_objects import Money
from festival.stores.interfaces import FestivalStore

logger = logging.getLogger(__name__)

_COLLECTIONS = (
    "events",
    "workshops",
    "social_events",
    "tables",
    "addons",
    "registrations",
    "pricing_tiers",
    "package_configurations",
)


class MemoryFestivalStore(FestivalStore):
    """Dictionary-backed store."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.events: dict[EventId, Event] = {}
        self.workshops: dict[WorkshopId, Workshop] = {}
        self.social_events: dict[SocialEventId, SocialEvent] = {}
        self.tables: dict[TableId, Table] = {}
        self.addons: dict[AddonId, Addon] = {}
        self.registrations: dict[RegistrationId, Registration] = {}
        self.pricing_tiers: dict[str, PricingTier] = {}
        self.package_configurations: dict[str, PackageConfiguration] = {}

    # seeding

    def put(self, record):
        """Insert or replace a domain record."""
        with self._lock:
            if isinstance(record, Event):
                if record.is_current:
                    for key, event in list(self.events.items()):
                        if event.is_current and key != record.id:
                            self.events[key] = replace(event, is_current=False)
                self.events[record.id] = record
            elif isinstance(record, Workshop):
                self.workshops[record.id] = record
            elif isinstance(record, SocialEvent):
                self.social_events[record.id] = record
            elif isinstance(record, Table):
                self.tables[record.id] = record
            elif isinstance(record, Addon):
                self.addons[record.id] = record
            elif isinstance(record, Registration):
                self.registrations[record.id] = record
            elif isinstance(record, PricingTier):
                self.pricing_tiers[record.id] = record
            elif isinstance(record, PackageConfiguration):
                self.package_configurations[record.id] = record
            else:
                raise TypeError(f"Unsupported record type: {type(record).__name__}")
        return record

    @contextmanager
    def atomic(self):
        with self._lock:
            snapshot = {name: dict(getattr(self, name)) for name in _COLLECTIONS}
            try:
                yield
            except BaseException:
                for name, saved in snapshot.items():
                    setattr(self, name, saved)
                raise

    # events

    def list_events(self) -> list[Event]:
        with self._lock:
            return sorted(self.events.values(), key=lambda event: event.year, reverse=True)

    def get_event(self, event_id: EventId) -> Event | None:
        return self.events.get(event_id)

    def get_current_event(self) -> Event | None:
        with self._lock:
            return next((event for event in self.events.values() if event.is_current), None)

    def set_current_event(self, event_id: EventId) -> Event:
        with self.atomic():
            if event_id not in self.events:
                raise EventNotFoundError()
            for key, event in list(self.events.items()):
                if event.is_current:
                    self.events[key] = replace(event, is_current=False)
            self.events[event_id] = replace(self.events[event_id], is_current=True)
            return self.events[event_id]

    # catalog

    def get_workshops(self, event_id: EventId) -> list[Workshop]:
        with self._lock:
            workshops = [w for w in self.workshops.values() if w.event_id == event_id]
        return sorted(workshops, key=lambda w: w.slot)

    def get_workshop(self, workshop_id: WorkshopId) -> Workshop | None:
        return self.workshops.get(workshop_id)

    def get_social_events(self, event_id: EventId) -> list[SocialEvent]:
        with self._lock:
            return [s for s in self.social_events.values() if s.event_id == event_id]

    def get_social_event(self, social_event_id: SocialEventId) -> SocialEvent | None:
        return self.social_events.get(social_event_id)

    def get_tables(self, event_id: EventId) -> list[Table]:
        with self._lock:
            tables = [
                t for t in self.tables.values() if t.event_id == event_id and t.is_active
            ]
        return sorted(tables, key=lambda t: t.table_number)

    def get_table(self, event_id: EventId, table_number: int) -> Table | None:
        with self._lock:
            for table in self.tables.values():
                if (
                    table.event_id == event_id
                    and table.table_number == table_number
                    and table.is_active
                ):
                    return table
        return None

    def get_addons(self, event_id: EventId) -> list[Addon]:
        with self._lock:
            return [a for a in self.addons.values() if a.event_id == event_id]

    def get_addon(self, addon_id: AddonId) -> Addon | None:
        return self.addons.get(addon_id)

    # inventory

    def adjust_table_occupancy(self, table_id: TableId, delta: int) -> Table:
        with self._lock:
            table = self.tables.get(table_id)
            if table is None or (delta > 0 and not table.is_active):
                raise ResourceNotFoundError("table", table_id)
            updated = table.with_occupancy_delta(delta)
            self.tables[table.id] = updated
        logger.info(
            "Table occupancy adjusted",
            extra={"event_id": str(updated.event_id), "table_number": updated.table_number},
        )
        return updated

    # registrations

    def add_registration(
        self,
        event_id: EventId,
        draft: RegistrationDraft,
        total_amount: Money,
        table_id: TableId | None = None,
    ) -> Registration:
        registration = Registration(
            id=RegistrationId(uuid.uuid4()),
            event_id=event_id,
            package_type=draft.package_type,
            role=draft.role,
            total_amount=total_amount,
            created_at=timezone.now(),
            leader_info=draft.leader_info,
            follower_info=draft.follower_info,
            workshop_ids=tuple(draft.workshop_ids),
            social_event_ids=tuple(draft.social_event_ids),
            table_number=draft.table_number,
            addons=tuple(draft.addons),
            payment_method=draft.payment_method,
            payment_status=PaymentStatus.PENDING,
            table_id=table_id,
        )
        with self._lock:
            self.registrations[registration.id] = registration
        return registration

    def get_registration(self, registration_id: RegistrationId) -> Registration | None:
        return self.registrations.get(registration_id)

    def list_registrations(self, event_id: EventId | None = None) -> list[Registration]:
        with self._lock:
            registrations = list(self.registrations.values())
        if event_id is not None:
            registrations = [r for r in registrations if r.event_id == event_id]
        return sorted(registrations, key=lambda r: r.created_at)

    def delete_registration(self, registration_id: RegistrationId) -> None:
        with self._lock:
            self.registrations.pop(registration_id, None)

    def update_payment(
        self,
        registration_id: RegistrationId,
        status: PaymentStatus | None = None,
        payment_intent_id: str | None = None,
    ) -> Registration:
        with self._lock:
            registration = self.registrations.get(registration_id)
            if registration is None:
                raise RegistrationNotFoundError()
            changes = {}
            if status is not None:
                changes["payment_status"] = PaymentStatus(status)
            if payment_intent_id is not None:
                changes["payment_intent_id"] = payment_intent_id
            registration = replace(registration, **changes)
            self.registrations[registration_id] = registration
            return registration

    # promotions

    def get_pricing_tiers(self, event_id: EventId) -> list[PricingTier]:
        with self._lock:
            return [t for t in self.pricing_tiers.values() if t.event_id == event_id]

    def get_package_configurations(self, event_id: EventId) -> list[PackageConfiguration]:
        with self._lock:
            configs = [
                c for c in self.package_configurations.values() if c.event_id == event_id
            ]
        return sorted(configs, key=lambda c: c.sort_order)

    def get_package_configuration(
        self, event_id: EventId, package_type: PackageType
    ) -> PackageConfiguration | None:
        for config in self.get_package_configurations(event_id):
            if config.package_type == PackageType(package_type) and config.is_active:
                return config
        return None
