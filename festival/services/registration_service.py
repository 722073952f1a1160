"""Registration service - the registration transaction.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Creating a registration persists it and books its table seats in one
atomic unit: a capacity failure on the table leaves no registration behind.
Deleting releases the seats on the table row that was booked, in the same
unit as the delete, even if that table has since been deactivated. Workshop
and social enrollment needs no bookkeeping since it is derived on read.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from festival import conf
from festival.domain import (
    Event,
    EventId,
    PaymentStatus,
    Registration,
    RegistrationDraft,
    RegistrationId,
    ResourceKind,
    Role,
)
from festival.domain.errors import (
    CapacityError,
    ConfigurationError,
    EventNotFoundError,
    InvalidIdError,
    RegistrationNotFoundError,
    ScheduleConflictError,
    ValidationError,
)
from festival.domain.ledger import compute_enrollment, seats_needed
from festival.domain.totals import CatalogSnapshot, compute_total
from festival.services.pricing_service import load_catalog
from festival.stores.interfaces import FestivalStore

logger = logging.getLogger(__name__)


def validate_contact_info(draft: RegistrationDraft) -> None:
    role = Role(draft.role)
    if role in (Role.LEADER, Role.COUPLE) and draft.leader_info is None:
        raise ValidationError("Leader information is required")
    if role in (Role.FOLLOWER, Role.COUPLE) and draft.follower_info is None:
        raise ValidationError("Follower information is required")
    for selection in draft.addons:
        if selection.quantity < 1:
            raise ValidationError("Add-on quantity must be at least 1")


def check_schedule_conflicts(draft: RegistrationDraft, catalog: CatalogSnapshot) -> None:
    """Reject two selected workshops in the same (date, time) slot."""
    booked = {}
    for workshop_id in draft.workshop_ids:
        workshop = catalog.workshops[workshop_id]
        clash = booked.get(workshop.slot)
        if clash is not None:
            raise ScheduleConflictError(clash.title, workshop.title)
        booked[workshop.slot] = workshop


class RegistrationService:
    """Service for creating and releasing registrations."""

    def __init__(
        self,
        store: FestivalStore,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._clock = clock

    def create_registration(self, draft: RegistrationDraft) -> Registration:
        """Price, persist and book a registration.

        Raises:
            ValidationError: Missing contact info or a workshop schedule clash.
            ConfigurationError: No event given and none is current.
            EventNotFoundError: The given event does not exist.
            ResourceNotFoundError: A selected item does not exist.
            CapacityError: The selected table (or an enforced resource) is full.
        """
        validate_contact_info(draft)
        event = self._resolve_event(draft.event_id)
        catalog = load_catalog(self._store, draft, event, strict=True)
        check_schedule_conflicts(draft, catalog)
        self._check_enrollment_capacity(draft, catalog)

        breakdown = compute_total(draft, catalog, self._clock(), conf.included_workshop_limit())
        seats = seats_needed(draft.role)
        table = catalog.tables.get(draft.table_number)
        table_id = table.id if table else None

        try:
            with self._store.atomic():
                registration = self._store.add_registration(
                    event.id, draft, breakdown.total, table_id
                )
                if table_id is not None:
                    self._store.adjust_table_occupancy(table_id, seats)
        except CapacityError:
            logger.info(
                "Registration rejected, table full",
                extra={"event_id": str(event.id), "table_number": draft.table_number},
            )
            raise

        logger.info(
            "Registration committed",
            extra={
                "event_id": str(event.id),
                "registration_id": str(registration.id),
                "package_type": registration.package_type.value,
                "total_amount": str(registration.total_amount),
            },
        )
        return registration

    def delete_registration(self, registration_id: str) -> None:
        """Delete a registration and release its table seats.

        Raises:
            InvalidIdError: If the registration_id is not a valid UUID.
            RegistrationNotFoundError: If the registration does not exist.
        """
        parsed = self._parse_id(registration_id)
        with self._store.atomic():
            registration = self._store.get_registration(parsed)
            if registration is None:
                raise RegistrationNotFoundError()
            if registration.table_id is not None:
                self._store.adjust_table_occupancy(
                    registration.table_id, -seats_needed(registration.role)
                )
            self._store.delete_registration(parsed)
        logger.info(
            "Registration deleted",
            extra={"event_id": str(registration.event_id), "registration_id": str(parsed)},
        )

    def get_registration(self, registration_id: str) -> Registration:
        registration = self._store.get_registration(self._parse_id(registration_id))
        if registration is None:
            raise RegistrationNotFoundError()
        return registration

    def list_registrations(self, event_id: EventId | None = None) -> list[Registration]:
        return self._store.list_registrations(event_id)

    def record_payment(
        self,
        registration_id: str,
        status: PaymentStatus,
        payment_intent_id: str | None = None,
    ) -> Registration:
        registration = self._store.update_payment(
            self._parse_id(registration_id), PaymentStatus(status), payment_intent_id
        )
        logger.info(
            "Payment status recorded",
            extra={"registration_id": str(registration.id)},
        )
        return registration

    def _resolve_event(self, event_id: EventId | None) -> Event:
        if event_id is not None:
            event = self._store.get_event(event_id)
            if event is None:
                raise EventNotFoundError()
            return event
        event = self._store.get_current_event()
        if event is None:
            raise ConfigurationError("No current event is configured")
        return event

    def _check_enrollment_capacity(self, draft: RegistrationDraft, catalog: CatalogSnapshot) -> None:
        enforce_workshops = conf.enforces_capacity(ResourceKind.WORKSHOP)
        enforce_socials = conf.enforces_capacity(ResourceKind.SOCIAL)
        if not (enforce_workshops or enforce_socials):
            return
        registrations = self._store.list_registrations(catalog.event.id)
        role = Role(draft.role)
        seats = seats_needed(role)
        if enforce_workshops:
            for workshop in catalog.workshops.values():
                enrollment = compute_enrollment(workshop.id, registrations, ResourceKind.WORKSHOP)
                leaders = 1 if role in (Role.LEADER, Role.COUPLE) else 0
                followers = 1 if role in (Role.FOLLOWER, Role.COUPLE) else 0
                if (
                    enrollment.total + seats > workshop.capacity.value
                    or enrollment.leaders + leaders > workshop.leader_capacity.value
                    or enrollment.followers + followers > workshop.follower_capacity.value
                ):
                    raise CapacityError(f'Workshop "{workshop.title}" is full')
        if enforce_socials:
            for social in catalog.social_events.values():
                enrollment = compute_enrollment(social.id, registrations, ResourceKind.SOCIAL)
                if enrollment.total + seats > social.capacity.value:
                    raise CapacityError(f'Social event "{social.name}" is full')

    @staticmethod
    def _parse_id(registration_id: str) -> RegistrationId:
        try:
            return RegistrationId.from_string(str(registration_id).strip())
        except ValueError as exc:
            raise InvalidIdError() from exc
