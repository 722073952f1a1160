"""Inventory service - occupancy and enrollment reads.

Workshop and social-event enrollment is recomputed from the live
registrations on every call. Table occupancy is read from its stored counter.
"""

from dataclasses import dataclass

from festival import conf
from festival.domain import (
    EventId,
    ResourceKind,
    SocialEvent,
    SocialEventId,
    Table,
    Workshop,
    WorkshopId,
)
from festival.domain.errors import (
    EventNotFoundError,
    InvalidIdError,
    ResourceNotFoundError,
    ValidationError,
)
from festival.domain.ledger import (
    Availability,
    Enrollment,
    compute_enrollment,
    enrollment_by_resource,
)
from festival.stores.interfaces import FestivalStore


def parse_kind(kind) -> ResourceKind:
    try:
        return ResourceKind(kind)
    except ValueError as exc:
        raise ValidationError(f"Unknown resource kind: {kind}") from exc


@dataclass(frozen=True)
class WorkshopEnrollment:
    workshop: Workshop
    enrollment: Enrollment


@dataclass(frozen=True)
class SocialEventEnrollment:
    social_event: SocialEvent
    enrollment: Enrollment


class InventoryService:
    """Service for resource availability."""

    def __init__(self, store: FestivalStore) -> None:
        self._store = store

    def get_resource_availability(
        self,
        kind: ResourceKind,
        resource_id: str,
        event_id: EventId | None = None,
    ) -> Availability:
        """Return ``{occupied, capacity}`` for a workshop, social event or table.

        Tables are addressed by table number within ``event_id`` (the current
        event when omitted).

        Raises:
            InvalidIdError: If the reference is malformed.
            ResourceNotFoundError: If the resource does not exist.
        """
        kind = parse_kind(kind)
        enforced = conf.enforces_capacity(kind)
        if kind is ResourceKind.TABLE:
            table = self._get_table(resource_id, event_id)
            return Availability(
                occupied=table.occupied_seats,
                capacity=table.total_seats.value,
                enforced=enforced,
            )
        resource = self._get_enrollable(kind, resource_id)
        enrollment = compute_enrollment(
            resource.id, self._store.list_registrations(resource.event_id), kind
        )
        return Availability(
            occupied=enrollment.total,
            capacity=resource.capacity.value,
            enforced=enforced,
        )

    def list_workshops(self, event_id: EventId) -> list[WorkshopEnrollment]:
        registrations = self._registrations_of(event_id)
        counts = enrollment_by_resource(registrations, ResourceKind.WORKSHOP)
        return [
            WorkshopEnrollment(workshop=workshop, enrollment=counts.get(workshop.id, Enrollment()))
            for workshop in self._store.get_workshops(event_id)
        ]

    def list_social_events(self, event_id: EventId) -> list[SocialEventEnrollment]:
        registrations = self._registrations_of(event_id)
        counts = enrollment_by_resource(registrations, ResourceKind.SOCIAL)
        return [
            SocialEventEnrollment(
                social_event=social, enrollment=counts.get(social.id, Enrollment())
            )
            for social in self._store.get_social_events(event_id)
        ]

    def list_tables(self, event_id: EventId) -> list[Table]:
        """Active tables of an event with their stored occupancy, by number."""
        if self._store.get_event(event_id) is None:
            raise EventNotFoundError()
        return self._store.get_tables(event_id)

    def _registrations_of(self, event_id: EventId):
        if self._store.get_event(event_id) is None:
            raise EventNotFoundError()
        return self._store.list_registrations(event_id)

    def _get_enrollable(self, kind: ResourceKind, resource_id: str):
        try:
            if kind is ResourceKind.WORKSHOP:
                resource = self._store.get_workshop(WorkshopId.from_string(resource_id))
            else:
                resource = self._store.get_social_event(SocialEventId.from_string(resource_id))
        except ValueError as exc:
            raise InvalidIdError() from exc
        if resource is None:
            raise ResourceNotFoundError(kind.value, resource_id)
        return resource

    def _get_table(self, table_number: str, event_id: EventId | None):
        try:
            number = int(table_number)
        except (TypeError, ValueError) as exc:
            raise InvalidIdError() from exc
        if event_id is None:
            event = self._store.get_current_event()
            if event is None:
                raise EventNotFoundError()
            event_id = event.id
        table = self._store.get_table(event_id, number)
        if table is None:
            raise ResourceNotFoundError("table", number)
        return table
