"""Inventory ledger.

Workshop and social-event enrollment is never stored: it is folded from the
live registration set every time it is read. Table occupancy is the only
stored counter; its arithmetic lives on ``Table.with_occupancy_delta`` and is
applied by the stores under a per-table serialization point.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from festival.domain.models import Registration
from festival.domain.value_objects import EntityId, ResourceKind, Role


@dataclass(frozen=True)
class Enrollment:
    total: int = 0
    leaders: int = 0
    followers: int = 0


@dataclass(frozen=True)
class Availability:
    """Occupancy of a resource against its capacity."""

    occupied: int
    capacity: int
    enforced: bool

    @property
    def remaining(self) -> int:
        return max(self.capacity - self.occupied, 0)

    @property
    def available(self) -> bool:
        if not self.enforced:
            return True
        return self.occupied < self.capacity


def seats_needed(role: Role) -> int:
    return 2 if Role(role).is_couple else 1


_REFERENCE_FIELDS = {
    ResourceKind.WORKSHOP: "workshop_ids",
    ResourceKind.SOCIAL: "social_event_ids",
}


def _reference_field(kind: ResourceKind) -> str:
    kind = ResourceKind(kind)
    if kind not in _REFERENCE_FIELDS:
        raise ValueError(f"Enrollment is not derived for {kind.value} resources")
    return _REFERENCE_FIELDS[kind]


def compute_enrollment(
    resource_id: EntityId,
    registrations: Iterable[Registration],
    kind: ResourceKind = ResourceKind.WORKSHOP,
) -> Enrollment:
    """Fold the registration snapshot into an enrollment for one resource."""
    field = _reference_field(kind)
    total = leaders = followers = 0
    for registration in registrations:
        if resource_id not in getattr(registration, field):
            continue
        if registration.role is Role.COUPLE:
            leaders += 1
            followers += 1
            total += 2
        elif registration.role is Role.LEADER:
            leaders += 1
            total += 1
        elif registration.role is Role.FOLLOWER:
            followers += 1
            total += 1
    return Enrollment(total=total, leaders=leaders, followers=followers)


def enrollment_by_resource(
    registrations: Iterable[Registration],
    kind: ResourceKind = ResourceKind.WORKSHOP,
) -> dict[EntityId, Enrollment]:
    """Enrollment for every resource referenced by the snapshot, in one pass."""
    field = _reference_field(kind)
    counts: dict[EntityId, list[int]] = {}
    for registration in registrations:
        for resource_id in set(getattr(registration, field)):
            tally = counts.setdefault(resource_id, [0, 0, 0])
            if registration.role is Role.COUPLE:
                tally[0] += 2
                tally[1] += 1
                tally[2] += 1
            elif registration.role is Role.LEADER:
                tally[0] += 1
                tally[1] += 1
            else:
                tally[0] += 1
                tally[2] += 1
    return {
        resource_id: Enrollment(total=t, leaders=l, followers=f)
        for resource_id, (t, l, f) in counts.items()
    }
