"""Unit tests for derived enrollment.

Run with: pytest tests/test_ledger.py -v
"""

import itertools
import uuid
from decimal import Decimal

import pytest
from factories import NOW, build_event, build_workshop

from festival.domain import (
    Money,
    PackageType,
    Registration,
    RegistrationId,
    ResourceKind,
    Role,
)
from festival.domain.ledger import (
    Availability,
    Enrollment,
    compute_enrollment,
    enrollment_by_resource,
    seats_needed,
)


def registration(event, role, workshop_ids=(), social_event_ids=()) -> Registration:
    return Registration(
        id=RegistrationId(uuid.uuid4()),
        event_id=event.id,
        package_type=PackageType.FULL,
        role=role,
        total_amount=Money(Decimal("100")),
        created_at=NOW,
        workshop_ids=tuple(workshop_ids),
        social_event_ids=tuple(social_event_ids),
    )


class TestSeatsNeeded:
    def test_couple_needs_two_seats(self):
        assert seats_needed(Role.COUPLE) == 2
        assert seats_needed(Role.LEADER) == 1
        assert seats_needed("follower") == 1


class TestComputeEnrollment:
    """Enrollment is folded from the live registrations."""

    def test_counts_roles(self):
        event = build_event()
        workshop = build_workshop(event)
        registrations = [
            registration(event, Role.COUPLE, [workshop.id]),
            registration(event, Role.LEADER, [workshop.id]),
            registration(event, Role.FOLLOWER, [workshop.id]),
            registration(event, Role.LEADER),
        ]
        enrollment = compute_enrollment(workshop.id, registrations)
        assert enrollment == Enrollment(total=4, leaders=2, followers=2)

    def test_empty_snapshot(self):
        workshop = build_workshop(build_event())
        assert compute_enrollment(workshop.id, []) == Enrollment()

    def test_social_events_use_social_references(self):
        event = build_event()
        social_id = build_workshop(event).id
        registrations = [registration(event, Role.COUPLE, social_event_ids=[social_id])]
        assert compute_enrollment(social_id, registrations, ResourceKind.SOCIAL).total == 2
        assert compute_enrollment(social_id, registrations, ResourceKind.WORKSHOP).total == 0

    def test_tables_are_not_derived(self):
        with pytest.raises(ValueError):
            compute_enrollment(build_workshop(build_event()).id, [], ResourceKind.TABLE)

    def test_deletion_in_any_order_removes_exact_contribution(self):
        """Removing a registration reduces enrollment by its 1 or 2 seats."""
        event = build_event()
        workshop = build_workshop(event)
        registrations = [
            registration(event, Role.COUPLE, [workshop.id]),
            registration(event, Role.LEADER, [workshop.id]),
            registration(event, Role.FOLLOWER, [workshop.id]),
            registration(event, Role.COUPLE, [workshop.id]),
        ]
        for order in itertools.permutations(range(len(registrations))):
            remaining = list(registrations)
            for index in order:
                before = compute_enrollment(workshop.id, remaining).total
                removed = registrations[index]
                remaining.remove(removed)
                after = compute_enrollment(workshop.id, remaining).total
                assert before - after == seats_needed(removed.role)
            assert compute_enrollment(workshop.id, remaining) == Enrollment()

    def test_by_resource_matches_single_fold(self):
        event = build_event()
        first, second = build_workshop(event), build_workshop(event, time="14:00")
        registrations = [
            registration(event, Role.COUPLE, [first.id, second.id]),
            registration(event, Role.FOLLOWER, [second.id]),
        ]
        counts = enrollment_by_resource(registrations)
        assert counts[first.id] == compute_enrollment(first.id, registrations)
        assert counts[second.id] == Enrollment(total=3, leaders=1, followers=2)


class TestAvailability:
    def test_enforced_full_resource_is_unavailable(self):
        availability = Availability(occupied=6, capacity=6, enforced=True)
        assert not availability.available
        assert availability.remaining == 0

    def test_unenforced_resource_is_always_available(self):
        availability = Availability(occupied=12, capacity=10, enforced=False)
        assert availability.available
        assert availability.remaining == 0
