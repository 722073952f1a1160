"""Tests for the registration admin.

Admin deletes must release table seats the same way the API does.
Run with: pytest tests/test_admin.py -v
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib import admin
from django.utils import timezone

from festival import models
from festival.domain import PackageType, RegistrationDraft, Role
from festival.services.registration_service import RegistrationService
from festival.stores.django_store import DjangoFestivalStore


@pytest.fixture
def table(db) -> models.Table:
    now = timezone.now()
    event = models.Event.objects.create(
        name="Desert Tango Festival",
        year=2026,
        venue="Dubai",
        start_date=now + timedelta(days=60),
        end_date=now + timedelta(days=64),
        registration_open_date=now - timedelta(days=30),
        registration_close_date=now + timedelta(days=55),
        is_current=True,
    )
    return models.Table.objects.create(
        event=event, table_number=2, total_seats=6, occupied_seats=0, price=Decimal("250")
    )


@pytest.fixture
def registration_admin():
    return admin.site.get_model_admin(models.Registration)


def book_couple(leader_info, follower_info) -> models.Registration:
    registration = RegistrationService(DjangoFestivalStore()).create_registration(
        RegistrationDraft(
            package_type=PackageType.CUSTOM,
            role=Role.COUPLE,
            leader_info=leader_info,
            follower_info=follower_info,
            table_number=2,
        )
    )
    return models.Registration.objects.get(pk=registration.id.value)


@pytest.mark.django_db
class TestRegistrationAdmin:
    def test_delete_releases_table_seats(
        self, registration_admin, table, leader_info, follower_info
    ):
        row = book_couple(leader_info, follower_info)
        table.refresh_from_db()
        assert table.occupied_seats == 2

        registration_admin.delete_model(None, row)

        table.refresh_from_db()
        assert table.occupied_seats == 0
        assert not models.Registration.objects.exists()

    def test_bulk_delete_releases_table_seats(
        self, registration_admin, table, leader_info, follower_info
    ):
        book_couple(leader_info, follower_info)
        book_couple(leader_info, follower_info)

        registration_admin.delete_queryset(None, models.Registration.objects.all())

        table.refresh_from_db()
        assert table.occupied_seats == 0
        assert not models.Registration.objects.exists()

    def test_cannot_add_or_edit_bookings(self, registration_admin):
        """Registrations are created through the API; booked fields are read-only."""
        assert not registration_admin.has_add_permission(None)
        assert {"role", "selected_table_number", "table"} <= set(registration_admin.readonly_fields)
