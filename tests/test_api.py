"""Integration tests for the HTTP API.

These go through the views, the Django store and the database.
Run with: pytest tests/test_api.py -v
"""

import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from festival import models

LEADER = {
    "first_name": "Ana",
    "last_name": "Ruiz",
    "email": "ana@example.com",
    "phone": "+971500000001",
    "country": "AE",
    "level": "advanced",
}
FOLLOWER = {**LEADER, "first_name": "Sam", "email": "sam@example.com"}


@pytest.fixture
def event(db) -> models.Event:
    now = timezone.now()
    return models.Event.objects.create(
        name="Desert Tango Festival",
        year=2026,
        venue="Dubai",
        start_date=now + timedelta(days=60),
        end_date=now + timedelta(days=64),
        registration_open_date=now - timedelta(days=30),
        registration_close_date=now + timedelta(days=55),
        is_current=True,
        full_package_standard_price=Decimal("1500"),
        full_package_early_bird_price=Decimal("1200"),
        full_package_early_bird_end_date=now + timedelta(weeks=1),
    )


@pytest.fixture
def table(event) -> models.Table:
    return models.Table.objects.create(
        event=event, table_number=1, total_seats=6, occupied_seats=5, price=Decimal("250")
    )


def workshop(event, title: str, time: str) -> models.Workshop:
    return models.Workshop.objects.create(
        event=event,
        title=title,
        instructor="Maestro",
        level="advanced",
        date=date(2026, 5, 1),
        time=time,
        price=Decimal("180"),
        capacity=40,
        leader_capacity=20,
        follower_capacity=20,
    )


@pytest.mark.django_db
class TestPricePreview:
    """Tests for POST /api/pricing/preview"""

    def test_full_package_early_bird(self, api_client: APIClient, event):
        """Given an active early bird, a solo full package previews at 1200.00."""
        response = api_client.post(
            "/api/pricing/preview",
            {"package_type": "full", "role": "leader"},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["total"] == "1200.00"

    def test_invalid_package_type(self, api_client: APIClient, event):
        response = api_client.post(
            "/api/pricing/preview",
            {"package_type": "weekend", "role": "leader"},
            format="json",
        )
        assert response.status_code == 400


@pytest.mark.django_db
class TestCreateRegistration:
    """Tests for POST /api/registrations"""

    def test_creates_registration(self, api_client: APIClient, event):
        response = api_client.post(
            "/api/registrations",
            {"package_type": "full", "role": "leader", "leader_info": LEADER},
            format="json",
        )
        assert response.status_code == 201
        body = response.json()
        assert body["total_amount"] == "1200.00"
        assert body["payment_status"] == "pending"
        assert models.Registration.objects.count() == 1

    def test_full_table_returns_conflict(self, api_client: APIClient, event, table):
        """Given a 6-seat table with 5 taken, a couple gets 409 and nothing is stored."""
        response = api_client.post(
            "/api/registrations",
            {
                "package_type": "custom",
                "role": "couple",
                "leader_info": LEADER,
                "follower_info": FOLLOWER,
                "selected_table_number": 1,
            },
            format="json",
        )
        assert response.status_code == 409
        assert response.json() == {
            "code": "CAPACITY_EXCEEDED",
            "message": "Table 1 does not have enough available seats.",
        }
        assert models.Registration.objects.count() == 0
        table.refresh_from_db()
        assert table.occupied_seats == 5

    def test_schedule_conflict_returns_bad_request(self, api_client: APIClient, event):
        first = workshop(event, "Giros", "10:00")
        second = workshop(event, "Sacadas", "10:00")
        response = api_client.post(
            "/api/registrations",
            {
                "package_type": "full",
                "role": "leader",
                "leader_info": LEADER,
                "workshop_ids": [str(first.id), str(second.id)],
            },
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["code"] == "SCHEDULE_CONFLICT"

    def test_workshop_from_another_event_is_not_found(self, api_client: APIClient, event):
        now = timezone.now()
        previous = models.Event.objects.create(
            name="Last Edition",
            year=2025,
            venue="Dubai",
            start_date=now,
            end_date=now,
            registration_open_date=now,
            registration_close_date=now,
        )
        stray = workshop(previous, "Giros", "10:00")
        response = api_client.post(
            "/api/registrations",
            {
                "package_type": "custom",
                "role": "leader",
                "leader_info": LEADER,
                "workshop_ids": [str(stray.id)],
            },
            format="json",
        )
        assert response.status_code == 404
        assert response.json()["code"] == "RESOURCE_NOT_FOUND"
        assert models.Registration.objects.count() == 0

    def test_no_current_event(self, api_client: APIClient, db):
        response = api_client.post(
            "/api/registrations",
            {"package_type": "full", "role": "leader", "leader_info": LEADER},
            format="json",
        )
        assert response.status_code == 404
        assert response.json()["code"] == "CONFIGURATION_MISSING"


@pytest.mark.django_db
class TestDeleteRegistration:
    """Tests for DELETE /api/registrations/{id}"""

    def test_delete_releases_table_seats(self, api_client: APIClient, event, table):
        created = api_client.post(
            "/api/registrations",
            {
                "package_type": "custom",
                "role": "leader",
                "leader_info": LEADER,
                "selected_table_number": 1,
            },
            format="json",
        )
        assert created.status_code == 201
        table.refresh_from_db()
        assert table.occupied_seats == 6

        response = api_client.delete(f"/api/registrations/{created.json()['id']}")
        assert response.status_code == 204
        table.refresh_from_db()
        assert table.occupied_seats == 5

    def test_delete_after_table_deactivated(self, api_client: APIClient, event, table):
        """Seats return to the booked table, not to its active replacement."""
        created = api_client.post(
            "/api/registrations",
            {
                "package_type": "custom",
                "role": "leader",
                "leader_info": LEADER,
                "selected_table_number": 1,
            },
            format="json",
        )
        assert models.Registration.objects.get().table_id == table.id
        table.is_active = False
        table.save(update_fields=["is_active"])
        replacement = models.Table.objects.create(
            event=event, table_number=1, total_seats=6, occupied_seats=2, price=Decimal("250")
        )

        response = api_client.delete(f"/api/registrations/{created.json()['id']}")

        assert response.status_code == 204
        table.refresh_from_db()
        replacement.refresh_from_db()
        assert table.occupied_seats == 5
        assert replacement.occupied_seats == 2

    def test_delete_unknown(self, api_client: APIClient, db):
        response = api_client.delete(f"/api/registrations/{uuid.uuid4()}")
        assert response.status_code == 404

    def test_delete_invalid_id(self, api_client: APIClient, db):
        response = api_client.delete("/api/registrations/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ID"


@pytest.mark.django_db
class TestAvailability:
    """Tests for GET /api/availability/{kind}/{id}"""

    def test_table_availability(self, api_client: APIClient, event, table):
        response = api_client.get("/api/availability/table/1")
        assert response.status_code == 200
        body = response.json()
        assert (body["occupied"], body["capacity"], body["remaining"]) == (5, 6, 1)

    def test_workshop_availability_follows_registrations(self, api_client: APIClient, event):
        item = workshop(event, "Giros", "10:00")
        api_client.post(
            "/api/registrations",
            {
                "package_type": "custom",
                "role": "couple",
                "leader_info": LEADER,
                "follower_info": FOLLOWER,
                "workshop_ids": [str(item.id)],
            },
            format="json",
        )
        response = api_client.get(f"/api/availability/workshop/{item.id}")
        assert response.json()["occupied"] == 2

    def test_unknown_table(self, api_client: APIClient, event):
        response = api_client.get("/api/availability/table/42")
        assert response.status_code == 404


@pytest.mark.django_db
class TestEvents:
    """Tests for /api/events"""

    def test_current_event(self, api_client: APIClient, event):
        response = api_client.get("/api/events/current")
        assert response.status_code == 200
        assert response.json()["id"] == str(event.id)

    def test_set_current_event(self, api_client: APIClient, event):
        now = timezone.now()
        other = models.Event.objects.create(
            name="Next Edition",
            year=2027,
            venue="Dubai",
            start_date=now,
            end_date=now,
            registration_open_date=now,
            registration_close_date=now,
        )
        response = api_client.put(f"/api/events/{other.id}/set-current")
        assert response.status_code == 200
        event.refresh_from_db()
        assert not event.is_current
        assert models.Event.objects.get(pk=other.pk).is_current

    def test_saving_current_event_clears_previous(self, event):
        """Given a current event, saving another as current leaves exactly one."""
        now = timezone.now()
        models.Event.objects.create(
            name="Next Edition",
            year=2027,
            venue="Dubai",
            start_date=now,
            end_date=now,
            registration_open_date=now,
            registration_close_date=now,
            is_current=True,
        )
        event.refresh_from_db()
        assert not event.is_current
        assert models.Event.objects.filter(is_current=True).count() == 1

    def test_workshops_with_enrollment(self, api_client: APIClient, event):
        workshop(event, "Giros", "10:00")
        response = api_client.get(f"/api/events/{event.id}/workshops")
        assert response.status_code == 200
        assert response.json()[0]["enrollment"] == {"total": 0, "leaders": 0, "followers": 0}

    def test_tables_milongas_and_addons(self, api_client: APIClient, event, table):
        """The booking wizard can list every purchasable item of an event."""
        models.SocialEvent.objects.create(
            event=event,
            name="Opening Milonga",
            kind="regular",
            date=date(2026, 5, 1),
            time="22:00",
            venue="Dubai",
            price=Decimal("90"),
            capacity=200,
        )
        models.Addon.objects.create(
            event=event, name="Festival T-shirt", category="merch", price=Decimal("75")
        )

        tables = api_client.get(f"/api/events/{event.id}/tables").json()
        milongas = api_client.get(f"/api/events/{event.id}/milongas").json()
        addons = api_client.get(f"/api/events/{event.id}/addons").json()

        assert [(t["table_number"], t["available_seats"]) for t in tables] == [(1, 1)]
        assert milongas[0]["name"] == "Opening Milonga"
        assert milongas[0]["enrollment"]["total"] == 0
        assert addons[0]["price"] == "75.00"

    def test_listing_unknown_event(self, api_client: APIClient, db):
        for resource in ("tables", "milongas", "addons"):
            response = api_client.get(f"/api/events/{uuid.uuid4()}/{resource}")
            assert response.status_code == 404

    def test_quote(self, api_client: APIClient, event):
        models.PackageConfiguration.objects.create(
            event=event,
            package_type="evening",
            name="Evening pass",
            base_price=Decimal("500"),
            included_milongas=True,
        )
        response = api_client.post(
            f"/api/events/{event.id}/quote",
            {"package_type": "evening", "role": "couple"},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["total"] == "1000.00"
