"""Django ORM implementation of the FestivalStore."""

import logging
from dataclasses import asdict
from decimal import Decimal

from django.db import transaction

from festival import conf, models
from festival.domain import (
    Addon,
    AddonId,
    AddonSelection,
    AttendeeInfo,
    Capacity,
    Event,
    EventId,
    Money,
    PackageConfiguration,
    PackageType,
    PaymentMethod,
    PaymentStatus,
    PricingTier,
    Registration,
    RegistrationDraft,
    RegistrationId,
    Role,
    SocialEvent,
    SocialEventId,
    Table,
    TableId,
    Workshop,
    WorkshopId,
)
from festival.domain.errors import (
    ConcurrencyError,
    EventNotFoundError,
    RegistrationNotFoundError,
    ResourceNotFoundError,
)
from festival.domain.pricing import AccommodationPricing, PriceSchedule
from festival.stores.interfaces import FestivalStore

logger = logging.getLogger(__name__)


def _schedule(row, prefix: str = "", flash: bool = False) -> PriceSchedule:
    if not flash:
        return PriceSchedule(
            standard=getattr(row, f"{prefix}price"),
            early_bird=getattr(row, f"{prefix}early_bird_price"),
            early_bird_ends_at=getattr(row, f"{prefix}early_bird_end_date"),
        )
    return PriceSchedule(
        standard=getattr(row, f"{prefix}standard_price"),
        early_bird=getattr(row, f"{prefix}early_bird_price"),
        early_bird_ends_at=getattr(row, f"{prefix}early_bird_end_date"),
        flash=getattr(row, f"{prefix}flash_price"),
        flash_starts_at=getattr(row, f"{prefix}flash_start_date"),
        flash_ends_at=getattr(row, f"{prefix}flash_end_date"),
    )


def _accommodation(row: models.Event, nights: int) -> AccommodationPricing:
    prefix = f"accommodation_{nights}_nights_"
    return AccommodationPricing(
        single=getattr(row, f"{prefix}single_price"),
        double=getattr(row, f"{prefix}double_price"),
        early_bird_single=getattr(row, f"{prefix}early_bird_single_price"),
        early_bird_double=getattr(row, f"{prefix}early_bird_double_price"),
        early_bird_ends_at=getattr(row, f"{prefix}early_bird_end_date"),
    )


def event_to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        name=row.name,
        year=row.year,
        venue=row.venue,
        description=row.description,
        starts_at=row.start_date,
        ends_at=row.end_date,
        registration_opens_at=row.registration_open_date,
        registration_closes_at=row.registration_close_date,
        is_active=row.is_active,
        is_current=row.is_current,
        workshop_pricing=PriceSchedule(
            standard=row.workshop_standard_price,
            early_bird=row.workshop_early_bird_price,
            early_bird_ends_at=row.workshop_early_bird_end_date,
        ),
        package_pricing={
            PackageType.FULL: _schedule(row, "full_package_", flash=True),
            PackageType.EVENING: _schedule(row, "evening_package_", flash=True),
        },
        accommodation_pricing={
            PackageType.PREMIUM_4_NIGHTS: _accommodation(row, 4),
            PackageType.PREMIUM_3_NIGHTS: _accommodation(row, 3),
        },
    )


def workshop_to_domain(row: models.Workshop) -> Workshop:
    return Workshop(
        id=WorkshopId(row.id),
        event_id=EventId(row.event_id),
        title=row.title,
        instructor=row.instructor,
        level=row.level,
        description=row.description,
        date=row.date,
        time=row.time,
        pricing=_schedule(row),
        capacity=Capacity(row.capacity),
        leader_capacity=Capacity(row.leader_capacity),
        follower_capacity=Capacity(row.follower_capacity),
    )


def social_event_to_domain(row: models.SocialEvent) -> SocialEvent:
    return SocialEvent(
        id=SocialEventId(row.id),
        event_id=EventId(row.event_id),
        name=row.name,
        kind=row.kind,
        description=row.description,
        date=row.date,
        time=row.time,
        venue=row.venue,
        pricing=_schedule(row),
        capacity=Capacity(row.capacity),
    )


def table_to_domain(row: models.Table) -> Table:
    return Table(
        id=TableId(row.id),
        event_id=EventId(row.event_id),
        table_number=row.table_number,
        total_seats=Capacity(row.total_seats),
        occupied_seats=row.occupied_seats,
        pricing=_schedule(row),
        is_vip=row.is_vip,
        is_active=row.is_active,
    )


def addon_to_domain(row: models.Addon) -> Addon:
    return Addon(
        id=AddonId(row.id),
        event_id=EventId(row.event_id),
        name=row.name,
        description=row.description,
        price=Money(row.price),
        category=row.category,
        options=row.options or {},
    )


def _attendee(data: dict | None) -> AttendeeInfo | None:
    if not data:
        return None
    return AttendeeInfo(**data)


def registration_to_domain(row: models.Registration) -> Registration:
    return Registration(
        id=RegistrationId(row.id),
        event_id=EventId(row.event_id),
        package_type=PackageType(row.package_type),
        role=Role(row.role),
        total_amount=Money(row.total_amount),
        created_at=row.created_at,
        leader_info=_attendee(row.leader_info),
        follower_info=_attendee(row.follower_info),
        workshop_ids=tuple(WorkshopId.from_string(value) for value in row.workshop_ids or []),
        social_event_ids=tuple(
            SocialEventId.from_string(value) for value in row.milonga_ids or []
        ),
        table_number=row.selected_table_number,
        table_id=TableId(row.table_id) if row.table_id else None,
        addons=tuple(
            AddonSelection(
                addon_id=AddonId.from_string(item["id"]),
                quantity=item["quantity"],
                options=item.get("options") or {},
            )
            for item in row.addons or []
        ),
        payment_method=PaymentMethod(row.payment_method) if row.payment_method else None,
        payment_status=PaymentStatus(row.payment_status),
        payment_intent_id=row.stripe_payment_intent_id,
    )


def pricing_tier_to_domain(row: models.PricingTier) -> PricingTier:
    return PricingTier(
        id=str(row.id),
        event_id=EventId(row.event_id),
        name=row.name,
        description=row.description,
        starts_at=row.start_date,
        ends_at=row.end_date,
        discount_percentage=row.discount_percentage,
        discount_amount=row.discount_amount,
        priority=row.priority,
        is_active=row.is_active,
    )


def package_configuration_to_domain(row: models.PackageConfiguration) -> PackageConfiguration:
    return PackageConfiguration(
        id=str(row.id),
        event_id=EventId(row.event_id),
        package_type=PackageType(row.package_type),
        name=row.name,
        description=row.description,
        base_price=row.base_price,
        couple_multiplier=row.couple_multiplier,
        included_workshops=row.included_workshops,
        includes_socials=row.included_milongas,
        includes_gala_dinner=row.included_gala_dinner,
        workshop_overage_price=row.workshop_overage_price,
        custom_workshop_pricing={
            int(count): Decimal(str(price))
            for count, price in (row.custom_workshop_pricing or {}).items()
        },
        is_active=row.is_active,
        sort_order=row.sort_order,
    )


class DjangoFestivalStore(FestivalStore):
    """PostgreSQL-backed festival store using Django ORM."""

    def atomic(self):
        return transaction.atomic()

    # events

    def list_events(self) -> list[Event]:
        return [event_to_domain(row) for row in models.Event.objects.all()]

    def get_event(self, event_id: EventId) -> Event | None:
        row = models.Event.objects.filter(pk=event_id.value).first()
        return event_to_domain(row) if row else None

    def get_current_event(self) -> Event | None:
        row = models.Event.objects.filter(is_current=True).first()
        return event_to_domain(row) if row else None

    def set_current_event(self, event_id: EventId) -> Event:
        with transaction.atomic():
            row = models.Event.objects.select_for_update().filter(pk=event_id.value).first()
            if row is None:
                raise EventNotFoundError()
            models.Event.objects.filter(is_current=True).exclude(pk=row.pk).update(
                is_current=False
            )
            row.is_current = True
            row.save(update_fields=["is_current", "updated_at"])
        return event_to_domain(row)

    # catalog

    def get_workshops(self, event_id: EventId) -> list[Workshop]:
        rows = models.Workshop.objects.filter(event_id=event_id.value)
        return [workshop_to_domain(row) for row in rows]

    def get_workshop(self, workshop_id: WorkshopId) -> Workshop | None:
        row = models.Workshop.objects.filter(pk=workshop_id.value).first()
        return workshop_to_domain(row) if row else None

    def get_social_events(self, event_id: EventId) -> list[SocialEvent]:
        rows = models.SocialEvent.objects.filter(event_id=event_id.value)
        return [social_event_to_domain(row) for row in rows]

    def get_social_event(self, social_event_id: SocialEventId) -> SocialEvent | None:
        row = models.SocialEvent.objects.filter(pk=social_event_id.value).first()
        return social_event_to_domain(row) if row else None

    def get_tables(self, event_id: EventId) -> list[Table]:
        rows = models.Table.objects.filter(event_id=event_id.value, is_active=True)
        return [table_to_domain(row) for row in rows]

    def get_table(self, event_id: EventId, table_number: int) -> Table | None:
        row = models.Table.objects.filter(
            event_id=event_id.value, table_number=table_number, is_active=True
        ).first()
        return table_to_domain(row) if row else None

    def get_addons(self, event_id: EventId) -> list[Addon]:
        rows = models.Addon.objects.filter(event_id=event_id.value)
        return [addon_to_domain(row) for row in rows]

    def get_addon(self, addon_id: AddonId) -> Addon | None:
        row = models.Addon.objects.filter(pk=addon_id.value).first()
        return addon_to_domain(row) if row else None

    # inventory

    def adjust_table_occupancy(self, table_id: TableId, delta: int) -> Table:
        """Row lock plus a compare-and-swap on ``occupied_seats``.

        ``select_for_update`` serializes writers on backends with row locks;
        the conditional UPDATE keeps the check-then-write safe where it is a
        no-op (SQLite).
        """
        attempts = max(conf.occupancy_cas_retries(), 1)
        for _ in range(attempts):
            with transaction.atomic():
                row = models.Table.objects.select_for_update().filter(pk=table_id.value).first()
                if row is None or (delta > 0 and not row.is_active):
                    raise ResourceNotFoundError("table", table_id)
                updated = table_to_domain(row).with_occupancy_delta(delta)
                swapped = models.Table.objects.filter(
                    pk=row.pk, occupied_seats=row.occupied_seats
                ).update(occupied_seats=updated.occupied_seats)
                if swapped:
                    logger.info(
                        "Table occupancy adjusted",
                        extra={
                            "event_id": str(updated.event_id),
                            "table_number": updated.table_number,
                        },
                    )
                    return updated
            logger.warning(
                "Table occupancy changed concurrently, retrying",
                extra={"event_id": str(updated.event_id), "table_number": updated.table_number},
            )
        raise ConcurrencyError(f"Table {updated.table_number} is being booked by another attendee")

    # registrations

    def add_registration(
        self,
        event_id: EventId,
        draft: RegistrationDraft,
        total_amount: Money,
        table_id: TableId | None = None,
    ) -> Registration:
        row = models.Registration.objects.create(
            event_id=event_id.value,
            package_type=PackageType(draft.package_type).value,
            role=Role(draft.role).value,
            leader_info=asdict(draft.leader_info) if draft.leader_info else None,
            follower_info=asdict(draft.follower_info) if draft.follower_info else None,
            workshop_ids=[str(workshop_id) for workshop_id in draft.workshop_ids],
            milonga_ids=[str(social_id) for social_id in draft.social_event_ids],
            selected_table_number=draft.table_number,
            table_id=table_id.value if table_id else None,
            addons=[
                {
                    "id": str(selection.addon_id),
                    "quantity": selection.quantity,
                    "options": selection.options,
                }
                for selection in draft.addons
            ],
            total_amount=total_amount.amount,
            payment_method=draft.payment_method.value if draft.payment_method else None,
            payment_status=PaymentStatus.PENDING.value,
        )
        return registration_to_domain(row)

    def get_registration(self, registration_id: RegistrationId) -> Registration | None:
        row = models.Registration.objects.filter(pk=registration_id.value).first()
        return registration_to_domain(row) if row else None

    def list_registrations(self, event_id: EventId | None = None) -> list[Registration]:
        rows = models.Registration.objects.all()
        if event_id is not None:
            rows = rows.filter(event_id=event_id.value)
        return [registration_to_domain(row) for row in rows]

    def delete_registration(self, registration_id: RegistrationId) -> None:
        models.Registration.objects.filter(pk=registration_id.value).delete()

    def update_payment(
        self,
        registration_id: RegistrationId,
        status: PaymentStatus | None = None,
        payment_intent_id: str | None = None,
    ) -> Registration:
        row = models.Registration.objects.filter(pk=registration_id.value).first()
        if row is None:
            raise RegistrationNotFoundError()
        if status is not None:
            row.payment_status = PaymentStatus(status).value
        if payment_intent_id is not None:
            row.stripe_payment_intent_id = payment_intent_id
        row.save(update_fields=["payment_status", "stripe_payment_intent_id"])
        return registration_to_domain(row)

    # promotions

    def get_pricing_tiers(self, event_id: EventId) -> list[PricingTier]:
        rows = models.PricingTier.objects.filter(event_id=event_id.value)
        return [pricing_tier_to_domain(row) for row in rows]

    def get_package_configurations(self, event_id: EventId) -> list[PackageConfiguration]:
        rows = models.PackageConfiguration.objects.filter(event_id=event_id.value)
        return [package_configuration_to_domain(row) for row in rows]

    def get_package_configuration(
        self, event_id: EventId, package_type: PackageType
    ) -> PackageConfiguration | None:
        row = models.PackageConfiguration.objects.filter(
            event_id=event_id.value,
            package_type=PackageType(package_type).value,
            is_active=True,
        ).first()
        return package_configuration_to_domain(row) if row else None
