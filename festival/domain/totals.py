"""Registration total calculation.

``compute_total`` is a pure function of a draft, an immutable catalog
snapshot and ``now``. Unknown items and unconfigured prices contribute zero
so a partially configured event still yields a (partial) total.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType

from festival.domain.ledger import seats_needed
from festival.domain.models import Addon, Event, RegistrationDraft, SocialEvent, Table, Workshop
from festival.domain.packages import INCLUDED_WORKSHOP_LIMIT, rules_for
from festival.domain.pricing import ZERO, resolve_price, workshop_unit_price
from festival.domain.value_objects import AddonId, Money, SocialEventId, WorkshopId


def _frozen(mapping: Mapping | None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class CatalogSnapshot:
    """Read-only view of everything a draft may reference."""

    event: Event | None = None
    workshops: Mapping[WorkshopId, Workshop] = field(default_factory=dict)
    social_events: Mapping[SocialEventId, SocialEvent] = field(default_factory=dict)
    tables: Mapping[int, Table] = field(default_factory=dict)
    addons: Mapping[AddonId, Addon] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("workshops", "social_events", "tables", "addons"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))


@dataclass(frozen=True)
class PriceBreakdown:
    package: Decimal = ZERO
    workshops: Decimal = ZERO
    socials: Decimal = ZERO
    gala: Decimal = ZERO
    addons: Decimal = ZERO

    @property
    def total(self) -> Money:
        amount = self.package + self.workshops + self.socials + self.gala + self.addons
        return Money(amount).rounded()


def package_price(draft: RegistrationDraft, event: Event | None, now: datetime) -> Decimal:
    if event is None:
        return ZERO
    rules = rules_for(draft.package_type)
    if not rules.is_priced:
        return ZERO
    if rules.is_accommodation:
        return event.accommodation(draft.package_type).resolve(now, couple=draft.role.is_couple)
    return event.package_schedule(draft.package_type).resolve(now) * seats_needed(draft.role)


def workshop_price(
    draft: RegistrationDraft,
    catalog: CatalogSnapshot,
    now: datetime,
    included_limit: int = INCLUDED_WORKSHOP_LIMIT,
) -> Decimal:
    allowance = included_limit if rules_for(draft.package_type).includes_workshops else 0
    multiplier = seats_needed(draft.role)
    total = ZERO
    for position, workshop_id in enumerate(draft.workshop_ids):
        if position < allowance:
            continue
        workshop = catalog.workshops.get(workshop_id)
        if workshop is None:
            continue
        total += workshop_unit_price(workshop, catalog.event, now) * multiplier
    return total


def social_price(draft: RegistrationDraft, catalog: CatalogSnapshot, now: datetime) -> Decimal:
    if rules_for(draft.package_type).includes_socials:
        return ZERO
    multiplier = seats_needed(draft.role)
    return sum(
        (
            resolve_price(catalog.social_events.get(social_id), now) * multiplier
            for social_id in draft.social_event_ids
        ),
        ZERO,
    )


def gala_price(draft: RegistrationDraft, catalog: CatalogSnapshot, now: datetime) -> Decimal:
    if draft.table_number is None or rules_for(draft.package_type).includes_dinner:
        return ZERO
    table = catalog.tables.get(draft.table_number)
    if table is None:
        return ZERO
    return resolve_price(table, now) * seats_needed(draft.role)


def addon_price(draft: RegistrationDraft, catalog: CatalogSnapshot) -> Decimal:
    total = ZERO
    for selection in draft.addons:
        addon = catalog.addons.get(selection.addon_id)
        if addon is None:
            continue
        total += (addon.price * selection.quantity).amount
    return total


def compute_total(
    draft: RegistrationDraft,
    catalog: CatalogSnapshot,
    now: datetime,
    included_limit: int = INCLUDED_WORKSHOP_LIMIT,
) -> PriceBreakdown:
    return PriceBreakdown(
        package=package_price(draft, catalog.event, now),
        workshops=workshop_price(draft, catalog, now, included_limit),
        socials=social_price(draft, catalog, now),
        gala=gala_price(draft, catalog, now),
        addons=addon_price(draft, catalog),
    )
