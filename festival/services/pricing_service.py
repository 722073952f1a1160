"""Pricing service - live price previews for the booking wizard.

Previews are soft: a missing event or an unknown item prices at zero
instead of failing, so the wizard can always show a running total.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from festival import conf
from festival.domain import Event, EventId, RegistrationDraft
from festival.domain.errors import ResourceNotFoundError
from festival.domain.totals import CatalogSnapshot, PriceBreakdown, compute_total
from festival.stores.interfaces import FestivalStore

logger = logging.getLogger(__name__)


def load_catalog(
    store: FestivalStore,
    draft: RegistrationDraft,
    event: Event | None,
    strict: bool = False,
) -> CatalogSnapshot:
    """Fetch every record the draft references.

    A record that belongs to another event counts as unknown. With
    ``strict`` an unknown reference raises ResourceNotFoundError; otherwise
    it is left out of the snapshot.
    """

    def fetch(kind: str, reference, record):
        if record is not None and (event is None or record.event_id != event.id):
            record = None
        if record is None and strict:
            raise ResourceNotFoundError(kind, reference)
        return record

    workshops = {
        workshop_id: fetch("workshop", workshop_id, store.get_workshop(workshop_id))
        for workshop_id in draft.workshop_ids
    }
    social_events = {
        social_id: fetch("social event", social_id, store.get_social_event(social_id))
        for social_id in draft.social_event_ids
    }
    addons = {
        selection.addon_id: fetch(
            "add-on", selection.addon_id, store.get_addon(selection.addon_id)
        )
        for selection in draft.addons
    }
    tables = {}
    if draft.table_number is not None:
        table = store.get_table(event.id, draft.table_number) if event else None
        tables[draft.table_number] = fetch("table", draft.table_number, table)

    def present(mapping: dict) -> dict:
        return {key: value for key, value in mapping.items() if value is not None}

    return CatalogSnapshot(
        event=event,
        workshops=present(workshops),
        social_events=present(social_events),
        tables=present(tables),
        addons=present(addons),
    )


class PricingService:
    """Service for computing registration totals."""

    def __init__(
        self,
        store: FestivalStore,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._clock = clock

    def resolve_event(self, event_id: EventId | None) -> Event | None:
        if event_id is not None:
            return self._store.get_event(event_id)
        return self._store.get_current_event()

    def compute_total(
        self, draft: RegistrationDraft, event_id: EventId | None = None
    ) -> PriceBreakdown:
        """Return the price breakdown for a draft at the current time."""
        event = self.resolve_event(event_id or draft.event_id)
        if event is None:
            logger.warning("Pricing preview without a configured event")
        catalog = load_catalog(self._store, draft, event)
        return compute_total(draft, catalog, self._clock(), conf.included_workshop_limit())
