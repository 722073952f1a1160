"""Promotion service - pricing tiers and package-configuration quotes.

This path is independent of checkout: registrations are priced from the
Event-embedded package fields. Quotes here let operators preview what a
PackageConfiguration plus the active PricingTier would charge.
"""

from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from festival import conf
from festival.domain import EventId, PackageConfiguration, PackageType, PricingTier, Role
from festival.domain.errors import ConfigurationError, EventNotFoundError
from festival.domain.promotions import PackageQuote, active_tier, quote_package
from festival.stores.interfaces import FestivalStore


class PromotionService:
    """Service for event-wide pricing configuration."""

    def __init__(
        self,
        store: FestivalStore,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._clock = clock

    def list_pricing_tiers(self, event_id: EventId) -> list[PricingTier]:
        return self._store.get_pricing_tiers(event_id)

    def get_active_tier(self, event_id: EventId, now: datetime | None = None) -> PricingTier | None:
        """Highest-priority active tier whose window contains ``now``, or None."""
        return active_tier(self._store.get_pricing_tiers(event_id), now or self._clock())

    def list_package_configurations(self, event_id: EventId) -> list[PackageConfiguration]:
        return self._store.get_package_configurations(event_id)

    def get_package_configuration(
        self, event_id: EventId, package_type: PackageType
    ) -> PackageConfiguration | None:
        return self._store.get_package_configuration(event_id, PackageType(package_type))

    def quote(
        self,
        event_id: EventId,
        package_type: PackageType,
        role: Role,
        workshop_count: int = 0,
        include_gala: bool = False,
    ) -> PackageQuote:
        """Price a package from its configuration and the active tier.

        Raises:
            EventNotFoundError: If the event does not exist.
            ConfigurationError: If the package type has no active configuration.
        """
        if self._store.get_event(event_id) is None:
            raise EventNotFoundError()
        config = self.get_package_configuration(event_id, package_type)
        if config is None:
            raise ConfigurationError("Package configuration not found")
        return quote_package(
            config,
            Role(role),
            workshop_count,
            include_gala,
            conf.quote_gala_price(),
            self.get_active_tier(event_id),
        )
