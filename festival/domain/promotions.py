"""Event-wide promotions and package-configuration quotes.

This is a pricing path separate from the Event-embedded package fields used
at checkout. It prices a package from its PackageConfiguration row and then
applies the single highest-priority active PricingTier.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from festival.domain.models import PackageConfiguration, PricingTier
from festival.domain.pricing import ZERO
from festival.domain.value_objects import CENT, Role

HUNDRED = Decimal("100")


def active_tier(tiers: Iterable[PricingTier], now: datetime) -> PricingTier | None:
    candidates = [
        tier for tier in tiers if tier.is_active and tier.starts_at <= now <= tier.ends_at
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda tier: tier.priority)


def apply_tier(amount: Decimal, tier: PricingTier | None) -> Decimal:
    """Percentage discount first, then the fixed amount, floored at zero."""
    if tier is None:
        return amount
    if tier.discount_percentage > 0:
        amount = amount * (1 - tier.discount_percentage / HUNDRED)
    if tier.discount_amount > 0:
        amount = max(ZERO, amount - tier.discount_amount)
    return amount


@dataclass(frozen=True)
class PackageQuote:
    base: Decimal
    workshops: Decimal
    gala: Decimal
    subtotal: Decimal
    total: Decimal
    configuration: PackageConfiguration
    tier: PricingTier | None = None


def quote_package(
    config: PackageConfiguration,
    role: Role,
    workshop_count: int,
    include_gala: bool,
    gala_price: Decimal,
    tier: PricingTier | None = None,
) -> PackageQuote:
    multiplier = config.couple_multiplier if Role(role).is_couple else Decimal("1")
    base = config.base_price * multiplier

    workshops = ZERO
    extra = workshop_count - config.included_workshops
    if extra > 0:
        custom = config.custom_workshop_pricing.get(workshop_count)
        if custom is not None:
            workshops = custom * multiplier
        else:
            workshops = extra * config.workshop_overage_price * multiplier

    gala = ZERO
    if include_gala and not config.includes_gala_dinner:
        gala = gala_price * multiplier

    subtotal = base + workshops + gala
    total = apply_tier(subtotal, tier).quantize(CENT, rounding=ROUND_HALF_UP)
    return PackageQuote(
        base=base,
        workshops=workshops,
        gala=gala,
        subtotal=subtotal,
        total=total,
        configuration=config,
        tier=tier,
    )
