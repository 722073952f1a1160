"""Typed access to the ``FESTIVAL`` settings block."""

import functools
from decimal import Decimal

from django.conf import settings
from django.utils.module_loading import import_string

from festival.domain.packages import INCLUDED_WORKSHOP_LIMIT
from festival.domain.value_objects import ResourceKind

DEFAULTS = {
    "INCLUDED_WORKSHOP_LIMIT": INCLUDED_WORKSHOP_LIMIT,
    "ENFORCE_CAPACITY": {
        ResourceKind.WORKSHOP.value: False,
        ResourceKind.SOCIAL.value: False,
        ResourceKind.TABLE.value: True,
    },
    "CURRENCY": "aed",
    "QUOTE_GALA_PRICE": "200.00",
    "STORE_BACKEND": "festival.stores.django_store.DjangoFestivalStore",
    "PAYMENT_GATEWAY": "festival.payments.StripePaymentGateway",
    "STRIPE_SECRET_KEY": "",
    "OCCUPANCY_CAS_RETRIES": 3,
}


def festival_setting(name: str):
    configured = getattr(settings, "FESTIVAL", {})
    return configured.get(name, DEFAULTS[name])


def included_workshop_limit() -> int:
    return int(festival_setting("INCLUDED_WORKSHOP_LIMIT"))


def enforces_capacity(kind: ResourceKind) -> bool:
    flags = {**DEFAULTS["ENFORCE_CAPACITY"], **festival_setting("ENFORCE_CAPACITY")}
    return bool(flags[ResourceKind(kind).value])


def currency() -> str:
    return festival_setting("CURRENCY")


def quote_gala_price() -> Decimal:
    return Decimal(str(festival_setting("QUOTE_GALA_PRICE")))


def occupancy_cas_retries() -> int:
    return int(festival_setting("OCCUPANCY_CAS_RETRIES"))


@functools.cache
def _instantiate(dotted_path: str):
    return import_string(dotted_path)()


def build_store():
    """Return the configured store; one shared instance per backend path."""
    return _instantiate(festival_setting("STORE_BACKEND"))


def build_payment_gateway():
    return import_string(festival_setting("PAYMENT_GATEWAY"))()
