"""Payment processor collaborators."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import stripe

from festival import conf
from festival.domain.errors import PaymentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentIntent:
    id: str
    client_secret: str


class PaymentGateway(ABC):
    """Interface for the external payment processor."""

    @abstractmethod
    def create_payment_intent(
        self, amount_minor: int, currency: str, metadata: dict
    ) -> PaymentIntent:
        """Create a payment intent for ``amount_minor`` (cents/fils)."""
        ...


class StripePaymentGateway(PaymentGateway):
    """Stripe-backed payment gateway."""

    def __init__(self, api_key: str | None = None) -> None:
        self._api_key = api_key or conf.festival_setting("STRIPE_SECRET_KEY")

    def create_payment_intent(
        self, amount_minor: int, currency: str, metadata: dict
    ) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount_minor,
                currency=currency,
                metadata=metadata,
                api_key=self._api_key,
            )
        except stripe.StripeError as exc:
            logger.exception("Stripe payment intent creation failed")
            raise PaymentError("Payment processor rejected the request") from exc
        return PaymentIntent(id=intent.id, client_secret=intent.client_secret)
