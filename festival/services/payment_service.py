"""Payment service - hands a committed registration's total to the processor."""

import logging
from decimal import Decimal

from festival import conf
from festival.domain import RegistrationId
from festival.domain.errors import InvalidIdError, RegistrationNotFoundError, ValidationError
from festival.payments import PaymentGateway, PaymentIntent
from festival.stores.interfaces import FestivalStore

logger = logging.getLogger(__name__)

MINOR_UNITS = Decimal("100")


class PaymentService:
    """Service for creating payment intents."""

    def __init__(self, store: FestivalStore, gateway: PaymentGateway) -> None:
        self._store = store
        self._gateway = gateway

    def create_payment_intent(self, registration_id: str) -> PaymentIntent:
        """Create a payment intent for the registration's stored total.

        Raises:
            InvalidIdError: If the registration_id is not a valid UUID.
            RegistrationNotFoundError: If the registration does not exist.
            ValidationError: If the registration total is not payable.
            PaymentError: If the processor rejects the request.
        """
        try:
            parsed = RegistrationId.from_string(registration_id)
        except ValueError as exc:
            raise InvalidIdError() from exc
        registration = self._store.get_registration(parsed)
        if registration is None:
            raise RegistrationNotFoundError()
        if registration.total_amount.amount <= 0:
            raise ValidationError("Registration total is invalid")

        amount_minor = int((registration.total_amount.amount * MINOR_UNITS).to_integral_value())
        intent = self._gateway.create_payment_intent(
            amount_minor,
            conf.currency(),
            {"registrationId": str(registration.id)},
        )
        self._store.update_payment(parsed, payment_intent_id=intent.id)
        logger.info(
            "Payment intent created",
            extra={"registration_id": str(registration.id), "total_amount": str(registration.total_amount)},
        )
        return intent
