"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from festival import conf
from festival.domain import PackageType, Role
from festival.domain.errors import DomainError, ErrorCode
from festival.handlers.serializers import (
    AddonSerializer,
    AvailabilitySerializer,
    EventSerializer,
    PackageConfigurationSerializer,
    PackageQuoteSerializer,
    PaymentIntentSerializer,
    PaymentUpdateSerializer,
    PriceBreakdownSerializer,
    PricingTierSerializer,
    QuoteRequestSerializer,
    RegistrationDraftSerializer,
    RegistrationSerializer,
    SocialEventSerializer,
    TableSerializer,
    WorkshopSerializer,
)
from festival.services.event_service import EventService, parse_event_id
from festival.services.inventory_service import InventoryService
from festival.services.payment_service import PaymentService
from festival.services.pricing_service import PricingService
from festival.services.promotion_service import PromotionService
from festival.services.registration_service import RegistrationService

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SCHEDULE_CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorCode.OCCUPANCY_UNDERFLOW: status.HTTP_409_CONFLICT,
    ErrorCode.CONCURRENT_UPDATE: status.HTTP_409_CONFLICT,
    ErrorCode.CONFIGURATION_MISSING: status.HTTP_404_NOT_FOUND,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.REGISTRATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PAYMENT_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


class DomainAPIView(APIView):
    """APIView that turns domain errors into JSON error responses."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            logger.info("Request rejected: %s", exc)
            return error_response(exc)
        return super().handle_exception(exc)


class PricePreviewView(DomainAPIView):
    """Handler for POST /api/pricing/preview"""

    def post(self, request: Request) -> Response:
        serializer = RegistrationDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        breakdown = PricingService(conf.build_store()).compute_total(serializer.to_draft())
        return Response(PriceBreakdownSerializer(breakdown).data)


class RegistrationListView(DomainAPIView):
    """Handler for /api/registrations"""

    def get(self, request: Request) -> Response:
        event_id = request.query_params.get("event_id")
        registrations = RegistrationService(conf.build_store()).list_registrations(
            parse_event_id(event_id) if event_id else None
        )
        return Response(RegistrationSerializer(registrations, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = RegistrationDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registration = RegistrationService(conf.build_store()).create_registration(
            serializer.to_draft()
        )
        return Response(RegistrationSerializer(registration).data, status=status.HTTP_201_CREATED)


class RegistrationDetailView(DomainAPIView):
    """Handler for /api/registrations/{registration_id}"""

    def get(self, request: Request, registration_id: str) -> Response:
        registration = RegistrationService(conf.build_store()).get_registration(registration_id)
        return Response(RegistrationSerializer(registration).data)

    def delete(self, request: Request, registration_id: str) -> Response:
        RegistrationService(conf.build_store()).delete_registration(registration_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RegistrationPaymentView(DomainAPIView):
    """Handler for POST /api/registrations/{registration_id}/payment"""

    def post(self, request: Request, registration_id: str) -> Response:
        serializer = PaymentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registration = RegistrationService(conf.build_store()).record_payment(
            registration_id,
            serializer.validated_data["payment_status"],
            serializer.validated_data["payment_intent_id"],
        )
        return Response(RegistrationSerializer(registration).data)


class PaymentIntentView(DomainAPIView):
    """Handler for POST /api/registrations/{registration_id}/payment-intent"""

    def post(self, request: Request, registration_id: str) -> Response:
        service = PaymentService(conf.build_store(), conf.build_payment_gateway())
        intent = service.create_payment_intent(registration_id)
        return Response(PaymentIntentSerializer(intent).data, status=status.HTTP_201_CREATED)


class AvailabilityView(DomainAPIView):
    """Handler for GET /api/availability/{kind}/{resource_id}"""

    def get(self, request: Request, kind: str, resource_id: str) -> Response:
        event_id = request.query_params.get("event_id")
        availability = InventoryService(conf.build_store()).get_resource_availability(
            kind,
            resource_id,
            parse_event_id(event_id) if event_id else None,
        )
        return Response(AvailabilitySerializer(availability).data)


class WorkshopListView(DomainAPIView):
    """Handler for GET /api/events/{event_id}/workshops"""

    def get(self, request: Request, event_id: str) -> Response:
        workshops = InventoryService(conf.build_store()).list_workshops(parse_event_id(event_id))
        return Response(WorkshopSerializer(workshops, many=True).data)


class SocialEventListView(DomainAPIView):
    """Handler for GET /api/events/{event_id}/milongas"""

    def get(self, request: Request, event_id: str) -> Response:
        socials = InventoryService(conf.build_store()).list_social_events(parse_event_id(event_id))
        return Response(SocialEventSerializer(socials, many=True).data)


class TableListView(DomainAPIView):
    """Handler for GET /api/events/{event_id}/tables"""

    def get(self, request: Request, event_id: str) -> Response:
        tables = InventoryService(conf.build_store()).list_tables(parse_event_id(event_id))
        return Response(TableSerializer(tables, many=True).data)


class AddonListView(DomainAPIView):
    """Handler for GET /api/events/{event_id}/addons"""

    def get(self, request: Request, event_id: str) -> Response:
        addons = EventService(conf.build_store()).list_addons(parse_event_id(event_id))
        return Response(AddonSerializer(addons, many=True).data)


class CurrentEventView(DomainAPIView):
    """Handler for GET /api/events/current"""

    def get(self, request: Request) -> Response:
        event = EventService(conf.build_store()).get_current_event()
        return Response(EventSerializer(event).data)


class SetCurrentEventView(DomainAPIView):
    """Handler for PUT /api/events/{event_id}/set-current"""

    def put(self, request: Request, event_id: str) -> Response:
        event = EventService(conf.build_store()).set_current_event(event_id)
        return Response(EventSerializer(event).data)


class ActivePricingTierView(DomainAPIView):
    """Handler for GET /api/events/{event_id}/active-pricing-tier"""

    def get(self, request: Request, event_id: str) -> Response:
        tier = PromotionService(conf.build_store()).get_active_tier(parse_event_id(event_id))
        if tier is None:
            return Response(None)
        return Response(PricingTierSerializer(tier).data)


class PricingTierListView(DomainAPIView):
    """Handler for GET /api/events/{event_id}/pricing-tiers"""

    def get(self, request: Request, event_id: str) -> Response:
        tiers = PromotionService(conf.build_store()).list_pricing_tiers(parse_event_id(event_id))
        return Response(PricingTierSerializer(tiers, many=True).data)


class PackageConfigurationListView(DomainAPIView):
    """Handler for GET /api/events/{event_id}/package-configurations"""

    def get(self, request: Request, event_id: str) -> Response:
        configs = PromotionService(conf.build_store()).list_package_configurations(
            parse_event_id(event_id)
        )
        return Response(PackageConfigurationSerializer(configs, many=True).data)


class QuoteView(DomainAPIView):
    """Handler for POST /api/events/{event_id}/quote"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = QuoteRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        quote = PromotionService(conf.build_store()).quote(
            parse_event_id(event_id),
            PackageType(data["package_type"]),
            Role(data["role"]),
            data["workshop_count"],
            data["include_gala"],
        )
        return Response(PackageQuoteSerializer(quote).data)
