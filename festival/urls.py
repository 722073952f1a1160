from django.urls import path

from festival.handlers import (
    ActivePricingTierView,
    AddonListView,
    AvailabilityView,
    CurrentEventView,
    PackageConfigurationListView,
    PaymentIntentView,
    PricePreviewView,
    PricingTierListView,
    QuoteView,
    RegistrationDetailView,
    RegistrationListView,
    RegistrationPaymentView,
    SetCurrentEventView,
    SocialEventListView,
    TableListView,
    WorkshopListView,
)

urlpatterns = [
    path("pricing/preview", PricePreviewView.as_view(), name="pricing-preview"),
    path("registrations", RegistrationListView.as_view(), name="registration-list"),
    path(
        "registrations/<str:registration_id>",
        RegistrationDetailView.as_view(),
        name="registration-detail",
    ),
    path(
        "registrations/<str:registration_id>/payment",
        RegistrationPaymentView.as_view(),
        name="registration-payment",
    ),
    path(
        "registrations/<str:registration_id>/payment-intent",
        PaymentIntentView.as_view(),
        name="registration-payment-intent",
    ),
    path(
        "availability/<str:kind>/<str:resource_id>",
        AvailabilityView.as_view(),
        name="resource-availability",
    ),
    path("events/current", CurrentEventView.as_view(), name="event-current"),
    path(
        "events/<str:event_id>/set-current",
        SetCurrentEventView.as_view(),
        name="event-set-current",
    ),
    path("events/<str:event_id>/workshops", WorkshopListView.as_view(), name="workshop-list"),
    path(
        "events/<str:event_id>/milongas",
        SocialEventListView.as_view(),
        name="social-event-list",
    ),
    path("events/<str:event_id>/tables", TableListView.as_view(), name="table-list"),
    path("events/<str:event_id>/addons", AddonListView.as_view(), name="addon-list"),
    path(
        "events/<str:event_id>/pricing-tiers",
        PricingTierListView.as_view(),
        name="pricing-tier-list",
    ),
    path(
        "events/<str:event_id>/active-pricing-tier",
        ActivePricingTierView.as_view(),
        name="active-pricing-tier",
    ),
    path(
        "events/<str:event_id>/package-configurations",
        PackageConfigurationListView.as_view(),
        name="package-configuration-list",
    ),
    path("events/<str:event_id>/quote", QuoteView.as_view(), name="package-quote"),
]
