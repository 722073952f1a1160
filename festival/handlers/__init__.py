from festival.handlers.views import (
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

__all__ = [
    "ActivePricingTierView",
    "AddonListView",
    "AvailabilityView",
    "CurrentEventView",
    "PackageConfigurationListView",
    "PaymentIntentView",
    "PricePreviewView",
    "PricingTierListView",
    "QuoteView",
    "RegistrationDetailView",
    "RegistrationListView",
    "RegistrationPaymentView",
    "SetCurrentEventView",
    "SocialEventListView",
    "TableListView",
    "WorkshopListView",
]
