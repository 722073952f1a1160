from django.contrib import admin

from festival import conf
from festival.models import (
    Addon,
    Event,
    PackageConfiguration,
    PricingTier,
    Registration,
    SocialEvent,
    Table,
    Workshop,
)
from festival.services.registration_service import RegistrationService


class PricingTierInline(admin.TabularInline):
    model = PricingTier
    extra = 0


class PackageConfigurationInline(admin.TabularInline):
    model = PackageConfiguration
    extra = 0


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "year", "venue", "is_current", "is_active"]
    search_fields = ["name", "venue"]
    inlines = [PricingTierInline, PackageConfigurationInline]


@admin.register(Workshop)
class WorkshopAdmin(admin.ModelAdmin):
    list_display = ["title", "instructor", "date", "time", "price", "capacity"]
    list_filter = ["event", "level"]


@admin.register(SocialEvent)
class SocialEventAdmin(admin.ModelAdmin):
    list_display = ["name", "kind", "date", "time", "price", "capacity"]
    list_filter = ["event", "kind"]


@admin.register(Table)
class TableAdmin(admin.ModelAdmin):
    list_display = ["table_number", "event", "occupied_seats", "total_seats", "is_vip", "is_active"]
    list_filter = ["event", "is_active"]
    # occupancy only changes through registrations
    readonly_fields = ["occupied_seats"]


@admin.register(Addon)
class AddonAdmin(admin.ModelAdmin):
    list_display = ["name", "category", "price"]
    list_filter = ["event", "category"]


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ["id", "package_type", "role", "total_amount", "payment_status", "created_at"]
    list_filter = ["event", "package_type", "payment_status"]
    # set by RegistrationService
    readonly_fields = [
        "role",
        "selected_table_number",
        "table",
        "workshop_ids",
        "milonga_ids",
        "addons",
        "total_amount",
        "created_at",
    ]

    def has_add_permission(self, request) -> bool:
        return False

    def delete_model(self, request, obj) -> None:
        RegistrationService(conf.build_store()).delete_registration(str(obj.pk))

    def delete_queryset(self, request, queryset) -> None:
        service = RegistrationService(conf.build_store())
        for registration_id in queryset.values_list("pk", flat=True):
            service.delete_registration(str(registration_id))
