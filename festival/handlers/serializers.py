"""Serializers for parsing requests and transforming domain models to API responses."""

from rest_framework import serializers

from festival.domain import (
    AddonId,
    AddonSelection,
    AttendeeInfo,
    EventId,
    PackageType,
    PaymentMethod,
    PaymentStatus,
    RegistrationDraft,
    Role,
    SocialEventId,
    WorkshopId,
)


def _choices(enum) -> list[str]:
    return [member.value for member in enum]


class AttendeeInfoSerializer(serializers.Serializer):
    first_name = serializers.CharField(min_length=1)
    last_name = serializers.CharField(min_length=1)
    email = serializers.EmailField()
    phone = serializers.CharField(min_length=1)
    country = serializers.CharField(min_length=1)
    level = serializers.CharField(min_length=1)


class AddonSelectionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    options = serializers.DictField(child=serializers.CharField(), required=False, default=dict)


class RegistrationDraftSerializer(serializers.Serializer):
    """Input for price previews and registration creation."""

    event_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    package_type = serializers.ChoiceField(choices=_choices(PackageType))
    role = serializers.ChoiceField(choices=_choices(Role))
    leader_info = AttendeeInfoSerializer(required=False, allow_null=True, default=None)
    follower_info = AttendeeInfoSerializer(required=False, allow_null=True, default=None)
    workshop_ids = serializers.ListField(child=serializers.UUIDField(), required=False, default=list)
    milonga_ids = serializers.ListField(child=serializers.UUIDField(), required=False, default=list)
    selected_table_number = serializers.IntegerField(
        min_value=1, required=False, allow_null=True, default=None
    )
    addons = AddonSelectionSerializer(many=True, required=False, default=list)
    payment_method = serializers.ChoiceField(
        choices=_choices(PaymentMethod), required=False, allow_null=True, default=None
    )

    def to_draft(self) -> RegistrationDraft:
        data = self.validated_data
        return RegistrationDraft(
            event_id=EventId(data["event_id"]) if data["event_id"] else None,
            package_type=PackageType(data["package_type"]),
            role=Role(data["role"]),
            leader_info=AttendeeInfo(**data["leader_info"]) if data["leader_info"] else None,
            follower_info=AttendeeInfo(**data["follower_info"]) if data["follower_info"] else None,
            workshop_ids=tuple(WorkshopId(value) for value in data["workshop_ids"]),
            social_event_ids=tuple(SocialEventId(value) for value in data["milonga_ids"]),
            table_number=data["selected_table_number"],
            addons=tuple(
                AddonSelection(
                    addon_id=AddonId(item["id"]),
                    quantity=item["quantity"],
                    options=dict(item.get("options") or {}),
                )
                for item in data["addons"]
            ),
            payment_method=PaymentMethod(data["payment_method"]) if data["payment_method"] else None,
        )


class PaymentUpdateSerializer(serializers.Serializer):
    payment_status = serializers.ChoiceField(choices=_choices(PaymentStatus))
    payment_intent_id = serializers.CharField(required=False, allow_null=True, default=None)


class QuoteRequestSerializer(serializers.Serializer):
    package_type = serializers.ChoiceField(choices=_choices(PackageType))
    role = serializers.ChoiceField(choices=_choices(Role))
    workshop_count = serializers.IntegerField(min_value=0, required=False, default=0)
    include_gala = serializers.BooleanField(required=False, default=False)


def _money(**kwargs):
    return serializers.DecimalField(max_digits=10, decimal_places=2, **kwargs)


class PriceBreakdownSerializer(serializers.Serializer):
    package = _money()
    workshops = _money()
    socials = _money()
    gala = _money()
    addons = _money()
    total = _money(source="total.amount")


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    year = serializers.IntegerField()
    venue = serializers.CharField()
    description = serializers.CharField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    registration_opens_at = serializers.DateTimeField()
    registration_closes_at = serializers.DateTimeField()
    is_active = serializers.BooleanField()
    is_current = serializers.BooleanField()


class AttendeeOutputSerializer(serializers.Serializer):
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.CharField()
    phone = serializers.CharField()
    country = serializers.CharField()
    level = serializers.CharField()


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    id = serializers.CharField()
    event_id = serializers.CharField()
    package_type = serializers.CharField(source="package_type.value")
    role = serializers.CharField(source="role.value")
    leader_info = AttendeeOutputSerializer(allow_null=True)
    follower_info = AttendeeOutputSerializer(allow_null=True)
    workshop_ids = serializers.ListField(child=serializers.CharField())
    milonga_ids = serializers.ListField(child=serializers.CharField(), source="social_event_ids")
    selected_table_number = serializers.IntegerField(source="table_number", allow_null=True)
    addons = serializers.SerializerMethodField()
    total_amount = _money(source="total_amount.amount")
    payment_method = serializers.SerializerMethodField()
    payment_status = serializers.CharField(source="payment_status.value")
    payment_intent_id = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()

    def get_addons(self, registration) -> list[dict]:
        return [
            {"id": str(item.addon_id), "quantity": item.quantity, "options": item.options}
            for item in registration.addons
        ]

    def get_payment_method(self, registration) -> str | None:
        return registration.payment_method.value if registration.payment_method else None


class EnrollmentSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    leaders = serializers.IntegerField()
    followers = serializers.IntegerField()


class WorkshopSerializer(serializers.Serializer):
    """Serializer for a Workshop with its derived enrollment."""

    id = serializers.CharField(source="workshop.id")
    title = serializers.CharField(source="workshop.title")
    instructor = serializers.CharField(source="workshop.instructor")
    level = serializers.CharField(source="workshop.level")
    date = serializers.DateField(source="workshop.date")
    time = serializers.CharField(source="workshop.time")
    capacity = serializers.IntegerField(source="workshop.capacity.value")
    leader_capacity = serializers.IntegerField(source="workshop.leader_capacity.value")
    follower_capacity = serializers.IntegerField(source="workshop.follower_capacity.value")
    enrollment = EnrollmentSerializer()


class SocialEventSerializer(serializers.Serializer):
    """Serializer for a SocialEvent with its derived enrollment."""

    id = serializers.CharField(source="social_event.id")
    name = serializers.CharField(source="social_event.name")
    kind = serializers.CharField(source="social_event.kind")
    date = serializers.DateField(source="social_event.date")
    time = serializers.CharField(source="social_event.time")
    venue = serializers.CharField(source="social_event.venue")
    price = _money(source="social_event.pricing.standard", allow_null=True)
    capacity = serializers.IntegerField(source="social_event.capacity.value")
    enrollment = EnrollmentSerializer()


class TableSerializer(serializers.Serializer):
    id = serializers.CharField()
    table_number = serializers.IntegerField()
    total_seats = serializers.IntegerField(source="total_seats.value")
    occupied_seats = serializers.IntegerField()
    available_seats = serializers.IntegerField()
    price = _money(source="pricing.standard", allow_null=True)
    early_bird_price = _money(source="pricing.early_bird", allow_null=True)
    is_vip = serializers.BooleanField()


class AddonSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    category = serializers.CharField()
    price = _money(source="price.amount")
    options = serializers.DictField()


class AvailabilitySerializer(serializers.Serializer):
    occupied = serializers.IntegerField()
    capacity = serializers.IntegerField()
    remaining = serializers.IntegerField()
    enforced = serializers.BooleanField()
    available = serializers.BooleanField()


class PricingTierSerializer(serializers.Serializer):
    id = serializers.CharField()
    event_id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    discount_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    discount_amount = _money()
    priority = serializers.IntegerField()
    is_active = serializers.BooleanField()


class PackageConfigurationSerializer(serializers.Serializer):
    id = serializers.CharField()
    event_id = serializers.CharField()
    package_type = serializers.CharField(source="package_type.value")
    name = serializers.CharField()
    base_price = _money()
    couple_multiplier = serializers.DecimalField(max_digits=3, decimal_places=2)
    included_workshops = serializers.IntegerField()
    includes_socials = serializers.BooleanField()
    includes_gala_dinner = serializers.BooleanField()
    workshop_overage_price = _money()
    custom_workshop_pricing = serializers.SerializerMethodField()
    is_active = serializers.BooleanField()
    sort_order = serializers.IntegerField()

    def get_custom_workshop_pricing(self, config) -> dict:
        return {str(count): f"{price:.2f}" for count, price in config.custom_workshop_pricing.items()}


class PackageQuoteSerializer(serializers.Serializer):
    base = _money()
    workshops = _money()
    gala = _money()
    subtotal = _money()
    total = _money()
    configuration = PackageConfigurationSerializer()
    tier = PricingTierSerializer(allow_null=True)


class PaymentIntentSerializer(serializers.Serializer):
    id = serializers.CharField()
    client_secret = serializers.CharField()
