"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction

PACKAGE_TYPE_CHOICES = [
    ("full", "Full package"),
    ("evening", "Evening package"),
    ("custom", "Custom package"),
    ("premium-accommodation-4nights", "Premium + 4 nights accommodation"),
    ("premium-accommodation-3nights", "Premium + 3 nights accommodation"),
]

ROLE_CHOICES = [
    ("leader", "Leader"),
    ("follower", "Follower"),
    ("couple", "Couple"),
]

PAYMENT_STATUS_CHOICES = [
    ("pending", "Pending"),
    ("completed", "Completed"),
    ("failed", "Failed"),
]

PAYMENT_METHOD_CHOICES = [
    ("stripe", "Stripe"),
    ("offline", "Offline"),
]


def price_field(**kwargs):
    return models.DecimalField(max_digits=10, decimal_places=2, **kwargs)


class Event(models.Model):
    """Persistence model for a festival edition with embedded pricing."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    year = models.PositiveIntegerField(
        unique=True, validators=[MinValueValidator(2020), MaxValueValidator(2100)]
    )
    description = models.TextField(blank=True, default="")
    venue = models.CharField(max_length=255)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    registration_open_date = models.DateTimeField()
    registration_close_date = models.DateTimeField()
    is_active = models.BooleanField(default=True)
    is_current = models.BooleanField(default=False)

    workshop_standard_price = price_field(default=0)
    workshop_early_bird_price = price_field(default=0)
    workshop_early_bird_end_date = models.DateTimeField(null=True, blank=True)

    full_package_standard_price = price_field(default=0)
    full_package_early_bird_price = price_field(default=0)
    full_package_early_bird_end_date = models.DateTimeField(null=True, blank=True)
    full_package_flash_price = price_field(default=0)
    full_package_flash_start_date = models.DateTimeField(null=True, blank=True)
    full_package_flash_end_date = models.DateTimeField(null=True, blank=True)

    evening_package_standard_price = price_field(default=0)
    evening_package_early_bird_price = price_field(default=0)
    evening_package_early_bird_end_date = models.DateTimeField(null=True, blank=True)
    evening_package_flash_price = price_field(default=0)
    evening_package_flash_start_date = models.DateTimeField(null=True, blank=True)
    evening_package_flash_end_date = models.DateTimeField(null=True, blank=True)

    accommodation_4_nights_single_price = price_field(default=0)
    accommodation_4_nights_double_price = price_field(default=0)
    accommodation_4_nights_early_bird_single_price = price_field(default=0)
    accommodation_4_nights_early_bird_double_price = price_field(default=0)
    accommodation_4_nights_early_bird_end_date = models.DateTimeField(null=True, blank=True)

    accommodation_3_nights_single_price = price_field(default=0)
    accommodation_3_nights_double_price = price_field(default=0)
    accommodation_3_nights_early_bird_single_price = price_field(default=0)
    accommodation_3_nights_early_bird_double_price = price_field(default=0)
    accommodation_3_nights_early_bird_end_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-year"]
        indexes = [
            models.Index(fields=["is_current"]),
        ]

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        # at most one current event
        with transaction.atomic():
            if self.is_current:
                Event.objects.filter(is_current=True).exclude(pk=self.pk).update(
                    is_current=False
                )
            super().save(*args, **kwargs)


class PricingTier(models.Model):
    """Persistence model for event-wide time-bounded promotions."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="pricing_tiers")
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    discount_amount = price_field(default=0, validators=[MinValueValidator(0)])
    is_active = models.BooleanField(default=True)
    priority = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-priority"]
        indexes = [
            models.Index(fields=["event", "is_active"]),
        ]

    def __str__(self) -> str:
        return f"{self.event.name} - {self.name}"


class PackageConfiguration(models.Model):
    """Persistence model for per-event package pricing rules."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(
        Event, on_delete=models.CASCADE, related_name="package_configurations"
    )
    package_type = models.CharField(max_length=50, choices=PACKAGE_TYPE_CHOICES)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    base_price = price_field(validators=[MinValueValidator(0)])
    couple_multiplier = models.DecimalField(
        max_digits=3, decimal_places=2, default=2, validators=[MinValueValidator(1)]
    )
    included_workshops = models.PositiveIntegerField(default=0)
    included_milongas = models.BooleanField(default=False)
    included_gala_dinner = models.BooleanField(default=False)
    workshop_overage_price = price_field(default=0, validators=[MinValueValidator(0)])
    custom_workshop_pricing = models.JSONField(default=dict, blank=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sort_order"]
        indexes = [
            models.Index(fields=["event", "package_type"]),
        ]

    def __str__(self) -> str:
        return f"{self.event.name} - {self.name}"


class Workshop(models.Model):
    """Persistence model for workshops. Enrollment is derived, never stored."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="workshops")
    title = models.CharField(max_length=255)
    instructor = models.CharField(max_length=255)
    level = models.CharField(max_length=50)
    description = models.TextField(blank=True, default="")
    date = models.DateField()
    time = models.CharField(max_length=20)
    price = price_field()
    early_bird_price = price_field(default=0)
    early_bird_end_date = models.DateTimeField(null=True, blank=True)
    capacity = models.PositiveIntegerField()
    leader_capacity = models.PositiveIntegerField()
    follower_capacity = models.PositiveIntegerField()

    class Meta:
        ordering = ["date", "time"]
        indexes = [
            models.Index(fields=["event", "date", "time"]),
        ]

    def __str__(self) -> str:
        return f"{self.title} - {self.date} {self.time}"


class SocialEvent(models.Model):
    """Persistence model for milongas. Enrollment is derived, never stored."""

    KIND_CHOICES = [
        ("regular", "Regular"),
        ("gala", "Gala"),
        ("desert", "Desert"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="social_events")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    date = models.DateField()
    time = models.CharField(max_length=20)
    venue = models.CharField(max_length=255)
    kind = models.CharField(max_length=20, choices=KIND_CHOICES, default="regular")
    price = price_field()
    early_bird_price = price_field(default=0)
    early_bird_end_date = models.DateTimeField(null=True, blank=True)
    capacity = models.PositiveIntegerField()

    class Meta:
        ordering = ["date", "time"]

    def __str__(self) -> str:
        return self.name


class Table(models.Model):
    """Persistence model for gala dinner tables.

    ``occupied_seats`` is stored and only changed through the store's
    serialized occupancy adjustment.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="tables")
    table_number = models.PositiveIntegerField()
    total_seats = models.PositiveIntegerField(default=6)
    occupied_seats = models.PositiveIntegerField(default=0)
    is_vip = models.BooleanField(default=False)
    price = price_field()
    early_bird_price = price_field(default=0)
    early_bird_end_date = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["table_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "table_number"],
                condition=models.Q(is_active=True),
                name="unique_active_table_number",
            ),
            models.CheckConstraint(
                condition=models.Q(occupied_seats__lte=models.F("total_seats")),
                name="occupied_seats_within_total",
            ),
        ]

    def __str__(self) -> str:
        return f"Table {self.table_number} ({self.occupied_seats}/{self.total_seats})"


class Addon(models.Model):
    """Persistence model for purchasable extras."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="addons")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = price_field()
    category = models.CharField(max_length=50)
    options = models.JSONField(default=dict, blank=True)

    def __str__(self) -> str:
        return self.name


class Registration(models.Model):
    """Persistence model for one purchase by a solo attendee or a couple."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    package_type = models.CharField(max_length=50, choices=PACKAGE_TYPE_CHOICES)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES)
    leader_info = models.JSONField(null=True, blank=True)
    follower_info = models.JSONField(null=True, blank=True)
    workshop_ids = models.JSONField(default=list, blank=True)
    milonga_ids = models.JSONField(default=list, blank=True)
    selected_table_number = models.PositiveIntegerField(null=True, blank=True)
    table = models.ForeignKey(
        Table,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="registrations",
    )
    addons = models.JSONField(default=list, blank=True)
    total_amount = price_field()
    payment_method = models.CharField(
        max_length=20, choices=PAYMENT_METHOD_CHOICES, null=True, blank=True
    )
    payment_status = models.CharField(
        max_length=20, choices=PAYMENT_STATUS_CHOICES, default="pending"
    )
    stripe_payment_intent_id = models.CharField(max_length=255, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["event", "created_at"]),
        ]

    def __str__(self) -> str:
        return f"Registration {self.id} - {self.package_type} ({self.role})"
