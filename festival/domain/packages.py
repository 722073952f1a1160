"""Inclusion rules per package type."""

from dataclasses import dataclass

from festival.domain.value_objects import PackageType

INCLUDED_WORKSHOP_LIMIT = 6


@dataclass(frozen=True)
class PackageRules:
    """What a package bundles and how its own price is derived."""

    includes_workshops: bool
    includes_socials: bool
    includes_dinner: bool
    accommodation_nights: int | None = None

    @property
    def is_accommodation(self) -> bool:
        return self.accommodation_nights is not None

    @property
    def is_priced(self) -> bool:
        # the custom package has no package price of its own
        return self.includes_socials


PACKAGE_RULES: dict[PackageType, PackageRules] = {
    PackageType.FULL: PackageRules(
        includes_workshops=True, includes_socials=True, includes_dinner=True
    ),
    PackageType.EVENING: PackageRules(
        includes_workshops=False, includes_socials=True, includes_dinner=True
    ),
    PackageType.CUSTOM: PackageRules(
        includes_workshops=False, includes_socials=False, includes_dinner=False
    ),
    PackageType.PREMIUM_4_NIGHTS: PackageRules(
        includes_workshops=True,
        includes_socials=True,
        includes_dinner=True,
        accommodation_nights=4,
    ),
    PackageType.PREMIUM_3_NIGHTS: PackageRules(
        includes_workshops=True,
        includes_socials=True,
        includes_dinner=True,
        accommodation_nights=3,
    ),
}


def rules_for(package_type: PackageType) -> PackageRules:
    return PACKAGE_RULES[PackageType(package_type)]
