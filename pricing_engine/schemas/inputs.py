"""Operator-entered quote inputs per service line.

Validation here never rejects a form: quantities coerce to non-negative
numbers and unknown enum values fall back to their defaults.
"""
import math
from enum import Enum
from typing import Annotated, Any, Callable, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pricing_engine.core.enums import (
    DrainInstallFrequency,
    KitchenSize,
    Location,
    PatioMode,
    RateTier,
    RefreshPricingMethod,
    SaniCleanPricingMode,
    SoapType,
    SprayPricingMethod,
    StripWaxVariant,
)
from pricing_engine.utils.numbers import to_count, to_quantity

_TRUTHY = {"1", "true", "yes", "y", "on"}

# Fields that do not affect pricing and so never invalidate overrides.
NON_PRICING_FIELDS = frozenset({"notes"})


def _to_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    if isinstance(value, (int, float)):
        return math.isfinite(value) and value != 0
    return bool(value)


def _to_amount(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _to_months(value: Any) -> Optional[int]:
    months = to_quantity(value)
    return int(months) if months >= 1 else None


def _enum_or(default: Enum) -> Callable[[Any], Enum]:
    enum_cls = type(default)
    lookup = {member.value.lower(): member for member in enum_cls}
    lookup.update({member.name.lower(): member for member in enum_cls})

    def coerce(value: Any) -> Enum:
        if isinstance(value, enum_cls):
            return value
        key = str(value or "").strip().lower().replace("-", "").replace(" ", "")
        return lookup.get(key, default)

    return coerce


def _rate_tier(value: Any) -> RateTier:
    aliases = {"redrate": RateTier.STANDARD, "red": RateTier.STANDARD,
               "greenrate": RateTier.PREMIUM, "green": RateTier.PREMIUM}
    key = str(value or "").strip().lower()
    return aliases.get(key) or _enum_or(RateTier.STANDARD)(value)


Quantity = Annotated[float, BeforeValidator(to_quantity)]
Count = Annotated[int, BeforeValidator(to_count)]
Flag = Annotated[bool, BeforeValidator(_to_flag)]
Amount = Annotated[float, BeforeValidator(_to_amount)]


class InputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class CustomLineItem(InputModel):
    label: str = ""
    amount: Amount = 0.0


class QuoteInputs(InputModel):
    frequency: str = "monthly"
    include_install: Flag = False
    dirty_install: Flag = False
    trip_charge_included: Flag = True
    needs_parking: Flag = False
    location: Annotated[Location, BeforeValidator(_enum_or(Location.INSIDE_BELTWAY))] = Location.INSIDE_BELTWAY
    rate_tier: Annotated[RateTier, BeforeValidator(_rate_tier)] = RateTier.STANDARD
    contract_months: Annotated[Optional[int], BeforeValidator(_to_months)] = None
    custom_line_items: List[CustomLineItem] = Field(default_factory=list)
    notes: str = ""


class SaniCleanInputs(QuoteInputs):
    frequency: str = "weekly"
    sinks: Count = 0
    urinals: Count = 0
    male_toilets: Count = 0
    female_toilets: Count = 0
    pricing_mode: Annotated[
        SaniCleanPricingMode, BeforeValidator(_enum_or(SaniCleanPricingMode.PER_ITEM))
    ] = SaniCleanPricingMode.PER_ITEM
    soap_type: Annotated[SoapType, BeforeValidator(_enum_or(SoapType.STANDARD))] = SoapType.STANDARD
    luxury_upgrade_dispensers: Count = 0
    excess_soap_gallons: Quantity = 0.0
    microfiber_bathrooms: Count = 0
    warranty_dispensers: Count = 0
    estimated_paper_spend: Quantity = 0.0
    urinal_screens: Count = 0
    urinal_mats: Count = 0
    toilet_clips: Count = 0
    seat_cover_dispensers: Count = 0
    sanipods: Count = 0


class SaniScrubInputs(QuoteInputs):
    fixture_count: Count = 0
    non_bathroom_sqft: Quantity = 0.0
    use_exact_sqft: Flag = False
    bundled_with_saniclean: Flag = False


class RpmWindowsInputs(QuoteInputs):
    small_windows: Count = 0
    medium_windows: Count = 0
    large_windows: Count = 0


class FoamingDrainInputs(QuoteInputs):
    frequency: str = "weekly"
    standard_drains: Count = 0
    install_drains: Count = 0
    filthy_drains: Count = 0
    grease_traps: Count = 0
    green_drains: Count = 0
    plumbing_drains: Count = 0
    install_frequency: Annotated[
        DrainInstallFrequency, BeforeValidator(_enum_or(DrainInstallFrequency.WEEKLY))
    ] = DrainInstallFrequency.WEEKLY
    use_small_alt_pricing: Flag = False
    use_big_account_rate: Flag = False
    all_inclusive: Flag = False
    charge_grease_trap_install: Flag = True
    charge_green_drain_install: Flag = True


class GreaseTrapInputs(QuoteInputs):
    trap_count: Count = 0
    trap_gallons: Quantity = 0.0


class MicrofiberMoppingInputs(QuoteInputs):
    frequency: str = "weekly"
    bathroom_count: Count = 0
    huge_bathroom_sqft: Quantity = 0.0
    extra_area_sqft: Quantity = 0.0
    standalone_sqft: Quantity = 0.0
    use_exact_sqft: Flag = False


class JanitorialInputs(QuoteInputs):
    frequency: str = "weekly"
    hours_per_visit: Quantity = 0.0
    short_job: Flag = False


class CarpetCleaningInputs(QuoteInputs):
    area_sqft: Quantity = 0.0
    use_exact_sqft: Flag = False


class ElectrostaticSprayInputs(QuoteInputs):
    frequency: str = "weekly"
    pricing_method: Annotated[
        SprayPricingMethod, BeforeValidator(_enum_or(SprayPricingMethod.BY_ROOM))
    ] = SprayPricingMethod.BY_ROOM
    room_count: Count = 0
    area_sqft: Quantity = 0.0
    use_exact_sqft: Flag = False
    combined_with_saniclean: Flag = False


class StripWaxInputs(QuoteInputs):
    frequency: str = "weekly"
    floor_sqft: Quantity = 0.0
    variant: Annotated[
        StripWaxVariant, BeforeValidator(_enum_or(StripWaxVariant.STANDARD_FULL))
    ] = StripWaxVariant.STANDARD_FULL


class SaniPodInputs(QuoteInputs):
    frequency: str = "weekly"
    pod_count: Count = 0
    extra_bags: Count = 0
    extra_bags_recurring: Flag = True


class RefreshAreaInputs(InputModel):
    included: Flag = False
    pricing_method: Annotated[
        RefreshPricingMethod, BeforeValidator(_enum_or(RefreshPricingMethod.AREA_SPECIFIC))
    ] = RefreshPricingMethod.AREA_SPECIFIC
    workers: Count = 2
    hours: Quantity = 0.0
    inside_sqft: Quantity = 0.0
    outside_sqft: Quantity = 0.0
    kitchen_size: Annotated[KitchenSize, BeforeValidator(_enum_or(KitchenSize.LARGE))] = KitchenSize.LARGE
    patio_mode: Annotated[PatioMode, BeforeValidator(_enum_or(PatioMode.STANDALONE))] = PatioMode.STANDALONE


class RefreshPowerScrubInputs(QuoteInputs):
    frequency: str = "oneTime"
    dumpster: RefreshAreaInputs = Field(default_factory=RefreshAreaInputs)
    patio: RefreshAreaInputs = Field(default_factory=RefreshAreaInputs)
    walkway: RefreshAreaInputs = Field(default_factory=RefreshAreaInputs)
    front_of_house: RefreshAreaInputs = Field(default_factory=RefreshAreaInputs)
    back_of_house: RefreshAreaInputs = Field(default_factory=RefreshAreaInputs)
    other: RefreshAreaInputs = Field(default_factory=RefreshAreaInputs)
