"""Validated pricing configuration documents, one model per service line.

Every field carries its compiled-in default, so ``SaniCleanConfig()`` is the
fallback configuration and a partial remote document is completed from the
same defaults. Remote documents use camelCase keys.
"""
from typing import Annotated, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pricing_engine.core.config import settings

Money = Annotated[float, Field(ge=0, allow_inf_nan=False)]
Positive = Annotated[float, Field(gt=0, allow_inf_nan=False)]


class ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class FrequencyMeta(ConfigModel):
    monthly_multiplier: Optional[Money] = Field(
        default=None,
        validation_alias=AliasChoices(
            "monthlyMultiplier", "monthlyRecurringMultiplier", "monthly_multiplier"
        ),
    )
    cycle_months: Optional[Money] = None


class InstallMultipliers(ConfigModel):
    elevated: Money = Field(default=3.0, validation_alias=AliasChoices("elevated", "dirty"))
    standard: Money = Field(default=1.0, validation_alias=AliasChoices("standard", "clean"))


class RateTiers(ConfigModel):
    standard: Positive = Field(default=1.0, validation_alias=AliasChoices("standard", "redRate"))
    premium: Positive = Field(default=1.3, validation_alias=AliasChoices("premium", "greenRate"))


class ContractTerms(ConfigModel):
    min_months: int = Field(default=2, ge=1)
    max_months: int = Field(default=36, ge=1)
    default_months: int = Field(default_factory=lambda: settings.DEFAULT_CONTRACT_MONTHS, ge=1)


class RateMinimum(ConfigModel):
    rate: Money
    minimum: Money = 0.0


class BlockRates(ConfigModel):
    block_unit: Positive = 500.0
    first_block_rate: Money = 250.0
    additional_block_rate: Money = 125.0


def default_frequency_metadata() -> Dict[str, FrequencyMeta]:
    return {
        "oneTime": FrequencyMeta(monthly_multiplier=0.0),
        "weekly": FrequencyMeta(monthly_multiplier=4.33),
        "biweekly": FrequencyMeta(monthly_multiplier=2.165),
        "twicePerMonth": FrequencyMeta(monthly_multiplier=2.0),
        "monthly": FrequencyMeta(cycle_months=1),
        "bimonthly": FrequencyMeta(cycle_months=2),
        "quarterly": FrequencyMeta(cycle_months=3),
        "biannual": FrequencyMeta(cycle_months=6),
        "annual": FrequencyMeta(cycle_months=12),
    }


class ServiceConfig(ConfigModel):
    frequency_metadata: Dict[str, FrequencyMeta] = Field(default_factory=default_frequency_metadata)
    install_multipliers: InstallMultipliers = Field(default_factory=InstallMultipliers)
    rate_tiers: RateTiers = Field(default_factory=RateTiers)
    contract: ContractTerms = Field(default_factory=ContractTerms)


# --- SaniClean ---------------------------------------------------------------

class RegionRates(ConfigModel):
    rate_per_fixture: Money
    weekly_minimum: Money = 0.0
    trip_charge: Money = 8.0
    parking_fee: Money = 0.0


class SmallFacility(ConfigModel):
    max_fixtures: int = 5
    minimum: Money = 50.0


class AllInclusivePackage(ConfigModel):
    rate_per_fixture: Money = 20.0
    paper_credit_per_fixture: Money = 5.0


class SoapRates(ConfigModel):
    luxury_upgrade_per_dispenser: Money = 5.0
    excess_standard_per_gallon: Money = 13.0
    excess_luxury_per_gallon: Money = 30.0


class FacilityComponentRates(ConfigModel):
    urinal_screen: Money = 8.0
    urinal_mat: Money = 8.0
    toilet_clip: Money = 2.0
    seat_cover_dispenser: Money = 2.0
    sanipod: Money = 4.0


class SaniCleanConfig(ServiceConfig):
    inside_beltway: RegionRates = Field(
        default_factory=lambda: RegionRates(
            rate_per_fixture=7.0, weekly_minimum=40.0, trip_charge=8.0, parking_fee=7.0
        )
    )
    outside_beltway: RegionRates = Field(
        default_factory=lambda: RegionRates(rate_per_fixture=6.0, trip_charge=8.0)
    )
    small_facility: SmallFacility = Field(default_factory=SmallFacility)
    all_inclusive: AllInclusivePackage = Field(default_factory=AllInclusivePackage)
    soap: SoapRates = Field(default_factory=SoapRates)
    microfiber_per_bathroom: Money = 10.0
    warranty_per_dispenser: Money = 1.0
    facility_components: FacilityComponentRates = Field(default_factory=FacilityComponentRates)


# --- SaniScrub ---------------------------------------------------------------

def _saniscrub_fixture_rates() -> Dict[str, RateMinimum]:
    return {
        "monthly": RateMinimum(rate=25.0, minimum=175.0),
        "twicePerMonth": RateMinimum(rate=25.0, minimum=175.0),
        "bimonthly": RateMinimum(rate=35.0, minimum=250.0),
        "quarterly": RateMinimum(rate=40.0, minimum=250.0),
    }


class SaniScrubConfig(ServiceConfig):
    fixture_rates: Dict[str, RateMinimum] = Field(default_factory=_saniscrub_fixture_rates)
    non_bathroom: BlockRates = Field(default_factory=BlockRates)
    twice_per_month_discount: Money = 15.0
    trip_charge: Money = 0.0
    parking_fee: Money = 0.0


# --- RPM Windows ---------------------------------------------------------------

class WindowRates(ConfigModel):
    small: Money = 1.5
    medium: Money = 3.0
    large: Money = 7.0


def _window_frequency_multipliers() -> Dict[str, Money]:
    return {"weekly": 1.0, "biweekly": 1.25, "monthly": 1.25, "quarterly": 2.0}


class RpmWindowsConfig(ServiceConfig):
    window_rates: WindowRates = Field(default_factory=WindowRates)
    trip_charge: Money = 8.0
    frequency_multipliers: Dict[str, Money] = Field(default_factory=_window_frequency_multipliers)


# --- Foaming Drain ---------------------------------------------------------------

class VolumePricing(ConfigModel):
    minimum_drains: int = 10
    weekly_rate_per_drain: Money = 20.0
    bimonthly_rate_per_drain: Money = 10.0


class FoamingDrainConfig(ServiceConfig):
    standard_rate_per_drain: Money = 10.0
    alt_base_charge: Money = 20.0
    alt_rate_per_drain: Money = 4.0
    volume_pricing: VolumePricing = Field(default_factory=VolumePricing)
    plumbing_rate_per_drain: Money = 10.0
    grease_trap_weekly_rate: Money = 125.0
    grease_trap_install_rate: Money = 300.0
    green_drain_weekly_rate: Money = 5.0
    green_drain_install_rate: Money = 100.0
    minimum_per_visit: Money = 50.0


# --- Grease Trap ---------------------------------------------------------------

class GreaseTrapConfig(ServiceConfig):
    per_trap_rate: Money = 125.0
    per_gallon_rate: Money = 0.5
    minimum_per_visit: Money = 0.0


# --- Microfiber Mopping ---------------------------------------------------------------

class MicrofiberMoppingConfig(ServiceConfig):
    bundled_rate_per_bathroom: Money = 10.0
    huge_bathroom_unit_sqft: Positive = 300.0
    huge_bathroom_rate_per_unit: Money = 10.0
    extra_area_unit_sqft: Positive = 400.0
    extra_area_rate_per_unit: Money = 10.0
    extra_area_minimum: Money = 100.0
    standalone_unit_sqft: Positive = 200.0
    standalone_rate_per_unit: Money = 10.0
    standalone_minimum: Money = 40.0


# --- Pure janitorial add-ons ---------------------------------------------------------------

class JanitorialConfig(ServiceConfig):
    hourly_rate: Money = 30.0
    short_job_hourly_rate: Money = 50.0
    minimum_hours_per_visit: Money = 4.0


# --- Carpet cleaning ---------------------------------------------------------------

class CarpetCleaningConfig(ServiceConfig):
    area: BlockRates = Field(default_factory=BlockRates)
    per_visit_minimum: Money = 250.0


# --- Electrostatic spray ---------------------------------------------------------------

class ElectrostaticSprayConfig(ServiceConfig):
    rate_per_room: Money = 20.0
    sqft_unit: Positive = 1000.0
    rate_per_sqft_unit: Money = 50.0
    inside_beltway_trip_charge: Money = 10.0
    outside_beltway_trip_charge: Money = 0.0


# --- Strip & Wax ---------------------------------------------------------------

def _strip_wax_variants() -> Dict[str, RateMinimum]:
    return {
        "standardFull": RateMinimum(rate=0.75, minimum=550.0),
        "noSealant": RateMinimum(rate=0.70, minimum=550.0),
        "wellMaintained": RateMinimum(rate=0.40, minimum=400.0),
    }


class StripWaxConfig(ServiceConfig):
    variants: Dict[str, RateMinimum] = Field(default_factory=_strip_wax_variants)


# --- SaniPod ---------------------------------------------------------------

class SaniPodConfig(ServiceConfig):
    rate_per_pod: Money = 8.0
    alt_rate_per_pod: Money = 3.0
    alt_base_charge: Money = 40.0
    extra_bag_price: Money = 2.0
    install_rate_per_pod: Money = 25.0


# --- Refresh Power Scrub ---------------------------------------------------------------

class KitchenRates(ConfigModel):
    small_medium: Money = 1500.0
    large: Money = 2500.0


class PatioRates(ConfigModel):
    standalone: Money = 875.0
    upsell: Money = 500.0


class RefreshPowerScrubConfig(ServiceConfig):
    hourly_rate: Money = 200.0
    trip_charge: Money = 75.0
    minimum_visit: Money = 475.0
    kitchen: KitchenRates = Field(default_factory=KitchenRates)
    front_of_house_rate: Money = 2500.0
    patio: PatioRates = Field(default_factory=PatioRates)
    sqft_fixed_fee: Money = 200.0
    inside_sqft_rate: Money = 0.6
    outside_sqft_rate: Money = 0.4
