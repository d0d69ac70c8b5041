"""SaniClean restroom sanitation.

Per-item pricing charges each fixture with a regional rate and weekly
minimum plus trip; small facilities get a flat minimum that already covers the
trip. The all-inclusive package charges a higher fixture rate and waives trip,
warranty and facility components.
"""
from pricing_engine.core.enums import (
    AnnualBasis,
    Frequency,
    Location,
    SaniCleanPricingMode,
    ServiceId,
    SoapType,
)
from pricing_engine.schemas.inputs import SaniCleanInputs
from pricing_engine.schemas.pricing_config import SaniCleanConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.line_items import floor_at_minimum, price_with_minimum
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = tuple(Frequency)
DEFAULT_FREQUENCY = Frequency.WEEKLY
ANNUAL_BASIS = AnnualBasis.RECURRING


def fixture_count(inputs: SaniCleanInputs) -> int:
    return inputs.sinks + inputs.urinals + inputs.male_toilets + inputs.female_toilets


def _soap_charges(inputs: SaniCleanInputs, config: SaniCleanConfig) -> dict:
    luxury = 0.0
    gallon_rate = config.soap.excess_standard_per_gallon
    if inputs.soap_type is SoapType.LUXURY:
        dispensers = inputs.luxury_upgrade_dispensers or inputs.sinks
        luxury = dispensers * config.soap.luxury_upgrade_per_dispenser
        gallon_rate = config.soap.excess_luxury_per_gallon
    return {
        "luxury_soap_upgrade": luxury,
        "excess_soap": inputs.excess_soap_gallons * gallon_rate,
    }


def facility_components_monthly(inputs: SaniCleanInputs, config: SaniCleanConfig) -> float:
    rates = config.facility_components
    return (
        inputs.urinal_screens * rates.urinal_screen
        + inputs.urinal_mats * rates.urinal_mat
        + inputs.toilet_clips * rates.toilet_clip
        + inputs.seat_cover_dispensers * rates.seat_cover_dispenser
        + inputs.sanipods * rates.sanipod
    )


def _per_item(inputs: SaniCleanInputs, config: SaniCleanConfig, fixtures: int):
    if inputs.location is Location.INSIDE_BELTWAY:
        region = config.inside_beltway
    else:
        region = config.outside_beltway

    trip = 0.0
    if fixtures > 0 and inputs.trip_charge_included:
        trip = region.trip_charge + (region.parking_fee if inputs.needs_parking else 0.0)

    small_facility = 0 < fixtures <= config.small_facility.max_fixtures
    if small_facility:
        line = floor_at_minimum(fixtures * region.rate_per_fixture + trip, config.small_facility.minimum)
        trip = 0.0
    else:
        line = price_with_minimum(fixtures, region.rate_per_fixture, region.weekly_minimum)

    breakdown = {
        "fixtures": float(fixtures),
        "fixture_raw": line.raw,
        "fixture_charge": line.applied,
        "small_facility": 1.0 if small_facility else 0.0,
        "microfiber": inputs.microfiber_bathrooms * config.microfiber_per_bathroom,
        "warranty": inputs.warranty_dispensers * config.warranty_per_dispenser,
    }
    breakdown.update(_soap_charges(inputs, config))
    per_visit = line.applied + breakdown["microfiber"] + breakdown["warranty"]
    per_visit += breakdown["luxury_soap_upgrade"] + breakdown["excess_soap"]
    return per_visit, trip, line.minimum_applied, breakdown


def _all_inclusive(inputs: SaniCleanInputs, config: SaniCleanConfig, fixtures: int):
    package = config.all_inclusive
    paper_credit = fixtures * package.paper_credit_per_fixture
    breakdown = {
        "fixtures": float(fixtures),
        "fixture_charge": fixtures * package.rate_per_fixture,
        "paper_credit": paper_credit,
        "paper_overage": max(0.0, inputs.estimated_paper_spend - paper_credit),
    }
    breakdown.update(_soap_charges(inputs, config))
    per_visit = breakdown["fixture_charge"] + breakdown["paper_overage"]
    per_visit += breakdown["luxury_soap_upgrade"] + breakdown["excess_soap"]
    return per_visit, 0.0, False, breakdown


def compute_quote(inputs: SaniCleanInputs, config: SaniCleanConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )
    fixtures = fixture_count(inputs)

    if inputs.pricing_mode is SaniCleanPricingMode.ALL_INCLUSIVE:
        per_visit, trip, minimum_applied, breakdown = _all_inclusive(inputs, config, fixtures)
        components = 0.0
    else:
        per_visit, trip, minimum_applied, breakdown = _per_item(inputs, config, fixtures)
        components = facility_components_monthly(inputs, config)
    breakdown["facility_components_monthly"] = components

    return build_quote(
        ServiceId.SANICLEAN,
        ServiceCharges(
            frequency=frequency,
            per_visit=per_visit,
            trip_per_visit=trip,
            monthly_extras=components,
            minimum_applied=minimum_applied,
            breakdown=breakdown,
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
