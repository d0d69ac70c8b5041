"""Refresh power scrub: a deep power wash priced area by area.

Each included area is priced on its own by one of three methods and floored
at the visit minimum; the visit is the sum of the areas.
"""
from pricing_engine.core.enums import (
    AnnualBasis,
    Frequency,
    KitchenSize,
    PatioMode,
    RefreshArea,
    RefreshPricingMethod,
    ServiceId,
)
from pricing_engine.schemas.inputs import RefreshAreaInputs, RefreshPowerScrubInputs
from pricing_engine.schemas.pricing_config import RefreshPowerScrubConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.line_items import LineItemPrice, floor_at_minimum
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = tuple(Frequency)
DEFAULT_FREQUENCY = Frequency.ONE_TIME
ANNUAL_BASIS = AnnualBasis.CONTRACT

AREA_FIELDS = {
    RefreshArea.DUMPSTER: "dumpster",
    RefreshArea.PATIO: "patio",
    RefreshArea.WALKWAY: "walkway",
    RefreshArea.FRONT_OF_HOUSE: "front_of_house",
    RefreshArea.BACK_OF_HOUSE: "back_of_house",
    RefreshArea.OTHER: "other",
}


def _flat(amount: float) -> LineItemPrice:
    return LineItemPrice(raw=amount, applied=amount, minimum_applied=False)


def _square_footage(area: RefreshAreaInputs, config: RefreshPowerScrubConfig, trip: float) -> LineItemPrice:
    raw = (
        config.sqft_fixed_fee
        + area.inside_sqft * config.inside_sqft_rate
        + area.outside_sqft * config.outside_sqft_rate
        + trip
    )
    return floor_at_minimum(raw, config.minimum_visit)


def _area_specific(
    key: RefreshArea, area: RefreshAreaInputs, config: RefreshPowerScrubConfig, trip: float
) -> LineItemPrice:
    if key is RefreshArea.PATIO:
        return _flat(config.patio.upsell if area.patio_mode is PatioMode.UPSELL else config.patio.standalone)
    if key is RefreshArea.WALKWAY:
        # walkways are outside power washing
        outside_only = area.model_copy(update={"inside_sqft": 0.0})
        return _square_footage(outside_only, config, trip)
    if key is RefreshArea.FRONT_OF_HOUSE:
        return _flat(config.front_of_house_rate)
    if key is RefreshArea.BACK_OF_HOUSE:
        if area.kitchen_size is KitchenSize.SMALL_MEDIUM:
            return _flat(config.kitchen.small_medium)
        return _flat(config.kitchen.large)
    return _flat(config.minimum_visit)


def price_area(
    key: RefreshArea, area: RefreshAreaInputs, config: RefreshPowerScrubConfig, trip: float
) -> LineItemPrice:
    if not area.included:
        return LineItemPrice.zero()
    if area.pricing_method is RefreshPricingMethod.HOURLY:
        raw = trip + area.workers * area.hours * config.hourly_rate
        return floor_at_minimum(raw, config.minimum_visit)
    if area.pricing_method is RefreshPricingMethod.SQUARE_FOOTAGE:
        return _square_footage(area, config, trip)
    return _area_specific(key, area, config, trip)


def compute_quote(inputs: RefreshPowerScrubInputs, config: RefreshPowerScrubConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )
    trip = config.trip_charge if inputs.trip_charge_included else 0.0

    prices = {
        key: price_area(key, getattr(inputs, field), config, trip)
        for key, field in AREA_FIELDS.items()
    }
    per_visit = sum(price.applied for price in prices.values())

    breakdown = {f"area_{key.value}": price.applied for key, price in prices.items() if price.applied}
    breakdown["areas_priced"] = float(len(breakdown))

    return build_quote(
        ServiceId.REFRESH_POWER_SCRUB,
        ServiceCharges(
            frequency=frequency,
            per_visit=per_visit,
            minimum_applied=any(price.minimum_applied for price in prices.values()),
            breakdown=breakdown,
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
