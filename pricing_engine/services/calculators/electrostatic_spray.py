"""Electrostatic disinfectant spray, priced by room or by floor area."""
from pricing_engine.core.enums import AnnualBasis, Frequency, Location, ServiceId, SprayPricingMethod
from pricing_engine.schemas.inputs import ElectrostaticSprayInputs
from pricing_engine.schemas.pricing_config import ElectrostaticSprayConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.line_items import block_area_price, price_with_minimum, units_of
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = tuple(Frequency)
DEFAULT_FREQUENCY = Frequency.WEEKLY
ANNUAL_BASIS = AnnualBasis.CONTRACT


def compute_quote(inputs: ElectrostaticSprayInputs, config: ElectrostaticSprayConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )

    if inputs.pricing_method is SprayPricingMethod.BY_SQFT and inputs.use_exact_sqft:
        per_visit = units_of(inputs.area_sqft, config.sqft_unit, exact=True) * config.rate_per_sqft_unit
    elif inputs.pricing_method is SprayPricingMethod.BY_SQFT:
        # rounded mode bills at least one whole tier
        per_visit = block_area_price(
            inputs.area_sqft,
            config.sqft_unit,
            config.rate_per_sqft_unit,
            config.rate_per_sqft_unit,
        )
    else:
        per_visit = price_with_minimum(inputs.room_count, config.rate_per_room).applied

    trip = 0.0
    if per_visit > 0 and inputs.trip_charge_included and not inputs.combined_with_saniclean:
        if inputs.location is Location.INSIDE_BELTWAY:
            trip = config.inside_beltway_trip_charge
        else:
            trip = config.outside_beltway_trip_charge

    return build_quote(
        ServiceId.ELECTROSTATIC_SPRAY,
        ServiceCharges(
            frequency=frequency,
            per_visit=per_visit,
            trip_per_visit=trip,
            breakdown={
                "service_charge": per_visit,
                "pricing_method_sqft": 1.0 if inputs.pricing_method is SprayPricingMethod.BY_SQFT else 0.0,
            },
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
