"""Floor strip and wax by square foot, with a minimum per job variant."""
from pricing_engine.core.enums import AnnualBasis, Frequency, ServiceId, StripWaxVariant
from pricing_engine.schemas.inputs import StripWaxInputs
from pricing_engine.schemas.pricing_config import RateMinimum, StripWaxConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.line_items import price_with_minimum
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = tuple(Frequency)
DEFAULT_FREQUENCY = Frequency.WEEKLY
ANNUAL_BASIS = AnnualBasis.CONTRACT


def compute_quote(inputs: StripWaxInputs, config: StripWaxConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )

    variant = (
        config.variants.get(inputs.variant.value)
        or config.variants.get(StripWaxVariant.STANDARD_FULL.value)
        or RateMinimum(rate=0.0)
    )
    visit = price_with_minimum(inputs.floor_sqft, variant.rate, variant.minimum)

    return build_quote(
        ServiceId.STRIP_WAX,
        ServiceCharges(
            frequency=frequency,
            per_visit=visit.applied,
            minimum_applied=visit.minimum_applied,
            breakdown={
                "rate_per_sqft": variant.rate,
                "area_charge": visit.raw,
                "variant_minimum": variant.minimum,
            },
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
