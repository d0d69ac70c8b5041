"""Microfiber mopping for bathrooms bundled with Sani service and for open floor area."""
from pricing_engine.core.enums import AnnualBasis, Frequency, ServiceId
from pricing_engine.schemas.inputs import MicrofiberMoppingInputs
from pricing_engine.schemas.pricing_config import MicrofiberMoppingConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.line_items import price_with_minimum, units_of
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = (
    Frequency.ONE_TIME,
    Frequency.WEEKLY,
    Frequency.BIWEEKLY,
    Frequency.TWICE_PER_MONTH,
    Frequency.MONTHLY,
)
DEFAULT_FREQUENCY = Frequency.WEEKLY
ANNUAL_BASIS = AnnualBasis.CONTRACT


def compute_quote(inputs: MicrofiberMoppingInputs, config: MicrofiberMoppingConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )
    exact = inputs.use_exact_sqft

    bathrooms = price_with_minimum(inputs.bathroom_count, config.bundled_rate_per_bathroom)
    huge = price_with_minimum(
        units_of(inputs.huge_bathroom_sqft, config.huge_bathroom_unit_sqft, exact),
        config.huge_bathroom_rate_per_unit,
    )
    extra = price_with_minimum(
        units_of(inputs.extra_area_sqft, config.extra_area_unit_sqft, exact),
        config.extra_area_rate_per_unit,
        config.extra_area_minimum,
    )
    standalone = price_with_minimum(
        units_of(inputs.standalone_sqft, config.standalone_unit_sqft, exact),
        config.standalone_rate_per_unit,
        config.standalone_minimum,
    )

    lines = {
        "bathrooms": bathrooms.applied,
        "huge_bathrooms": huge.applied,
        "extra_area": extra.applied,
        "standalone_area": standalone.applied,
    }

    return build_quote(
        ServiceId.MICROFIBER_MOPPING,
        ServiceCharges(
            frequency=frequency,
            per_visit=sum(lines.values()),
            minimum_applied=extra.minimum_applied or standalone.minimum_applied,
            breakdown=lines,
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
