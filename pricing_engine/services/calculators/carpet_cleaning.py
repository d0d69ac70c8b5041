"""Carpet cleaning priced by area blocks with a per-visit minimum."""
from pricing_engine.core.enums import AnnualBasis, Frequency, ServiceId
from pricing_engine.schemas.inputs import CarpetCleaningInputs
from pricing_engine.schemas.pricing_config import CarpetCleaningConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.installation import installation_fee
from pricing_engine.services.engine.line_items import block_area_price, floor_at_minimum
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = tuple(Frequency)
DEFAULT_FREQUENCY = Frequency.MONTHLY
ANNUAL_BASIS = AnnualBasis.CONTRACT


def compute_quote(inputs: CarpetCleaningInputs, config: CarpetCleaningConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )

    area = config.area
    block_price = block_area_price(
        inputs.area_sqft,
        area.block_unit,
        area.first_block_rate,
        area.additional_block_rate,
        exact=inputs.use_exact_sqft,
    )
    visit = floor_at_minimum(block_price, config.per_visit_minimum)

    install_base = visit.applied
    install = installation_fee(
        install_base, inputs.dirty_install, config.install_multipliers, inputs.include_install
    )

    return build_quote(
        ServiceId.CARPET_CLEANING,
        ServiceCharges(
            frequency=frequency,
            per_visit=visit.applied,
            installation_fee=install,
            minimum_applied=visit.minimum_applied,
            breakdown={
                "block_price": block_price,
                "per_visit_minimum": config.per_visit_minimum,
                "install_base": install_base,
            },
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
