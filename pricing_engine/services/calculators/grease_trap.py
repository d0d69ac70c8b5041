"""Grease trap pumping priced per trap and per gallon of capacity."""
from pricing_engine.core.enums import AnnualBasis, Frequency, ServiceId
from pricing_engine.schemas.inputs import GreaseTrapInputs
from pricing_engine.schemas.pricing_config import GreaseTrapConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.installation import installation_fee
from pricing_engine.services.engine.line_items import floor_at_minimum, price_with_minimum
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = (
    Frequency.ONE_TIME,
    Frequency.WEEKLY,
    Frequency.BIWEEKLY,
    Frequency.MONTHLY,
    Frequency.BIMONTHLY,
    Frequency.QUARTERLY,
)
DEFAULT_FREQUENCY = Frequency.MONTHLY
ANNUAL_BASIS = AnnualBasis.RECURRING


def compute_quote(inputs: GreaseTrapInputs, config: GreaseTrapConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )

    traps = price_with_minimum(inputs.trap_count, config.per_trap_rate)
    gallon_charge = 0.0
    if inputs.trap_count:
        gallon_charge = price_with_minimum(inputs.trap_gallons, config.per_gallon_rate).applied
    visit = floor_at_minimum(traps.applied + gallon_charge, config.minimum_per_visit)

    install = installation_fee(
        visit.applied, inputs.dirty_install, config.install_multipliers, inputs.include_install
    )

    return build_quote(
        ServiceId.GREASE_TRAP,
        ServiceCharges(
            frequency=frequency,
            per_visit=visit.applied,
            installation_fee=install,
            minimum_applied=visit.minimum_applied,
            breakdown={
                "trap_charge": traps.applied,
                "gallon_charge": gallon_charge,
            },
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
