"""Pure janitorial add-on hours."""
from pricing_engine.core.enums import AnnualBasis, Frequency, ServiceId
from pricing_engine.schemas.inputs import JanitorialInputs
from pricing_engine.schemas.pricing_config import JanitorialConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.installation import installation_fee
from pricing_engine.services.engine.line_items import price_with_minimum
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = tuple(Frequency)
DEFAULT_FREQUENCY = Frequency.WEEKLY
ANNUAL_BASIS = AnnualBasis.CONTRACT


def compute_quote(inputs: JanitorialInputs, config: JanitorialConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )

    if inputs.short_job:
        visit = price_with_minimum(inputs.hours_per_visit, config.short_job_hourly_rate)
    else:
        visit = price_with_minimum(
            inputs.hours_per_visit,
            config.hourly_rate,
            config.minimum_hours_per_visit * config.hourly_rate,
        )

    install = installation_fee(
        visit.applied, inputs.dirty_install, config.install_multipliers, inputs.include_install
    )

    return build_quote(
        ServiceId.JANITORIAL,
        ServiceCharges(
            frequency=frequency,
            per_visit=visit.applied,
            installation_fee=install,
            minimum_applied=visit.minimum_applied,
            breakdown={
                "hours": inputs.hours_per_visit,
                "hourly_rate": config.short_job_hourly_rate if inputs.short_job else config.hourly_rate,
                "labor_raw": visit.raw,
            },
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
