"""SaniScrub floor scrubbing: bathroom fixtures plus non-bathroom area."""
from pricing_engine.core.enums import AnnualBasis, Frequency, ServiceId
from pricing_engine.schemas.inputs import SaniScrubInputs
from pricing_engine.schemas.pricing_config import RateMinimum, SaniScrubConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.adjustments import amplify_monthly
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.installation import installation_fee
from pricing_engine.services.engine.line_items import block_area_price, price_with_minimum
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = (
    Frequency.MONTHLY,
    Frequency.TWICE_PER_MONTH,
    Frequency.BIMONTHLY,
    Frequency.QUARTERLY,
)
DEFAULT_FREQUENCY = Frequency.MONTHLY
ANNUAL_BASIS = AnnualBasis.CONTRACT


def _fixture_rate(config: SaniScrubConfig, frequency: Frequency) -> RateMinimum:
    rates = config.fixture_rates
    return rates.get(frequency.value) or rates.get(Frequency.MONTHLY.value) or RateMinimum(rate=0.0)


def compute_quote(inputs: SaniScrubInputs, config: SaniScrubConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )

    rate = _fixture_rate(config, frequency.frequency)
    fixtures = price_with_minimum(inputs.fixture_count, rate.rate, rate.minimum)
    area = block_area_price(
        inputs.non_bathroom_sqft,
        config.non_bathroom.block_unit,
        config.non_bathroom.first_block_rate,
        config.non_bathroom.additional_block_rate,
        exact=inputs.use_exact_sqft,
    )
    per_visit = fixtures.applied + area

    monthly_base = None
    if frequency.frequency is Frequency.TWICE_PER_MONTH and inputs.bundled_with_saniclean:
        monthly_base = amplify_monthly(per_visit, True, config.twice_per_month_discount)

    trip = 0.0
    if per_visit > 0 and inputs.trip_charge_included:
        trip = config.trip_charge + (config.parking_fee if inputs.needs_parking else 0.0)

    base_rate = _fixture_rate(config, Frequency.MONTHLY)
    install_base = price_with_minimum(inputs.fixture_count, base_rate.rate, base_rate.minimum).applied + area
    install = installation_fee(
        install_base, inputs.dirty_install, config.install_multipliers, inputs.include_install
    )

    return build_quote(
        ServiceId.SANISCRUB,
        ServiceCharges(
            frequency=frequency,
            per_visit=per_visit,
            trip_per_visit=trip,
            installation_fee=install,
            monthly_base=monthly_base,
            minimum_applied=fixtures.minimum_applied,
            breakdown={
                "fixture_raw": fixtures.raw,
                "fixture_charge": fixtures.applied,
                "non_bathroom_charge": area,
                "twice_per_month_discount": config.twice_per_month_discount if monthly_base is not None else 0.0,
                "install_base": install_base,
            },
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
