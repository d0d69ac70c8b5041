"""RPM window cleaning priced per window size with a per-visit trip charge."""
from pricing_engine.core.enums import AnnualBasis, Frequency, ServiceId
from pricing_engine.schemas.inputs import RpmWindowsInputs
from pricing_engine.schemas.pricing_config import RpmWindowsConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.installation import installation_fee
from pricing_engine.services.engine.line_items import price_with_minimum
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = (
    Frequency.WEEKLY,
    Frequency.BIWEEKLY,
    Frequency.MONTHLY,
    Frequency.QUARTERLY,
)
DEFAULT_FREQUENCY = Frequency.MONTHLY
ANNUAL_BASIS = AnnualBasis.RECURRING


def weekly_window_charge(inputs: RpmWindowsInputs, config: RpmWindowsConfig) -> dict:
    rates = config.window_rates
    return {
        "small": price_with_minimum(inputs.small_windows, rates.small).applied,
        "medium": price_with_minimum(inputs.medium_windows, rates.medium).applied,
        "large": price_with_minimum(inputs.large_windows, rates.large).applied,
    }


def compute_quote(inputs: RpmWindowsInputs, config: RpmWindowsConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )
    windows = inputs.small_windows + inputs.medium_windows + inputs.large_windows

    lines = weekly_window_charge(inputs, config)
    weekly_base = sum(lines.values())
    multiplier = config.frequency_multipliers.get(frequency.frequency.value, 1.0)
    per_visit = weekly_base * multiplier

    trip = config.trip_charge if windows > 0 and inputs.trip_charge_included else 0.0

    # first-time cleaning is priced on the weekly visit, trip included
    install_base = weekly_base + trip if windows > 0 else 0.0
    install = installation_fee(
        install_base, inputs.dirty_install, config.install_multipliers, inputs.include_install
    )

    breakdown = {f"{size}_windows": amount for size, amount in lines.items()}
    breakdown.update({
        "weekly_base": weekly_base,
        "frequency_multiplier": multiplier,
        "install_base": install_base,
    })

    return build_quote(
        ServiceId.RPM_WINDOWS,
        ServiceCharges(
            frequency=frequency,
            per_visit=per_visit,
            trip_per_visit=trip,
            installation_fee=install,
            breakdown=breakdown,
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
