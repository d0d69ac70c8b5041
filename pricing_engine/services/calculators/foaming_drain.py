"""Foaming drain treatment.

Standard drains take the cheaper of a flat per-drain rate and a base charge
plus a smaller per-drain rate. Large accounts put their install-program drains
on volume pricing. Grease traps, green drains and plumbing work are add-ons,
and the whole visit is floored at a minimum once anything is serviced.
"""
from pricing_engine.core.enums import AnnualBasis, DrainInstallFrequency, Frequency, ServiceId
from pricing_engine.schemas.inputs import FoamingDrainInputs
from pricing_engine.schemas.pricing_config import FoamingDrainConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.installation import installation_fee
from pricing_engine.services.engine.line_items import floor_at_minimum
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = tuple(Frequency)
DEFAULT_FREQUENCY = Frequency.WEEKLY
ANNUAL_BASIS = AnnualBasis.CONTRACT


def uses_volume_pricing(inputs: FoamingDrainInputs, config: FoamingDrainConfig) -> bool:
    if inputs.use_big_account_rate or inputs.all_inclusive:
        return False
    return inputs.install_drains > 0 and inputs.standard_drains >= config.volume_pricing.minimum_drains


def standard_drain_charge(drains: int, inputs: FoamingDrainInputs, config: FoamingDrainConfig) -> float:
    if drains <= 0 or inputs.all_inclusive:
        return 0.0
    flat = drains * config.standard_rate_per_drain
    if inputs.use_big_account_rate:
        return flat
    alternative = config.alt_base_charge + drains * config.alt_rate_per_drain
    if inputs.use_small_alt_pricing:
        return alternative
    return min(flat, alternative)


def compute_quote(inputs: FoamingDrainInputs, config: FoamingDrainConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )

    volume = uses_volume_pricing(inputs, config)
    volume_drains = min(inputs.install_drains, inputs.standard_drains) if volume else 0
    if inputs.install_frequency is DrainInstallFrequency.BIMONTHLY:
        volume_rate = config.volume_pricing.bimonthly_rate_per_drain
    else:
        volume_rate = config.volume_pricing.weekly_rate_per_drain

    breakdown = {
        "standard_drains": standard_drain_charge(inputs.standard_drains - volume_drains, inputs, config),
        "volume_drains": volume_drains * volume_rate,
        "plumbing": inputs.plumbing_drains * config.plumbing_rate_per_drain,
        "grease_traps": inputs.grease_traps * config.grease_trap_weekly_rate,
        "green_drains": inputs.green_drains * config.green_drain_weekly_rate,
    }
    visit = floor_at_minimum(sum(breakdown.values()), config.minimum_per_visit)

    filthy_base = standard_drain_charge(inputs.filthy_drains, inputs, config)
    filthy = installation_fee(
        filthy_base,
        True,
        config.install_multipliers,
        inputs.include_install and inputs.dirty_install and not inputs.use_big_account_rate,
    )
    grease_install = 0.0
    if inputs.include_install and inputs.charge_grease_trap_install:
        grease_install = inputs.grease_traps * config.grease_trap_install_rate
    green_install = 0.0
    if inputs.include_install and inputs.charge_green_drain_install:
        green_install = inputs.green_drains * config.green_drain_install_rate

    breakdown.update({
        "service_subtotal": visit.raw,
        "filthy_install": filthy,
        "grease_trap_install": grease_install,
        "green_drain_install": green_install,
    })

    return build_quote(
        ServiceId.FOAMING_DRAIN,
        ServiceCharges(
            frequency=frequency,
            per_visit=visit.applied,
            installation_fee=filthy + grease_install + green_install,
            minimum_applied=visit.minimum_applied,
            breakdown=breakdown,
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
