from dataclasses import dataclass, field
from typing import Dict, Optional

from pricing_engine.core.enums import AnnualBasis, ServiceId
from pricing_engine.schemas.inputs import QuoteInputs
from pricing_engine.schemas.pricing_config import ServiceConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.adjustments import rate_tier_multiplier
from pricing_engine.services.engine.frequency import ResolvedFrequency
from pricing_engine.services.engine.periods import clamp_contract_months, period_totals


@dataclass
class ServiceCharges:
    """What a service line charges before period totals and tiering.

    ``per_visit`` excludes trip charges. ``monthly_base`` replaces the default
    ``per_visit * monthly_visits`` when a frequency adjustment applies.
    ``monthly_extras`` are flat monthly amounts billed on top of visits and
    ``one_time_extras`` are charged once with the first visit.
    """
    frequency: ResolvedFrequency
    per_visit: float
    trip_per_visit: float = 0.0
    installation_fee: float = 0.0
    monthly_base: Optional[float] = None
    monthly_extras: float = 0.0
    one_time_extras: float = 0.0
    minimum_applied: bool = False
    breakdown: Dict[str, float] = field(default_factory=dict)


def build_quote(
    service_id: ServiceId,
    charges: ServiceCharges,
    inputs: QuoteInputs,
    config: ServiceConfig,
    annual_basis: AnnualBasis = AnnualBasis.CONTRACT,
) -> QuoteOutputs:
    frequency = charges.frequency
    months = clamp_contract_months(inputs.contract_months, config.contract)

    per_visit_charge = charges.per_visit + charges.trip_per_visit
    if charges.monthly_base is None:
        monthly_base = charges.per_visit * frequency.monthly_visits
    else:
        monthly_base = charges.monthly_base
    monthly_trip = charges.trip_per_visit * frequency.monthly_visits
    monthly_total = monthly_base + monthly_trip + charges.monthly_extras

    periods = period_totals(
        frequency,
        install_fee=charges.installation_fee,
        per_visit_charge=per_visit_charge,
        monthly_recurring=monthly_total,
        contract_months=months,
    )

    first_period = periods.first_period_total + charges.one_time_extras
    contract = periods.contract_total + charges.one_time_extras
    if frequency.is_visit_based and charges.monthly_extras:
        first_period += charges.monthly_extras
        contract += charges.monthly_extras * months

    first_visit = charges.installation_fee if periods.install_requested else per_visit_charge
    first_visit += charges.one_time_extras

    annual_from_contract = annual_basis is AnnualBasis.CONTRACT or frequency.is_one_time
    if annual_from_contract:
        annual = contract
    else:
        annual = monthly_total * 12 + charges.installation_fee

    custom_total = sum(item.amount for item in inputs.custom_line_items)
    tier = rate_tier_multiplier(inputs.rate_tier, config.rate_tiers)

    breakdown = dict(charges.breakdown)
    breakdown["trip_per_visit"] = charges.trip_per_visit
    breakdown["rate_tier_multiplier"] = tier
    if custom_total:
        breakdown["custom_line_items"] = custom_total

    return QuoteOutputs(
        service_id=service_id,
        frequency=frequency.frequency,
        frequency_class=frequency.frequency_class,
        contract_months=months,
        total_visits=periods.total_visits,
        rate_tier=inputs.rate_tier,
        annual_basis=annual_basis,
        minimum_applied=charges.minimum_applied,
        per_visit=per_visit_charge * tier,
        first_visit=first_visit * tier,
        monthly_base=monthly_base * tier,
        monthly_trip=monthly_trip * tier,
        monthly_total=monthly_total * tier,
        installation_fee=charges.installation_fee * tier,
        first_period_total=first_period * tier,
        contract_total=contract * tier + custom_total,
        annual_total=annual * tier + (custom_total if annual_from_contract else 0.0),
        visits_per_year=frequency.visits_per_year,
        visits_per_month=frequency.monthly_visits,
        price_breakdown=breakdown,
    )
