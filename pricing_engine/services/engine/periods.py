"""First-period and contract totals.

The result depends only on the frequency class and whether an installation
fee is charged:

* visit-based, install: the first visit is the installation only.
* visit-based, no install: the first visit is one service charge.
* calendar-based, install: installation plus the remaining visits of month one.
* calendar-based, no install: one month of visits at the per-visit charge.
"""
from dataclasses import dataclass

from pricing_engine.schemas.pricing_config import ContractTerms
from pricing_engine.services.engine.frequency import ResolvedFrequency
from pricing_engine.utils.numbers import round_half_up


@dataclass(frozen=True)
class PeriodTotals:
    first_period_total: float
    contract_total: float
    total_visits: int
    install_requested: bool


def clamp_contract_months(months, terms: ContractTerms) -> int:
    if months is None:
        return terms.default_months
    try:
        months = int(months)
    except (TypeError, ValueError):
        return terms.default_months
    return max(terms.min_months, min(terms.max_months, months))


def contract_visits(frequency: ResolvedFrequency, contract_months: int) -> int:
    if frequency.is_one_time:
        return 1
    visits = int(round_half_up(contract_months / 12 * frequency.visits_per_year))
    return max(visits, 1)


def first_period_total(
    frequency: ResolvedFrequency,
    install_fee: float,
    per_visit_charge: float,
) -> float:
    if frequency.is_visit_based:
        return install_fee if install_fee > 0 else per_visit_charge
    if install_fee > 0:
        remaining_visits = max(frequency.monthly_visits - 1, 0.0)
        return install_fee + remaining_visits * per_visit_charge
    return frequency.monthly_visits * per_visit_charge


def period_totals(
    frequency: ResolvedFrequency,
    install_fee: float,
    per_visit_charge: float,
    monthly_recurring: float,
    contract_months: int,
) -> PeriodTotals:
    install_requested = install_fee > 0
    first = first_period_total(frequency, install_fee, per_visit_charge)

    if frequency.is_visit_based:
        visits = contract_visits(frequency, contract_months)
        if install_requested:
            contract = install_fee + (visits - 1) * per_visit_charge
        else:
            contract = visits * per_visit_charge
    else:
        visits = int(round_half_up(frequency.monthly_visits * contract_months))
        if install_requested:
            contract = first + (contract_months - 1) * monthly_recurring
        else:
            contract = contract_months * monthly_recurring

    return PeriodTotals(
        first_period_total=first,
        contract_total=contract,
        total_visits=visits,
        install_requested=install_requested,
    )
