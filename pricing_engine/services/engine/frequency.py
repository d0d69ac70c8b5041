import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from pricing_engine.core.enums import Frequency, FrequencyClass
from pricing_engine.schemas.pricing_config import ServiceConfig

# Monthly visits used when a config document carries no metadata for a key.
FALLBACK_MONTHLY_VISITS = {
    Frequency.ONE_TIME: 0.0,
    Frequency.WEEKLY: 4.33,
    Frequency.BIWEEKLY: 2.165,
    Frequency.TWICE_PER_MONTH: 2.0,
    Frequency.MONTHLY: 1.0,
    Frequency.BIMONTHLY: 0.5,
    Frequency.QUARTERLY: 1 / 3,
    Frequency.BIANNUAL: 1 / 6,
    Frequency.ANNUAL: 1 / 12,
}

VISIT_BASED = frozenset({
    Frequency.ONE_TIME,
    Frequency.BIMONTHLY,
    Frequency.QUARTERLY,
    Frequency.BIANNUAL,
    Frequency.ANNUAL,
})

_LOOKUP = {re.sub(r"[^a-z0-9]", "", f.value.lower()): f for f in Frequency}
_LOOKUP.update({
    "onetime": Frequency.ONE_TIME,
    "once": Frequency.ONE_TIME,
    "everytwoweeks": Frequency.BIWEEKLY,
    "twicemonthly": Frequency.TWICE_PER_MONTH,
    "twiceamonth": Frequency.TWICE_PER_MONTH,
    "2xmonth": Frequency.TWICE_PER_MONTH,
    "everytwomonths": Frequency.BIMONTHLY,
    "semiannual": Frequency.BIANNUAL,
    "yearly": Frequency.ANNUAL,
})


@dataclass(frozen=True)
class ResolvedFrequency:
    frequency: Frequency
    monthly_visits: float
    visits_per_year: float
    frequency_class: FrequencyClass

    @property
    def is_one_time(self) -> bool:
        return self.frequency is Frequency.ONE_TIME

    @property
    def is_visit_based(self) -> bool:
        return self.frequency_class is FrequencyClass.VISIT_BASED


def parse_frequency(value: Any) -> Optional[Frequency]:
    if isinstance(value, Frequency):
        return value
    key = re.sub(r"[^a-z0-9]", "", str(value or "").lower())
    return _LOOKUP.get(key)


def normalize_frequency(
    value: Any,
    allowed: Iterable[Frequency],
    default: Frequency = Frequency.MONTHLY,
) -> Frequency:
    """Clamp an arbitrary selector to one of the service's frequencies."""
    frequency = parse_frequency(value)
    allowed = tuple(allowed)
    if frequency is None or (allowed and frequency not in allowed):
        return default
    return frequency


def classify(frequency: Frequency) -> FrequencyClass:
    if frequency in VISIT_BASED:
        return FrequencyClass.VISIT_BASED
    return FrequencyClass.CALENDAR_BASED


def monthly_visits_for(frequency: Frequency, config: ServiceConfig) -> float:
    meta = config.frequency_metadata.get(frequency.value)
    if meta is not None:
        if meta.monthly_multiplier is not None:
            return meta.monthly_multiplier
        if meta.cycle_months:
            return 1 / meta.cycle_months
    return FALLBACK_MONTHLY_VISITS[frequency]


def resolve_frequency(frequency: Frequency, config: ServiceConfig) -> ResolvedFrequency:
    monthly_visits = monthly_visits_for(frequency, config)
    return ResolvedFrequency(
        frequency=frequency,
        monthly_visits=monthly_visits,
        visits_per_year=monthly_visits * 12,
        frequency_class=classify(frequency),
    )
