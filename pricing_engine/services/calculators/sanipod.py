"""SaniPod feminine hygiene units serviced weekly."""
from pricing_engine.core.enums import AnnualBasis, Frequency, ServiceId
from pricing_engine.schemas.inputs import SaniPodInputs
from pricing_engine.schemas.pricing_config import SaniPodConfig
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.engine.frequency import normalize_frequency, resolve_frequency
from pricing_engine.services.engine.installation import installation_fee
from pricing_engine.services.engine.quote import ServiceCharges, build_quote

FREQUENCIES = (
    Frequency.WEEKLY,
    Frequency.BIWEEKLY,
    Frequency.TWICE_PER_MONTH,
    Frequency.MONTHLY,
)
DEFAULT_FREQUENCY = Frequency.WEEKLY
ANNUAL_BASIS = AnnualBasis.CONTRACT


def pod_charge(pods: int, config: SaniPodConfig) -> float:
    """Cheaper of the flat per-pod rate and the base charge plus reduced rate."""
    if pods <= 0:
        return 0.0
    return min(pods * config.rate_per_pod, pods * config.alt_rate_per_pod + config.alt_base_charge)


def compute_quote(inputs: SaniPodInputs, config: SaniPodConfig) -> QuoteOutputs:
    frequency = resolve_frequency(
        normalize_frequency(inputs.frequency, FREQUENCIES, DEFAULT_FREQUENCY), config
    )

    pods = pod_charge(inputs.pod_count, config)
    bags = inputs.extra_bags * config.extra_bag_price
    recurring_bags = bags if inputs.extra_bags_recurring else 0.0
    one_time_bags = 0.0 if inputs.extra_bags_recurring else bags

    install = installation_fee(
        inputs.pod_count * config.install_rate_per_pod,
        inputs.dirty_install,
        config.install_multipliers,
        inputs.include_install,
    )

    return build_quote(
        ServiceId.SANIPOD,
        ServiceCharges(
            frequency=frequency,
            per_visit=pods + recurring_bags,
            installation_fee=install,
            one_time_extras=one_time_bags,
            breakdown={
                "pods": pods,
                "extra_bags_recurring": recurring_bags,
                "extra_bags_one_time": one_time_bags,
            },
        ),
        inputs,
        config,
        ANNUAL_BASIS,
    )
