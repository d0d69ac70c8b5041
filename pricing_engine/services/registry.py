from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Tuple, Type

from pricing_engine.core.enums import AnnualBasis, Frequency, ServiceId
from pricing_engine.core.metrics import quote_computations
from pricing_engine.schemas import inputs as input_schemas
from pricing_engine.schemas import pricing_config as config_schemas
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.calculators import (
    carpet_cleaning,
    electrostatic_spray,
    foaming_drain,
    grease_trap,
    janitorial,
    microfiber_mopping,
    refresh_power_scrub,
    rpm_windows,
    saniclean,
    sanipod,
    saniscrub,
    strip_wax,
)


@dataclass(frozen=True)
class ServiceCalculator:
    service_id: ServiceId
    label: str
    inputs_model: Type[input_schemas.QuoteInputs]
    config_model: Type[config_schemas.ServiceConfig]
    compute: Callable[[Any, Any], QuoteOutputs]
    frequencies: Tuple[Frequency, ...]
    default_frequency: Frequency
    annual_basis: AnnualBasis

    def default_config(self) -> config_schemas.ServiceConfig:
        return self.config_model()

    def parse_inputs(self, data: Mapping[str, Any]) -> input_schemas.QuoteInputs:
        data = dict(data or {})
        data.setdefault("frequency", self.default_frequency.value)
        return self.inputs_model.model_validate(data)


def _register(service_id, label, inputs_model, config_model, module) -> ServiceCalculator:
    return ServiceCalculator(
        service_id=service_id,
        label=label,
        inputs_model=inputs_model,
        config_model=config_model,
        compute=module.compute_quote,
        frequencies=module.FREQUENCIES,
        default_frequency=module.DEFAULT_FREQUENCY,
        annual_basis=module.ANNUAL_BASIS,
    )


CALCULATORS: Dict[ServiceId, ServiceCalculator] = {
    calc.service_id: calc
    for calc in (
        _register(ServiceId.SANICLEAN, "SaniClean restroom sanitation",
                  input_schemas.SaniCleanInputs, config_schemas.SaniCleanConfig, saniclean),
        _register(ServiceId.SANISCRUB, "SaniScrub floor scrubbing",
                  input_schemas.SaniScrubInputs, config_schemas.SaniScrubConfig, saniscrub),
        _register(ServiceId.RPM_WINDOWS, "RPM window cleaning",
                  input_schemas.RpmWindowsInputs, config_schemas.RpmWindowsConfig, rpm_windows),
        _register(ServiceId.FOAMING_DRAIN, "Foaming drain treatment",
                  input_schemas.FoamingDrainInputs, config_schemas.FoamingDrainConfig, foaming_drain),
        _register(ServiceId.GREASE_TRAP, "Grease trap service",
                  input_schemas.GreaseTrapInputs, config_schemas.GreaseTrapConfig, grease_trap),
        _register(ServiceId.MICROFIBER_MOPPING, "Microfiber mopping",
                  input_schemas.MicrofiberMoppingInputs, config_schemas.MicrofiberMoppingConfig,
                  microfiber_mopping),
        _register(ServiceId.JANITORIAL, "Pure janitorial add-ons",
                  input_schemas.JanitorialInputs, config_schemas.JanitorialConfig, janitorial),
        _register(ServiceId.CARPET_CLEANING, "Carpet cleaning",
                  input_schemas.CarpetCleaningInputs, config_schemas.CarpetCleaningConfig, carpet_cleaning),
        _register(ServiceId.ELECTROSTATIC_SPRAY, "Electrostatic spray",
                  input_schemas.ElectrostaticSprayInputs, config_schemas.ElectrostaticSprayConfig,
                  electrostatic_spray),
        _register(ServiceId.STRIP_WAX, "Strip & wax",
                  input_schemas.StripWaxInputs, config_schemas.StripWaxConfig, strip_wax),
        _register(ServiceId.SANIPOD, "SaniPod service",
                  input_schemas.SaniPodInputs, config_schemas.SaniPodConfig, sanipod),
        _register(ServiceId.REFRESH_POWER_SCRUB, "Refresh power scrub",
                  input_schemas.RefreshPowerScrubInputs, config_schemas.RefreshPowerScrubConfig,
                  refresh_power_scrub),
    )
}


def get_calculator(service_id) -> ServiceCalculator:
    """Look up a calculator; raises KeyError for an unregistered service."""
    try:
        return CALCULATORS[ServiceId(service_id)]
    except ValueError:
        raise KeyError(service_id) from None


def compute_quote(service_id, inputs, config=None) -> QuoteOutputs:
    """Compute a full quote from an inputs snapshot and a config snapshot.

    ``inputs`` may be a mapping of raw form values; ``config`` defaults to the
    compiled-in configuration for the service.
    """
    calculator = get_calculator(service_id)
    if not isinstance(inputs, calculator.inputs_model):
        inputs = calculator.parse_inputs(inputs)
    if config is None:
        config = calculator.default_config()
    outputs = calculator.compute(inputs, config)
    quote_computations.labels(service=calculator.service_id.value).inc()
    return outputs
