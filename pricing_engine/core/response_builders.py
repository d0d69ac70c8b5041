from typing import Dict, List, Optional

from pricing_engine.core.enums import ConfigSource, QuoteField
from pricing_engine.schemas.quote import (
    ConfigResponse,
    ExposedField,
    QuoteOutputs,
    QuoteResponse,
    ServiceInfo,
    SessionResponse,
)
from pricing_engine.services.config_loader import ResolvedConfig
from pricing_engine.services.engine.overrides import OverrideLayer
from pricing_engine.services.registry import ServiceCalculator
from pricing_engine.services.session import QuoteSession
from pricing_engine.utils.numbers import round_money

VISIT_FIELDS = {QuoteField.VISITS_PER_YEAR, QuoteField.VISITS_PER_MONTH}


def _present(field: QuoteField, value: float) -> float:
    return round(value, 4) if field in VISIT_FIELDS else round_money(value)


def build_quote_response(
    outputs: QuoteOutputs,
    overrides: OverrideLayer,
    config_source: ConfigSource = ConfigSource.DEFAULT,
    warnings: Optional[List[str]] = None,
) -> QuoteResponse:
    fields: Dict[QuoteField, ExposedField] = {}
    for field, item in overrides.expose(outputs.field_values()).items():
        fields[field] = ExposedField(
            value=_present(field, item.value),
            computed=_present(field, item.computed),
            overridden=item.is_overridden,
        )
    return QuoteResponse(
        service_id=outputs.service_id,
        frequency=outputs.frequency,
        frequency_class=outputs.frequency_class,
        contract_months=outputs.contract_months,
        total_visits=outputs.total_visits,
        rate_tier=outputs.rate_tier,
        annual_basis=outputs.annual_basis,
        minimum_applied=outputs.minimum_applied,
        fields=fields,
        overrides={QuoteField(k): v for k, v in overrides.as_dict().items()},
        price_breakdown={k: round(v, 4) for k, v in outputs.price_breakdown.items()},
        config_source=config_source,
        warnings=list(warnings or []),
    )


def build_session_response(session: QuoteSession) -> SessionResponse:
    return SessionResponse(
        session_id=session.session_id,
        inputs=session.inputs.model_dump(mode="json"),
        quote=build_quote_response(
            session.outputs, session.overrides, session.config_source, session.warnings
        ),
        accepted=session.accepted,
    )


def build_service_info(calculator: ServiceCalculator) -> ServiceInfo:
    return ServiceInfo(
        service_id=calculator.service_id,
        label=calculator.label,
        frequencies=list(calculator.frequencies),
        default_frequency=calculator.default_frequency,
        annual_basis=calculator.annual_basis,
    )


def build_config_response(resolved: ResolvedConfig) -> ConfigResponse:
    return ConfigResponse(
        service_id=resolved.service_id,
        source=resolved.source,
        warning=resolved.warning,
        config=resolved.config.model_dump(by_alias=True),
    )
