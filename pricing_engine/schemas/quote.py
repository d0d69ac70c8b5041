from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from pricing_engine.core.enums import (
    AnnualBasis,
    ConfigSource,
    Frequency,
    FrequencyClass,
    QuoteField,
    RateTier,
    ServiceId,
)


class QuoteOutputs(BaseModel):
    service_id: ServiceId
    frequency: Frequency
    frequency_class: FrequencyClass
    contract_months: int
    total_visits: int
    rate_tier: RateTier
    annual_basis: AnnualBasis
    minimum_applied: bool = False

    per_visit: float = 0.0
    first_visit: float = 0.0
    monthly_base: float = 0.0
    monthly_trip: float = 0.0
    monthly_total: float = 0.0
    installation_fee: float = 0.0
    first_period_total: float = 0.0
    contract_total: float = 0.0
    annual_total: float = 0.0
    visits_per_year: float = 0.0
    visits_per_month: float = 0.0

    price_breakdown: Dict[str, float] = Field(default_factory=dict)

    def field_values(self) -> Dict[QuoteField, float]:
        return {field: getattr(self, field.value) for field in QuoteField}


class QuoteRequest(BaseModel):
    inputs: Dict[str, Any] = Field(default_factory=dict)
    overrides: Dict[QuoteField, float] = Field(default_factory=dict)


class ExposedField(BaseModel):
    value: float
    computed: float
    overridden: bool = False


class QuoteResponse(BaseModel):
    service_id: ServiceId
    frequency: Frequency
    frequency_class: FrequencyClass
    contract_months: int
    total_visits: int
    rate_tier: RateTier
    annual_basis: AnnualBasis
    minimum_applied: bool
    fields: Dict[QuoteField, ExposedField]
    overrides: Dict[QuoteField, float] = Field(default_factory=dict)
    price_breakdown: Dict[str, float] = Field(default_factory=dict)
    config_source: ConfigSource = ConfigSource.DEFAULT
    warnings: List[str] = Field(default_factory=list)


class SessionCreate(BaseModel):
    service_id: ServiceId
    inputs: Dict[str, Any] = Field(default_factory=dict)


class OverrideValue(BaseModel):
    value: float = Field(allow_inf_nan=False)


class SessionResponse(BaseModel):
    session_id: str
    inputs: Dict[str, Any]
    quote: QuoteResponse
    accepted: bool = False


class AcceptResponse(BaseModel):
    session_id: str
    status: str
    payload_hash: str
    idempotent_replay: bool = False


class ServiceInfo(BaseModel):
    service_id: ServiceId
    label: str
    frequencies: List[Frequency]
    default_frequency: Frequency
    annual_basis: AnnualBasis


class ConfigResponse(BaseModel):
    service_id: ServiceId
    source: ConfigSource
    warning: Optional[str] = None
    config: Dict[str, Any]
