"""Stateful quote editing for one service line.

A session owns the operator's inputs, the config snapshot they are priced
against and the override layer. Every mutation recomputes the whole quote.
"""
import logging
import math
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic.alias_generators import to_camel

from pricing_engine.core.config import settings
from pricing_engine.core.enums import ConfigSource, QuoteField
from pricing_engine.core.metrics import active_sessions, override_invalidations
from pricing_engine.schemas.inputs import NON_PRICING_FIELDS
from pricing_engine.schemas.quote import QuoteOutputs
from pricing_engine.services.config_loader import ConfigurationProvider, ResolvedConfig
from pricing_engine.services.engine.overrides import Overridable, OverrideLayer
from pricing_engine.services.registry import compute_quote, get_calculator
from pricing_engine.utils.numbers import round_money

logger = logging.getLogger(__name__)


def _field_names(model) -> Dict[str, str]:
    names = {}
    for name, info in model.model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name
    return names


def _camel_keys(data: Any) -> Any:
    if isinstance(data, Mapping):
        return {
            (to_camel(key) if isinstance(key, str) and "_" in key else key): _camel_keys(value)
            for key, value in data.items()
        }
    return data


def _deep_merge(base: Dict[str, Any], patch: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in patch.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _flatten(data: Any, prefix: str = "") -> Dict[str, Any]:
    if not isinstance(data, Mapping):
        return {prefix: data}
    flat = {}
    for key, value in data.items():
        flat.update(_flatten(value, f"{prefix}.{key}" if prefix else str(key)))
    return flat


class QuoteSession:

    def __init__(
        self,
        service_id,
        provider: ConfigurationProvider,
        inputs: Optional[Mapping[str, Any]] = None,
        session_id: Optional[str] = None,
    ):
        self.calculator = get_calculator(service_id)
        self.service_id = self.calculator.service_id
        self.session_id = session_id or uuid.uuid4().hex
        self.provider = provider
        self.overrides = OverrideLayer()
        self.inputs = self.calculator.parse_inputs(inputs or {})
        self.accepted = False
        self.created_at = datetime.now(timezone.utc)

        resolved = provider.peek(self.service_id)
        self.config = resolved.config
        self.config_source = resolved.source
        self.warnings = [resolved.warning] if resolved.warning else []
        self.outputs = self.recompute()

    def recompute(self) -> QuoteOutputs:
        self.outputs = compute_quote(self.service_id, self.inputs, self.config)
        return self.outputs

    def _base_input_changed(self, reason: str) -> None:
        if self.overrides.invalidate(reason):
            override_invalidations.labels(service=self.service_id.value).inc()

    def update_inputs(self, patch: Mapping[str, Any]) -> QuoteOutputs:
        """Apply a partial input update and recompute."""
        names = _field_names(self.calculator.inputs_model)
        touched = {names[key] for key in patch if key in names}
        data = self.inputs.model_dump()
        data.update({names[key]: value for key, value in patch.items() if key in names})
        self.inputs = self.calculator.inputs_model.model_validate(data)

        if touched - NON_PRICING_FIELDS:
            self._base_input_changed(f"inputs changed: {', '.join(sorted(touched))}")
        return self.recompute()

    def set_override(self, field: QuoteField, value: float) -> None:
        value = float(value)
        if not math.isfinite(value):
            raise ValueError("Override value must be a finite number")
        self.overrides.set(field, value)

    def clear_override(self, field: QuoteField) -> bool:
        return self.overrides.clear(field)

    def exposed(self, field: QuoteField) -> float:
        field = QuoteField(field)
        return self.overrides.wrap(field, getattr(self.outputs, field.value)).value

    def exposed_fields(self) -> Dict[QuoteField, Overridable[float]]:
        return self.overrides.expose(self.outputs.field_values())

    def edit_config(self, patch: Mapping[str, Any]) -> QuoteOutputs:
        """Change rates, minimums or multipliers for this quote only.

        Raises pydantic.ValidationError if the edited document is invalid.
        """
        before = self.config.model_dump(by_alias=True)
        merged = _deep_merge(before, _camel_keys(patch))
        config = self.calculator.config_model.model_validate(merged)

        after = config.model_dump(by_alias=True)
        old, new = _flatten(before), _flatten(after)
        for path in sorted(key for key in new if old.get(key) != new[key]):
            logger.info(
                f"Price change on {self.service_id} session {self.session_id}: "
                f"{path} {old.get(path)} -> {new[path]}"
            )

        self.config = config
        self.config_source = ConfigSource.EDITED
        self._base_input_changed("pricing config edited")
        return self.recompute()

    def apply_config(self, resolved: ResolvedConfig) -> QuoteOutputs:
        if resolved.config != self.config:
            self._base_input_changed("pricing config reloaded")
        self.config = resolved.config
        self.config_source = resolved.source
        self.warnings = [resolved.warning] if resolved.warning else []
        return self.recompute()

    async def load_config(self) -> QuoteOutputs:
        return self.apply_config(await self.provider.get(self.service_id))

    async def refresh_config(self) -> QuoteOutputs:
        resolved = await self.provider.refresh(self.service_id)
        self._base_input_changed("pricing config refreshed")
        return self.apply_config(resolved)

    def handoff_payload(self) -> Dict[str, Any]:
        """Plain data for the document/storage side once a quote is accepted."""
        return {
            "session_id": self.session_id,
            "service_id": self.service_id.value,
            "inputs": self.inputs.model_dump(mode="json"),
            "quote": {
                field.value: round_money(item.value) if field not in _VISIT_FIELDS else item.value
                for field, item in self.exposed_fields().items()
            },
            "overrides": self.overrides.as_dict(),
            "frequency": self.outputs.frequency.value,
            "contract_months": self.outputs.contract_months,
            "rate_tier": self.outputs.rate_tier.value,
            "config_source": self.config_source.value,
            "notes": self.inputs.notes,
        }


_VISIT_FIELDS = frozenset({QuoteField.VISITS_PER_YEAR, QuoteField.VISITS_PER_MONTH})


class SessionStore:
    """In-memory registry of open sessions for the HTTP layer.

    Open sessions expire after ``ttl`` seconds without a lookup. Accepted
    sessions have been handed off already and are kept only for
    ``accepted_ttl`` seconds after acceptance.
    """

    def __init__(
        self,
        ttl: Optional[int] = None,
        accepted_ttl: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = settings.SESSION_TTL if ttl is None else ttl
        self.accepted_ttl = settings.ACCEPTED_SESSION_TTL if accepted_ttl is None else accepted_ttl
        self._clock = clock
        self._sessions: Dict[str, QuoteSession] = {}
        self._expires_at: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def _expire_in(self, session_id: str, seconds: float) -> None:
        self._expires_at[session_id] = self._clock() + seconds

    def _remove(self, session_id: str) -> bool:
        removed = self._sessions.pop(session_id, None) is not None
        self._expires_at.pop(session_id, None)
        active_sessions.set(len(self._sessions))
        return removed

    def create(self, service_id, provider: ConfigurationProvider, inputs=None) -> QuoteSession:
        self.purge_expired()
        session = QuoteSession(service_id, provider, inputs)
        self._sessions[session.session_id] = session
        self._expire_in(session.session_id, self.ttl)
        active_sessions.set(len(self._sessions))
        return session

    def get(self, session_id: str) -> Optional[QuoteSession]:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._clock() >= self._expires_at[session_id]:
            logger.info(f"Quote session {session_id} expired")
            self._remove(session_id)
            return None
        if not session.accepted:
            self._expire_in(session_id, self.ttl)
        return session

    def mark_accepted(self, session: QuoteSession) -> None:
        session.accepted = True
        self._expire_in(session.session_id, self.accepted_ttl)

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [sid for sid, expires_at in self._expires_at.items() if now >= expires_at]
        for session_id in expired:
            self._remove(session_id)
        if expired:
            logger.info(f"Evicted {len(expired)} expired quote session(s)")
        return len(expired)

    def delete(self, session_id: str) -> bool:
        return self._remove(session_id)
