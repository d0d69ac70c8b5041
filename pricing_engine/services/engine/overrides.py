import logging
from dataclasses import dataclass
from typing import Dict, Generic, Optional, TypeVar

from pricing_engine.core.enums import QuoteField

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Overridable(Generic[T]):
    computed: T
    override: Optional[T] = None

    @property
    def value(self) -> T:
        return self.computed if self.override is None else self.override

    @property
    def is_overridden(self) -> bool:
        return self.override is not None


class OverrideLayer:
    """Manual values pinned over computed output fields.

    Pinned values are only substituted on read; they are never fed back into
    the computation. Any base input change drops all of them at once.
    """

    def __init__(self):
        self._values: Dict[QuoteField, float] = {}

    def __contains__(self, field: QuoteField) -> bool:
        return QuoteField(field) in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get(self, field: QuoteField) -> Optional[float]:
        return self._values.get(QuoteField(field))

    def set(self, field: QuoteField, value: float) -> None:
        self._values[QuoteField(field)] = float(value)

    def clear(self, field: QuoteField) -> bool:
        return self._values.pop(QuoteField(field), None) is not None

    def invalidate(self, reason: str = "base input changed") -> int:
        cleared = len(self._values)
        if cleared:
            logger.info(f"Clearing {cleared} override(s): {reason}")
        self._values = {}
        return cleared

    def as_dict(self) -> Dict[str, float]:
        return {field.value: value for field, value in self._values.items()}

    def wrap(self, field: QuoteField, computed: T) -> Overridable[T]:
        return Overridable(computed=computed, override=self.get(field))

    def expose(self, computed: Dict[QuoteField, float]) -> Dict[QuoteField, Overridable[float]]:
        return {field: self.wrap(field, value) for field, value in computed.items()}
