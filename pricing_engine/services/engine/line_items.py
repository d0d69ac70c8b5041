import math
from dataclasses import dataclass

from pricing_engine.utils.numbers import safe_divide, to_quantity


@dataclass(frozen=True)
class LineItemPrice:
    raw: float
    applied: float
    minimum_applied: bool

    @classmethod
    def zero(cls) -> "LineItemPrice":
        return cls(raw=0.0, applied=0.0, minimum_applied=False)


def floor_at_minimum(raw: float, minimum: float) -> LineItemPrice:
    """Apply a minimum charge to an already computed amount."""
    raw = to_quantity(raw)
    if raw <= 0:
        return LineItemPrice.zero()
    minimum = to_quantity(minimum)
    return LineItemPrice(raw=raw, applied=max(raw, minimum), minimum_applied=raw <= minimum)


def price_with_minimum(quantity: float, rate: float, minimum: float = 0.0) -> LineItemPrice:
    quantity = to_quantity(quantity)
    if quantity <= 0:
        return LineItemPrice.zero()
    raw = quantity * to_quantity(rate)
    minimum = to_quantity(minimum)
    return LineItemPrice(raw=raw, applied=max(raw, minimum), minimum_applied=0 < raw <= minimum)


def block_area_price(
    area: float,
    block_unit: float,
    first_block_rate: float,
    additional_block_rate: float,
    exact: bool = False,
) -> float:
    """Flat first block, then either a linear or a whole-block rate for the rest.

    An empty area prices at 0 so an unused service line stays inactive.
    """
    area = to_quantity(area)
    if area <= 0:
        return 0.0
    block_unit = to_quantity(block_unit)
    first_block_rate = to_quantity(first_block_rate)
    if block_unit <= 0 or area <= block_unit:
        return first_block_rate

    extra = area - block_unit
    additional_block_rate = to_quantity(additional_block_rate)
    if exact:
        return first_block_rate + extra * safe_divide(additional_block_rate, block_unit)
    return first_block_rate + math.ceil(extra / block_unit) * additional_block_rate


def units_of(quantity: float, unit: float, exact: bool = False) -> float:
    """Number of pricing units in a quantity, rounded up unless exact."""
    units = safe_divide(to_quantity(quantity), to_quantity(unit))
    return units if exact else float(math.ceil(units - 1e-9))
