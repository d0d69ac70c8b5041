from pricing_engine.schemas.pricing_config import InstallMultipliers
from pricing_engine.utils.numbers import to_quantity


def installation_multiplier(dirty: bool, multipliers: InstallMultipliers) -> float:
    return multipliers.elevated if dirty else multipliers.standard


def installation_fee(
    base_price: float,
    dirty: bool,
    multipliers: InstallMultipliers,
    include_install: bool,
) -> float:
    """One-time fee on the frequency-independent base price of the service."""
    if not include_install:
        return 0.0
    return to_quantity(base_price) * installation_multiplier(dirty, multipliers)
