from pricing_engine.core.enums import RateTier
from pricing_engine.schemas.pricing_config import RateTiers


def amplify_monthly(base_monthly: float, active: bool, discount: float) -> float:
    """Twice-as-often pricing for a companion bundle: 2x the base less a flat discount."""
    if not active:
        return base_monthly
    return max(2 * base_monthly - discount, 0.0)


def rate_tier_multiplier(tier: RateTier, tiers: RateTiers) -> float:
    if tier is RateTier.PREMIUM:
        return tiers.premium
    return tiers.standard
