"""Default calculator configuration."""

from src.data.constants import (
    DEFAULT_ADJUSTMENT_SPEED,
    DEFAULT_CURVE_STEEPNESS,
    DEFAULT_INITIAL_RATE,
    DEFAULT_MAX_RATE,
    DEFAULT_MIN_RATE,
    DEFAULT_TARGET_UTILIZATION,
)
from src.data.interfaces import Numeric, RateRequest


def default_request(
    current_utilization: Numeric,
    elapsed_time_seconds: int,
) -> RateRequest:
    """Build a request using the default curve configuration.

    Only the market observation (utilization and elapsed time) is taken
    from the caller.
    """
    return RateRequest(
        current_utilization=current_utilization,
        elapsed_time_seconds=elapsed_time_seconds,
        curve_steepness=DEFAULT_CURVE_STEEPNESS,
        initial_rate=DEFAULT_INITIAL_RATE,
        adjustment_speed=DEFAULT_ADJUSTMENT_SPEED,
        target_utilization=DEFAULT_TARGET_UTILIZATION,
        min_rate=DEFAULT_MIN_RATE,
        max_rate=DEFAULT_MAX_RATE,
    )
