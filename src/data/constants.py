"""Rate model constants and default calculator inputs."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IrmConstants:
    """Fixed settings of the adaptive curve rate model.

    Attributes:
        seconds_per_year: Seconds in a 365.25-day year, used to convert
            annualized rates to per-second rates and back.
        max_exponent: Upper bound on the exponent fed to ``exp`` when
            evolving the rate at target. ``e**50`` still fits the
            fixed-point integer range.
        min_exponent: Lower bound on the same exponent.
    """

    seconds_per_year: int = 31_557_600  # 60 * 60 * 24 * 365.25
    max_exponent: float = 50.0
    min_exponent: float = -50.0


# Default calculator inputs, as entered by a user (percent or plain numbers)
DEFAULT_CURVE_STEEPNESS = 4
DEFAULT_INITIAL_RATE = 4  # % per year
DEFAULT_ADJUSTMENT_SPEED = 50  # per year
DEFAULT_TARGET_UTILIZATION = 90  # %
DEFAULT_MIN_RATE = 0.1  # % per year
DEFAULT_MAX_RATE = 200  # % per year
