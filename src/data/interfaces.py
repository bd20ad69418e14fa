"""Request and result records exchanged with the rate calculator."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from src.protocol.fixed_point import FixedPoint

Numeric = int | float | Decimal | str


@dataclass(frozen=True)
class RateRequest:
    """User-facing calculator inputs.

    Percentages are plain percent values (``90`` means 90%), rates are
    percent per year.
    """

    current_utilization: Numeric  # %
    elapsed_time_seconds: int
    curve_steepness: Numeric
    initial_rate: Numeric  # % per year
    adjustment_speed: Numeric  # per year
    target_utilization: Numeric  # %
    min_rate: Numeric  # % per year
    max_rate: Numeric  # % per year


@dataclass(frozen=True)
class RateResult:
    """Outcome of a single rate calculation.

    Attributes:
        avg_rate_before_curve_apy: Average rate at target, annualized percent.
        avg_rate_after_curve_apy: Average applied borrow rate, annualized percent.
        avg_rate_at_target: Average rate at target, per second.
        end_rate_at_target: Rate at target at the end of the period, per second.
        avg_borrow_rate: Curve-projected average rate, per second.
        error: Normalized utilization error in [-1, 1].
    """

    avg_rate_before_curve_apy: FixedPoint
    avg_rate_after_curve_apy: FixedPoint
    avg_rate_at_target: FixedPoint
    end_rate_at_target: FixedPoint
    avg_borrow_rate: FixedPoint
    error: FixedPoint

    def formatted(self) -> dict[str, str]:
        """Both APY figures as text with two decimals."""
        return {
            "avg_rate_before_curve_apy": f"{self.avg_rate_before_curve_apy:.2f}",
            "avg_rate_after_curve_apy": f"{self.avg_rate_after_curve_apy:.2f}",
        }
