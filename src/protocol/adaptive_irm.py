"""Adaptive curve interest rate model.

The rate at target utilization adapts exponentially in the direction of the
utilization error, bounded by a minimum and maximum rate. The applied borrow
rate is the rate at target projected through an asymmetric linear curve.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
import pandas as pd

from src.data.constants import IrmConstants
from src.data.interfaces import RateRequest
from src.protocol.errors import InvalidConfiguration
from src.protocol.fixed_point import FixedPoint

logger = logging.getLogger(__name__)

_HUNDRED = FixedPoint.from_num(100)


@dataclass(frozen=True)
class AdaptiveCurveParams:
    """Per-second parameters of the adaptive curve."""

    curve_steepness: FixedPoint
    adjustment_speed: FixedPoint  # per second
    target_utilization: FixedPoint  # ratio in (0, 1)
    min_rate: FixedPoint  # per second
    max_rate: FixedPoint  # per second
    constants: IrmConstants

    def __post_init__(self) -> None:
        if self.target_utilization in (FixedPoint.ZERO, FixedPoint.ONE):
            raise InvalidConfiguration("target utilization must be strictly between 0% and 100%")
        if self.curve_steepness == FixedPoint.ZERO:
            raise InvalidConfiguration("curve steepness must be non-zero")


@dataclass(frozen=True)
class RateEvolution:
    """Rate at target over one elapsed period."""

    avg_rate_at_target: FixedPoint
    end_rate_at_target: FixedPoint
    error: FixedPoint


@dataclass(frozen=True)
class ParameterSet:
    """Everything needed for one calculation, in fixed-point form."""

    params: AdaptiveCurveParams
    start_rate_at_target: FixedPoint
    utilization: FixedPoint
    elapsed_time_seconds: int


def build_parameter_set(
    request: RateRequest,
    constants: IrmConstants | None = None,
) -> ParameterSet:
    """Convert user-facing percentages to per-second fixed-point values.

    Percentages are divided by 100. Annualized rates (initial, min and max
    rate) are further divided by the number of seconds in a year. The
    adjustment speed is a per-year factor and is only divided by the
    number of seconds in a year.

    Raises:
        InvalidConfiguration: target utilization is 0% or 100%, curve
            steepness is zero, or elapsed time is negative.
        FixedPointOverflow: an input does not fit the fixed-point range.
    """
    constants = constants or IrmConstants()
    if request.elapsed_time_seconds < 0:
        raise InvalidConfiguration(
            f"elapsed time must be non-negative, got {request.elapsed_time_seconds}s"
        )
    seconds_per_year = FixedPoint.from_num(constants.seconds_per_year)

    def ratio(value) -> FixedPoint:
        return FixedPoint.from_num(value) / _HUNDRED

    def per_second(value) -> FixedPoint:
        return ratio(value) / seconds_per_year

    params = AdaptiveCurveParams(
        curve_steepness=FixedPoint.from_num(request.curve_steepness),
        adjustment_speed=FixedPoint.from_num(request.adjustment_speed) / seconds_per_year,
        target_utilization=ratio(request.target_utilization),
        min_rate=per_second(request.min_rate),
        max_rate=per_second(request.max_rate),
        constants=constants,
    )
    return ParameterSet(
        params=params,
        start_rate_at_target=per_second(request.initial_rate),
        utilization=ratio(request.current_utilization),
        elapsed_time_seconds=int(request.elapsed_time_seconds),
    )


class AdaptiveCurveModel:
    """Adaptive curve rate model over a fixed parameter set."""

    def __init__(self, params: AdaptiveCurveParams) -> None:
        self.params = params

    def error(self, utilization: FixedPoint) -> FixedPoint:
        """Normalized distance from target utilization, in [-1, 1].

        Above target the gap is scaled by ``1 - target``, otherwise by
        ``target``.
        """
        target = self.params.target_utilization
        if utilization > target:
            norm_factor = FixedPoint.ONE - target
        else:
            norm_factor = target
        return (utilization - target) / norm_factor

    def new_rate_at_target(
        self,
        start_rate_at_target: FixedPoint,
        linear_adaptation: FixedPoint,
    ) -> FixedPoint:
        """Grow ``start_rate_at_target`` by ``exp(linear_adaptation)``.

        The exponent is evaluated in floating point and saturated to the
        configured exponent bounds; the product is clamped to
        ``[min_rate, max_rate]``.
        """
        p = self.params
        exponent = linear_adaptation.to_float()
        clamped = min(max(exponent, p.constants.min_exponent), p.constants.max_exponent)
        if clamped != exponent:
            logger.debug("Exponent %.6g saturated to %.1f", exponent, clamped)
        growth = FixedPoint.from_num(math.exp(clamped))
        return (start_rate_at_target * growth).clamp(p.min_rate, p.max_rate)

    def evolve(
        self,
        start_rate_at_target: FixedPoint,
        elapsed_time_seconds: int,
        utilization: FixedPoint,
    ) -> RateEvolution:
        """Evolve the rate at target over ``elapsed_time_seconds``.

        Returns the end-of-period rate at target and its time average,
        approximated with weights 1:2:1 on the start, midpoint and end
        rates. Only the midpoint and end rates are clamped, so a starting rate
        outside the bounds pulls the average outside them too. A zero
        starting rate stays zero.
        """
        if elapsed_time_seconds < 0:
            raise InvalidConfiguration(
                f"elapsed time must be non-negative, got {elapsed_time_seconds}s"
            )
        err = self.error(utilization)

        if start_rate_at_target == FixedPoint.ZERO:
            return RateEvolution(
                avg_rate_at_target=FixedPoint.ZERO,
                end_rate_at_target=FixedPoint.ZERO,
                error=err,
            )

        speed = self.params.adjustment_speed * err
        linear_adaptation = speed * FixedPoint.from_num(elapsed_time_seconds)

        end_rate = self.new_rate_at_target(start_rate_at_target, linear_adaptation)
        mid_rate = self.new_rate_at_target(start_rate_at_target, linear_adaptation / 2)
        avg_rate = (start_rate_at_target + end_rate + 2 * mid_rate) / 4

        return RateEvolution(avg_rate_at_target=avg_rate, end_rate_at_target=end_rate, error=err)

    def curve(self, rate_at_target: FixedPoint, err: FixedPoint) -> FixedPoint:
        """Project a rate at target through the utilization curve.

        The slope is ``steepness - 1`` at or above target and
        ``1 - 1/steepness`` below it. The result is not bounded by the
        minimum and maximum rate.
        """
        steepness = self.params.curve_steepness
        if err.is_negative():
            coeff = FixedPoint.ONE - FixedPoint.ONE / steepness
        else:
            coeff = steepness - FixedPoint.ONE
        return (coeff * err + FixedPoint.ONE) * rate_at_target

    def borrow_rate(self, rate_at_target: FixedPoint, utilization: FixedPoint) -> FixedPoint:
        """Applied borrow rate for a utilization, per second."""
        return self.curve(rate_at_target, self.error(utilization))

    def rate_curve(
        self, rate_at_target: FixedPoint, n_points: int = 200
    ) -> pd.DataFrame:
        """Generate the borrow rate curve for plotting.

        Returns:
            DataFrame with columns: utilization, borrow_rate (annualized
            decimal, e.g. 0.04 = 4%).
        """
        seconds_per_year = self.params.constants.seconds_per_year
        utilizations = np.linspace(0, 1, n_points)
        borrow_rates = [
            self.borrow_rate(rate_at_target, FixedPoint.from_num(float(u))).to_float()
            * seconds_per_year
            for u in utilizations
        ]

        return pd.DataFrame(
            {
                "utilization": utilizations,
                "borrow_rate": borrow_rates,
            }
        )
