"""Single-pass borrow rate calculation from user-facing inputs."""

from __future__ import annotations

import logging

from src.data.constants import IrmConstants
from src.data.interfaces import RateRequest, RateResult
from src.protocol.adaptive_irm import AdaptiveCurveModel, build_parameter_set
from src.protocol.fixed_point import FixedPoint

logger = logging.getLogger(__name__)


def rate_per_second_to_rate_per_year(
    rate_per_second: FixedPoint,
    constants: IrmConstants | None = None,
) -> FixedPoint:
    constants = constants or IrmConstants()
    return rate_per_second * constants.seconds_per_year


def rate_per_second_to_apy_percent(
    rate_per_second: FixedPoint,
    constants: IrmConstants | None = None,
) -> FixedPoint:
    """Annualize a per-second rate and express it in percent."""
    return rate_per_second_to_rate_per_year(rate_per_second, constants) * 100


def calculate(
    request: RateRequest,
    constants: IrmConstants | None = None,
) -> RateResult:
    """Compute average rates before and after the curve for one request.

    The rate at target starts at the request's initial rate, evolves over
    the elapsed time at the given utilization, and its average is then
    projected through the curve. Both averages are reported as annualized
    percentages.

    Raises:
        InvalidConfiguration: the request cannot be turned into parameters.
        FixedPointOverflow: an intermediate value left the fixed-point range.
    """
    constants = constants or IrmConstants()
    parameter_set = build_parameter_set(request, constants)
    model = AdaptiveCurveModel(parameter_set.params)

    evolution = model.evolve(
        parameter_set.start_rate_at_target,
        parameter_set.elapsed_time_seconds,
        parameter_set.utilization,
    )
    avg_borrow_rate = model.curve(evolution.avg_rate_at_target, evolution.error)

    result = RateResult(
        avg_rate_before_curve_apy=rate_per_second_to_apy_percent(
            evolution.avg_rate_at_target, constants
        ),
        avg_rate_after_curve_apy=rate_per_second_to_apy_percent(avg_borrow_rate, constants),
        avg_rate_at_target=evolution.avg_rate_at_target,
        end_rate_at_target=evolution.end_rate_at_target,
        avg_borrow_rate=avg_borrow_rate,
        error=evolution.error,
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Start rate %.4f%%, end rate at target %.4f%%, average %.4f%% before curve, %.4f%% after",
            rate_per_second_to_apy_percent(parameter_set.start_rate_at_target, constants).to_float(),
            rate_per_second_to_apy_percent(evolution.end_rate_at_target, constants).to_float(),
            result.avg_rate_before_curve_apy.to_float(),
            result.avg_rate_after_curve_apy.to_float(),
        )
    return result
