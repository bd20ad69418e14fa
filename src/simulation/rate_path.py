"""Rate at target trajectory under constant utilization.

Each step evolves the rate at target over ``step_seconds`` and carries the
end rate into the next step. Nothing is kept between calls.
"""

from __future__ import annotations

import logging

import numpy as np

from src.data.constants import IrmConstants
from src.data.interfaces import RateRequest
from src.protocol.adaptive_irm import AdaptiveCurveModel, build_parameter_set
from src.protocol.calculator import rate_per_second_to_apy_percent
from src.protocol.errors import InvalidConfiguration
from src.simulation.results import RatePathResult

logger = logging.getLogger(__name__)


def simulate_rate_path(
    request: RateRequest,
    n_steps: int,
    step_seconds: int,
    constants: IrmConstants | None = None,
) -> RatePathResult:
    """Simulate the rate at target over ``n_steps`` equal periods.

    The request's ``elapsed_time_seconds`` is ignored; ``step_seconds``
    sets the length of each period instead.

    Args:
        request: Curve configuration, initial rate and utilization.
        n_steps: Number of periods to simulate.
        step_seconds: Length of each period in seconds.
        constants: Model constants; defaults to ``IrmConstants()``.

    Returns:
        RatePathResult with ``n_steps + 1`` samples, starting at time 0.
    """
    if n_steps < 1:
        raise InvalidConfiguration(f"n_steps must be at least 1, got {n_steps}")
    if step_seconds < 0:
        raise InvalidConfiguration(f"step_seconds must be non-negative, got {step_seconds}")

    constants = constants or IrmConstants()
    parameter_set = build_parameter_set(request, constants)
    model = AdaptiveCurveModel(parameter_set.params)
    utilization = parameter_set.utilization
    err = model.error(utilization)

    elapsed = np.arange(n_steps + 1, dtype=np.int64) * step_seconds
    rate_at_target = np.empty(n_steps + 1)
    borrow_rate = np.empty(n_steps + 1)

    rate = parameter_set.start_rate_at_target
    rate_at_target[0] = rate_per_second_to_apy_percent(rate, constants).to_float()
    borrow_rate[0] = rate_per_second_to_apy_percent(model.curve(rate, err), constants).to_float()

    for t in range(1, n_steps + 1):
        evolution = model.evolve(rate, step_seconds, utilization)
        rate = evolution.end_rate_at_target
        rate_at_target[t] = rate_per_second_to_apy_percent(rate, constants).to_float()
        borrow_rate[t] = rate_per_second_to_apy_percent(
            model.curve(evolution.avg_rate_at_target, err), constants
        ).to_float()

    logger.debug(
        "Simulated %d steps of %ds: rate at target %.4f%% -> %.4f%%",
        n_steps,
        step_seconds,
        rate_at_target[0],
        rate_at_target[-1],
    )
    return RatePathResult(
        elapsed_seconds=elapsed,
        rate_at_target_apy=rate_at_target,
        borrow_rate_apy=borrow_rate,
    )
