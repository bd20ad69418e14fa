"""Result dataclasses for simulation outputs."""

from dataclasses import dataclass

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class RatePathResult:
    """Rate at target and borrow rate sampled at the end of each step.

    Attributes:
        elapsed_seconds: (n_steps + 1,) array of time since start, in seconds.
        rate_at_target_apy: (n_steps + 1,) array of rate at target, percent APY.
        borrow_rate_apy: (n_steps + 1,) array of curve-projected average
            borrow rate over the step, percent APY. The first entry is the
            borrow rate at the starting rate at target.
    """

    elapsed_seconds: np.ndarray
    rate_at_target_apy: np.ndarray
    borrow_rate_apy: np.ndarray

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "elapsed_seconds": self.elapsed_seconds,
                "rate_at_target_apy": self.rate_at_target_apy,
                "borrow_rate_apy": self.borrow_rate_apy,
            }
        )
