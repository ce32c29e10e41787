"""
Step-based wage progression.

Pay step is determined by cumulative credited career hours; the hourly rate is
the step's base rate compounded by the pay scale's annual raise rate for every
year since the start of the projection.
"""

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .rate_tables import NUM_PAY_STEPS, PayScale


class WageModel(BaseModel):
    """Computes pay step and hourly rate from a pay scale."""

    model_config = ConfigDict(frozen=True)

    pay_scale: PayScale = Field(..., description="Step rates and thresholds")

    _thresholds: NDArray[np.float64] = PrivateAttr()

    def model_post_init(self, __context: object) -> None:
        self._thresholds = np.asarray(
            self.pay_scale.thresholds_in_step_order(), dtype=np.float64
        )

    def determine_step(self, cumulative_hours: float) -> int:
        """
        Determine the pay step for a cumulative-hours total.

        Returns the first step whose threshold is >= the hours (thresholds
        are inclusive upper bounds), or the top step when the hours exceed
        every threshold.
        """
        index = int(np.searchsorted(self._thresholds, cumulative_hours, side="left"))
        return min(index + 1, NUM_PAY_STEPS)

    def hourly_rate(self, cumulative_hours: float, years_from_start: int) -> float:
        """
        Hourly rate for a cumulative-hours total after some years of raises.

        Args:
            cumulative_hours: Credited career hours, used to pick the step
            years_from_start: Years since the projection's first age

        Returns:
            Step base rate compounded by the annual raise rate
        """
        step = self.determine_step(cumulative_hours)
        base_rate = self.pay_scale.step_rates[step]
        return base_rate * (1 + self.pay_scale.annual_raise_rate) ** years_from_start
