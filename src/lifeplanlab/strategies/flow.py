"""
Recurring income/expense projection strategy.
"""

from __future__ import annotations

import numpy as np

from lifeplanlab.core.interfaces import IProjectionStrategy
from lifeplanlab.core.kinds import ANNUAL_BOOKING_MONTH, K
from lifeplanlab.core.settings import FlowSetting
from lifeplanlab.core.utils import round_half_up


class ProjectionFlow(IProjectionStrategy):
    """
    Projection strategy for flow settings (kind: 'flow').

    A flow books an amount every year of its active window
    ``[start_year, end_year]``. Amounts are annualised first (x12 for monthly
    flows), then grown and shifted per year elapsed since ``start_year``.

    **Formula** (``n = year - start_year``)::

        annual = amount * periods_per_year
        annual *= (1 + growth_rate / 100) ** n       # skipped when growth_rate == 0
        annual += yearly_change * periods_per_year * n  # skipped when unset or 0

    The result is rounded half-up to a whole amount.

    **Example:**
        ```python
        salary = FlowSetting(start_year=2024, amount=500_000, growth_rate=3)
        ProjectionFlow().amount_at(salary, 2026)  # 6_365_400
        ```

    **Note:**
        The flat yearly change is linear in ``n`` and is not compounded,
        even when a growth rate is also set.
    """

    def _annual_amount(self, setting: FlowSetting, year: int) -> float | None:
        """Unrounded annual amount, ``None`` outside the active window."""
        if year < setting.start_year:
            return None
        if setting.end_year is not None and year > setting.end_year:
            return None

        years_passed = year - setting.start_year
        annual = setting.amount * setting.periods_per_year
        if setting.growth_rate:
            annual = annual * (1 + setting.growth_rate / 100) ** years_passed
        if setting.yearly_change:
            annual += setting.yearly_change * setting.periods_per_year * years_passed
        return annual

    def amount_at(self, setting: FlowSetting, year: int) -> float:
        annual = self._annual_amount(setting, year)
        if annual is None:
            return 0
        return round_half_up(annual)

    def project(self, setting: FlowSetting, years: np.ndarray) -> np.ndarray:
        return np.array([self.amount_at(setting, int(y)) for y in years], dtype=float)

    def monthly_amount(self, setting: FlowSetting, year: int, month: int) -> float:
        """
        Amount booked in one month of the year.

        Monthly flows spread the annual amount evenly (rounded per month).
        Yearly flows book the whole annual amount in ``ANNUAL_BOOKING_MONTH``.
        """
        annual = self._annual_amount(setting, year)
        if annual is None:
            return 0
        if setting.frequency == K.MONTHLY:
            return round_half_up(annual / 12)
        return round_half_up(annual) if month == ANNUAL_BOOKING_MONTH else 0
