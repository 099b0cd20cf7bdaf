"""
Asset/debt balance projection strategy.
"""

from __future__ import annotations

import numpy as np

from lifeplanlab.core.interfaces import IProjectionStrategy
from lifeplanlab.core.settings import StockSetting
from lifeplanlab.core.utils import round_half_up


class ProjectionStock(IProjectionStrategy):
    """
    Projection strategy for stock settings (kind: 'stock').

    The balance equals ``base_amount`` up to and including ``base_year``.
    After that it is rolled forward one year at a time: growth by ``rate``
    percent first, then the flat ``yearly_change`` (contribution when positive,
    withdrawal when negative). Only the final balance is rounded.

    **Example:**
        ```python
        savings = StockSetting(base_year=2024, base_amount=1_000_000, rate=10,
                               yearly_change=-50_000)
        ProjectionStock().amount_at(savings, 2026)  # 1_105_000
        ```
    """

    def amount_at(self, setting: StockSetting, year: int) -> float:
        if year <= setting.base_year:
            return setting.base_amount

        balance = setting.base_amount
        for _ in range(year - setting.base_year):
            if setting.rate:
                balance *= 1 + setting.rate / 100
            balance += setting.yearly_change
        return round_half_up(balance)

    def project(self, setting: StockSetting, years: np.ndarray) -> np.ndarray:
        return np.array([self.amount_at(setting, int(y)) for y in years], dtype=float)

    def monthly_amount(self, setting: StockSetting, year: int, month: int) -> float:
        # Balances are not booked per month
        return 0
