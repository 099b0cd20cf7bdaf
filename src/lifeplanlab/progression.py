"""
Year-over-year progression helpers used to preview amount settings.

These operate on a single amount, rounding after every compounding step, so
their figures can differ by a few units from the projection engine, which
rounds once per year from the unrounded base.
"""

from __future__ import annotations

from lifeplanlab.core.utils import round_half_up


def calculate_compound_growth(principal: float, rate: float, years: int) -> float:
    """
    Grow ``principal`` by ``rate`` percent per year over ``years`` years.

    Returns ``principal`` unchanged when ``rate`` is zero, otherwise the
    half-up rounded result.
    """
    if rate == 0:
        return principal
    return round_half_up(principal * (1 + rate / 100) ** years)


def calculate_yearly_progression(
    base_amount: float,
    change_rate: float | None = None,
    change_amount: float | None = None,
    years: int = 5,
) -> list[float]:
    """
    Amounts for ``years`` consecutive years starting at ``base_amount``.

    Each following year first compounds by ``change_rate`` percent (rounded)
    and then adds ``change_amount``. Unset or zero parameters are skipped.

    **Example:**
        ```python
        calculate_yearly_progression(100_000, change_rate=10, years=3)
        # [100000, 110000, 121000]
        ```
    """
    results = [base_amount]
    current = base_amount
    for _ in range(1, years):
        if change_rate:
            current = round_half_up(current * (1 + change_rate / 100))
        if change_amount:
            current += change_amount
        results.append(current)
    return results


def calculate_simple_progression(
    base_amount: float, yearly_change: float, years: int = 5
) -> list[float]:
    """Linear progression ``base_amount + yearly_change * i`` for ``i < years``."""
    return [base_amount + yearly_change * i for i in range(years)]
