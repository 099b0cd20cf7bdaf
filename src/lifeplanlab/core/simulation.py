"""
Projection engine for LifePlanLab.

Turns a :class:`~lifeplanlab.core.state.PlanState` snapshot into yearly P/L
and balance-sheet totals, using each item's *active* plan. Per-item amounts
come from the projection strategy registered for the setting's kind.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

import numpy as np
import pandas as pd

from .interfaces import strategy_for
from .kinds import DEFAULT_BASE_YEAR, DEFAULT_PLAN_NAME, K
from .results import MonthResult, YearResult
from .settings import FlowSetting, Setting, StockSetting
from .state import Item, PlanState

logger = logging.getLogger(__name__)

YEAR_COLUMNS = ["income", "expense", "net_income", "assets", "debts", "net_assets"]


def _amount(value) -> int | float:
    value = float(value)
    return int(value) if value.is_integer() else value


def active_plan_name(state: PlanState, item_name: str) -> str:
    """Active plan of an item, the default plan when it has no directory entry."""
    entry = state.plans.get(item_name)
    return entry.active_plan if entry is not None else DEFAULT_PLAN_NAME


def active_setting(state: PlanState, item_name: str, item: Item) -> Setting | None:
    """
    Resolve the setting the projection uses for an item.

    Returns ``None`` (the item contributes nothing) when the active plan has no
    setting or the setting was never resolved because the item's type is invalid.
    """
    plan_name = active_plan_name(state, item_name)
    setting = item.settings.get(plan_name)
    if setting is None:
        logger.debug("No setting for plan '%s' of '%s'; skipping", plan_name, item_name)
        return None
    if not isinstance(setting, (FlowSetting, StockSetting)):
        logger.debug("Unresolved %r setting on '%s'; skipping", item.type, item_name)
        return None
    return setting


def _category_series(state: PlanState, category: str, years: np.ndarray) -> np.ndarray:
    total = np.zeros(len(years))
    for item_name, item in state.category_items(category).items():
        setting = active_setting(state, item_name, item)
        if setting is None:
            continue
        total += strategy_for(setting).project(setting, years)
    return total


def calculate_simulation(
    state: PlanState, period_years: int, start_year: int = DEFAULT_BASE_YEAR
) -> list[YearResult]:
    """
    Project yearly totals from ``start_year`` through ``start_year + period_years``.

    Args:
        state: Snapshot to project
        period_years: Horizon in years; the result has ``period_years + 1`` rows
            (none when negative)
        start_year: First projected year

    Returns:
        One :class:`YearResult` per year, in ascending order

    **Example:**
        ```python
        results = calculate_simulation(state, period_years=10)
        results[0].income      # first-year income total
        results[-1].net_assets  # assets - debts after ten years
        ```
    """
    years = np.arange(start_year, start_year + period_years + 1)
    income = _category_series(state, K.INCOME, years)
    expense = _category_series(state, K.EXPENSE, years)
    assets = _category_series(state, K.ASSET, years)
    debts = _category_series(state, K.DEBT, years)
    net_income = income - expense
    net_assets = assets - debts

    return [
        YearResult(
            year=int(years[i]),
            income=_amount(income[i]),
            expense=_amount(expense[i]),
            net_income=_amount(net_income[i]),
            assets=_amount(assets[i]),
            debts=_amount(debts[i]),
            net_assets=_amount(net_assets[i]),
        )
        for i in range(len(years))
    ]


def calculate_monthly_data(state: PlanState, year: int) -> list[MonthResult]:
    """
    Break one year's income and expense down by month.

    Only the income and expense categories are booked; balances have no
    monthly breakdown.
    """
    income = np.zeros(12)
    expense = np.zeros(12)
    for category, totals in ((K.INCOME, income), (K.EXPENSE, expense)):
        for item_name, item in state.category_items(category).items():
            setting = active_setting(state, item_name, item)
            if setting is None:
                continue
            strategy = strategy_for(setting)
            for month in range(1, 13):
                totals[month - 1] += strategy.monthly_amount(setting, year, month)

    return [
        MonthResult(
            month=month,
            income=_amount(income[month - 1]),
            expense=_amount(expense[month - 1]),
            net=_amount(income[month - 1] - expense[month - 1]),
        )
        for month in range(1, 13)
    ]


def results_to_frame(results: list[YearResult]) -> pd.DataFrame:
    """Tabular view of a projection, one row per year indexed by ``year``."""
    df = pd.DataFrame([asdict(r) for r in results], columns=["year", *YEAR_COLUMNS])
    return df.set_index("year")
