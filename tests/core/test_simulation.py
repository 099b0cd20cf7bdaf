"""
Tests for the projection engine.
"""

import pandas as pd
import pytest
from lifeplanlab.core import directory, registry
from lifeplanlab.core.kinds import DEFAULT_PLAN_NAME, K
from lifeplanlab.core.settings import FlowSetting, StockSetting
from lifeplanlab.core.simulation import (
    calculate_monthly_data,
    calculate_simulation,
    results_to_frame,
)
from lifeplanlab.core.state import PlanState


def _state(*items) -> PlanState:
    """Build a state from ``(name, category, setting)`` triples."""
    state = PlanState.empty()
    for name, category, setting in items:
        state, result = registry.add_item(state, name, category, setting.kind)
        assert result.success
        state, result = registry.write_setting(
            state, category, name, DEFAULT_PLAN_NAME, setting
        )
        assert result.success
    return state


SALARY = ("給与", K.INCOME, FlowSetting(start_year=2024, amount=500000, growth_rate=3))
LIVING = ("生活費", K.EXPENSE, FlowSetting(start_year=2024, amount=300000, growth_rate=2))
SAVINGS = (
    "預金",
    K.ASSET,
    StockSetting(base_year=2024, base_amount=1000000, rate=10, yearly_change=-50000),
)


class TestCalculateSimulation:
    def test_first_year_is_annualized_base(self):
        results = calculate_simulation(_state(SALARY), period_years=0)

        assert len(results) == 1
        assert results[0].year == 2024
        assert results[0].income == 6000000

    def test_compound_growth_is_rounded(self):
        results = calculate_simulation(_state(SALARY), period_years=2)
        assert results[2].income == 6365400

    def test_stock_rolls_forward_growth_then_change(self):
        results = calculate_simulation(_state(SAVINGS), period_years=2)

        assert [r.assets for r in results] == [1000000, 1050000, 1105000]

    def test_one_row_per_year_inclusive(self):
        results = calculate_simulation(_state(SALARY), period_years=10, start_year=2030)

        assert len(results) == 11
        assert results[0].year == 2030
        assert results[-1].year == 2040

    def test_negative_horizon_yields_nothing(self):
        assert calculate_simulation(_state(SALARY), period_years=-1) == []

    def test_net_figures(self):
        debt = ("住宅ローン", K.DEBT, StockSetting(base_year=2024, base_amount=30000000))
        results = calculate_simulation(
            _state(SALARY, LIVING, SAVINGS, debt), period_years=1
        )

        first = results[0]
        assert first.expense == 3600000
        assert first.net_income == 6000000 - 3600000
        assert first.debts == 30000000
        assert first.net_assets == 1000000 - 30000000

    def test_flow_window_is_inclusive(self):
        bonus = ("賞与", K.INCOME, FlowSetting(2025, 1000000, K.YEARLY, end_year=2026))
        results = calculate_simulation(_state(bonus), period_years=3)

        assert [r.income for r in results] == [0, 1000000, 1000000, 0]

    def test_yearly_change_is_annualized_and_linear(self):
        allowance = (
            "手当",
            K.INCOME,
            FlowSetting(2024, 100000, K.MONTHLY, yearly_change=1000),
        )
        results = calculate_simulation(_state(allowance), period_years=2)

        assert [r.income for r in results] == [1200000, 1212000, 1224000]

    def test_uses_active_plan_setting(self):
        state = _state(SALARY)
        state, _ = directory.add_plan(state, "給与", "楽観プラン")
        state, _ = registry.write_setting(
            state, K.INCOME, "給与", "楽観プラン", FlowSetting(2024, 600000)
        )

        before = calculate_simulation(state, period_years=0)[0].income
        state, _ = directory.set_active_plan(state, "給与", "楽観プラン")
        after = calculate_simulation(state, period_years=0)[0].income

        assert before == 6000000
        assert after == 7200000

    def test_missing_setting_contributes_zero(self):
        state = _state(SALARY, LIVING)
        item = state.incomes["給与"].without_setting(DEFAULT_PLAN_NAME)
        state = state.with_item(K.INCOME, "給与", item)

        first = calculate_simulation(state, period_years=0)[0]

        assert first.income == 0
        assert first.expense == 3600000

    def test_item_without_directory_entry_uses_default_plan(self):
        state = _state(SALARY)
        state = PlanState(plans={}, incomes=state.incomes)

        assert calculate_simulation(state, period_years=0)[0].income == 6000000

    def test_invalid_type_contributes_zero(self):
        state = PlanState.from_dict(
            {"assets": {"金": {"type": "gold", "settings": {DEFAULT_PLAN_NAME: {"oz": 3}}}}}
        )
        assert calculate_simulation(state, period_years=0)[0].assets == 0

    def test_does_not_mutate_state(self):
        state = _state(SALARY, SAVINGS)
        snapshot = state.to_dict()

        calculate_simulation(state, period_years=5)

        assert state.to_dict() == snapshot


class TestMonthlyData:
    def test_monthly_flow_spreads_evenly(self):
        months = calculate_monthly_data(_state(SALARY, LIVING), year=2025)

        assert len(months) == 12
        assert [m.month for m in months] == list(range(1, 13))
        assert all(m.income == 515000 for m in months)
        assert all(m.expense == 306000 for m in months)
        assert months[0].net == 515000 - 306000

    def test_yearly_flow_is_booked_in_march(self):
        tax = ("固定資産税", K.EXPENSE, FlowSetting(2024, 150000, K.YEARLY))
        months = calculate_monthly_data(_state(tax), year=2024)

        assert months[2].expense == 150000
        assert sum(m.expense for m in months) == 150000

    def test_outside_window_is_zero(self):
        months = calculate_monthly_data(_state(SALARY), year=2023)
        assert all(m.income == 0 for m in months)

    def test_stocks_are_not_booked_monthly(self):
        months = calculate_monthly_data(_state(SAVINGS), year=2025)
        assert all(m.income == 0 and m.expense == 0 for m in months)


def test_results_to_frame():
    results = calculate_simulation(_state(SALARY, LIVING), period_years=2)

    df = results_to_frame(results)

    assert isinstance(df, pd.DataFrame)
    assert list(df.index) == [2024, 2025, 2026]
    assert list(df.columns) == [
        "income",
        "expense",
        "net_income",
        "assets",
        "debts",
        "net_assets",
    ]
    assert df.loc[2026, "income"] == pytest.approx(6365400)
    assert df.loc[2024, "net_income"] == pytest.approx(2400000)


def test_results_to_frame_empty():
    df = results_to_frame([])

    assert df.empty
    assert "income" in df.columns
