"""
Tests for per-item plan management.
"""

import pytest
from lifeplanlab.core import directory, registry
from lifeplanlab.core.errors import ErrorCode, ErrorKind
from lifeplanlab.core.kinds import DEFAULT_PLAN_NAME, K
from lifeplanlab.core.settings import FlowSetting
from lifeplanlab.core.state import PlanDirectoryEntry, PlanState

SALARY = FlowSetting(start_year=2024, amount=500000, growth_rate=3)


@pytest.fixture
def state() -> PlanState:
    """State with 給与 (income, configured) and 生活費 (expense)."""
    state, _ = registry.add_item(PlanState.empty(), "給与", K.INCOME, K.FLOW)
    state, _ = registry.add_item(state, "生活費", K.EXPENSE, K.FLOW)
    state, _ = registry.write_setting(state, K.INCOME, "給与", DEFAULT_PLAN_NAME, SALARY)
    return state


class TestAddPlan:
    def test_appends_plan_and_clones_default_setting(self, state):
        new_state, result = directory.add_plan(state, "給与", "楽観プラン")

        assert result.success
        assert new_state.plans["給与"].available_plans == (DEFAULT_PLAN_NAME, "楽観プラン")
        assert new_state.plans["給与"].active_plan == DEFAULT_PLAN_NAME
        assert new_state.incomes["給与"].settings["楽観プラン"] == SALARY

    def test_duplicate_add_fails_and_keeps_length(self, state):
        state, first = directory.add_plan(state, "給与", "楽観プラン")
        new_state, second = directory.add_plan(state, "給与", "楽観プラン")

        assert first.success
        assert not second.success
        assert second.code is ErrorCode.DUPLICATE_NAME
        assert second.kind is ErrorKind.DUPLICATE
        assert len(new_state.plans["給与"].available_plans) == 2

    def test_default_name_is_a_duplicate(self, state):
        _, result = directory.add_plan(state, "給与", DEFAULT_PLAN_NAME)
        assert result.code is ErrorCode.DUPLICATE_NAME

    def test_name_is_trimmed(self, state):
        new_state, _ = directory.add_plan(state, "給与", "  楽観プラン  ")
        assert "楽観プラン" in new_state.plans["給与"].available_plans

    @pytest.mark.parametrize("plan_name", ["", "   ", None])
    def test_empty_name_is_rejected(self, state, plan_name):
        new_state, result = directory.add_plan(state, "給与", plan_name)

        assert result.code is ErrorCode.EMPTY_NAME
        assert new_state is state

    def test_name_length_limit(self, state):
        _, ok = directory.add_plan(state, "給与", "あ" * 50)
        _, too_long = directory.add_plan(state, "給与", "あ" * 51)

        assert ok.success
        assert too_long.code is ErrorCode.NAME_TOO_LONG
        assert too_long.kind is ErrorKind.VALIDATION_ERROR

    def test_empty_item_name_wins_over_plan_checks(self, state):
        _, result = directory.add_plan(state, "", "")
        assert result.code is ErrorCode.INVALID_ITEM

    def test_unknown_item(self, state):
        _, result = directory.add_plan(state, "幻", "楽観プラン")

        assert result.code is ErrorCode.ITEM_NOT_FOUND
        assert result.kind is ErrorKind.NOT_FOUND

    def test_plans_are_isolated_between_items(self, state):
        state, _ = directory.add_plan(state, "給与", "楽観プラン")

        assert not directory.plan_exists(state, "生活費", "楽観プラン")

        state, result = directory.add_plan(state, "生活費", "楽観プラン")
        assert result.success
        state, _ = directory.delete_plan(state, "給与", "楽観プラン")
        assert directory.plan_exists(state, "生活費", "楽観プラン")


class TestDeletePlan:
    def test_deleting_active_plan_resets_to_default(self, state):
        state, _ = directory.add_plan(state, "給与", "楽観プラン")
        state, _ = directory.set_active_plan(state, "給与", "楽観プラン")

        new_state, result = directory.delete_plan(state, "給与", "楽観プラン")

        assert result.success
        assert new_state.plans["給与"].active_plan == DEFAULT_PLAN_NAME
        assert new_state.plans["給与"].available_plans == (DEFAULT_PLAN_NAME,)

    def test_deleting_inactive_plan_keeps_active(self, state):
        state, _ = directory.add_plan(state, "給与", "A")
        state, _ = directory.add_plan(state, "給与", "B")
        state, _ = directory.set_active_plan(state, "給与", "B")

        new_state, _ = directory.delete_plan(state, "給与", "A")

        assert new_state.plans["給与"].active_plan == "B"

    def test_setting_data_is_kept(self, state):
        state, _ = directory.add_plan(state, "給与", "楽観プラン")
        new_state, _ = directory.delete_plan(state, "給与", "楽観プラン")

        assert "楽観プラン" in new_state.incomes["給与"].settings

    @pytest.mark.parametrize("item_name", ["給与", "幻"])
    def test_default_plan_is_protected(self, state, item_name):
        new_state, result = directory.delete_plan(state, item_name, DEFAULT_PLAN_NAME)

        assert result.code is ErrorCode.CANNOT_DELETE_DEFAULT
        assert result.kind is ErrorKind.PROTECTED
        assert new_state is state

    def test_unknown_plan(self, state):
        _, result = directory.delete_plan(state, "給与", "悲観プラン")
        assert result.code is ErrorCode.NOT_FOUND

    def test_re_adding_deleted_plan_starts_from_default(self, state):
        state, _ = directory.add_plan(state, "給与", "X")
        state, _ = registry.write_setting(
            state, K.INCOME, "給与", "X", FlowSetting(start_year=2030, amount=1)
        )
        state, _ = directory.delete_plan(state, "給与", "X")

        new_state, result = directory.add_plan(state, "給与", "X")

        assert result.success
        assert registry.get_setting(new_state, K.INCOME, "給与", "X") == SALARY


class TestRenamePlan:
    def test_rename_moves_setting_and_active_selection(self, state):
        state, _ = directory.add_plan(state, "給与", "A")
        state, _ = directory.set_active_plan(state, "給与", "A")

        new_state, result = directory.rename_plan(state, "給与", "A", "B")

        assert result.success
        entry = new_state.plans["給与"]
        assert entry.available_plans == (DEFAULT_PLAN_NAME, "B")
        assert entry.active_plan == "B"
        settings = new_state.incomes["給与"].settings
        assert "A" not in settings
        assert settings["B"] == SALARY

    def test_rename_keeps_position(self, state):
        for name in ("A", "B", "C"):
            state, _ = directory.add_plan(state, "給与", name)

        new_state, _ = directory.rename_plan(state, "給与", "B", "X")

        assert new_state.plans["給与"].available_plans == (DEFAULT_PLAN_NAME, "A", "X", "C")

    def test_default_plan_is_protected(self, state):
        _, result = directory.rename_plan(state, "給与", DEFAULT_PLAN_NAME, "メイン")

        assert result.code is ErrorCode.CANNOT_RENAME_DEFAULT
        assert result.kind is ErrorKind.PROTECTED

    def test_new_name_checks_come_first(self, state):
        _, result = directory.rename_plan(state, "給与", DEFAULT_PLAN_NAME, " ")
        assert result.code is ErrorCode.EMPTY_NAME

    def test_duplicate_target(self, state):
        state, _ = directory.add_plan(state, "給与", "A")
        state, _ = directory.add_plan(state, "給与", "B")

        new_state, result = directory.rename_plan(state, "給与", "A", "B")

        assert result.code is ErrorCode.DUPLICATE_NAME
        assert new_state is state

    def test_unknown_source(self, state):
        _, result = directory.rename_plan(state, "給与", "A", "B")
        assert result.code is ErrorCode.NOT_FOUND


class TestSetActivePlan:
    def test_switches_active_plan(self, state):
        state, _ = directory.add_plan(state, "給与", "楽観プラン")

        new_state, result = directory.set_active_plan(state, "給与", "楽観プラン")

        assert result.success
        assert new_state.plans["給与"].active_plan == "楽観プラン"

    def test_activation_clones_missing_setting(self, state):
        state = state.with_entry(
            "給与", PlanDirectoryEntry((DEFAULT_PLAN_NAME, "楽観プラン"), DEFAULT_PLAN_NAME)
        )
        assert "楽観プラン" not in state.incomes["給与"].settings

        new_state, _ = directory.set_active_plan(state, "給与", "楽観プラン")

        assert new_state.incomes["給与"].settings["楽観プラン"] == SALARY

    def test_activation_keeps_existing_setting(self, state):
        state, _ = directory.add_plan(state, "給与", "楽観プラン")
        state, _ = registry.write_setting(
            state, K.INCOME, "給与", "楽観プラン", FlowSetting(2024, 700000)
        )

        new_state, _ = directory.set_active_plan(state, "給与", "楽観プラン")

        assert new_state.incomes["給与"].settings["楽観プラン"].amount == 700000

    def test_plan_name_is_trimmed(self, state):
        state, _ = directory.add_plan(state, "給与", "楽観プラン")

        new_state, result = directory.set_active_plan(state, "給与", " 楽観プラン ")

        assert result.success
        assert new_state.plans["給与"].active_plan == "楽観プラン"

    def test_unavailable_plan(self, state):
        new_state, result = directory.set_active_plan(state, "給与", "悲観プラン")

        assert result.code is ErrorCode.PLAN_NOT_AVAILABLE
        assert new_state is state

    def test_unknown_item(self, state):
        _, result = directory.set_active_plan(state, "幻", DEFAULT_PLAN_NAME)
        assert result.code is ErrorCode.ITEM_NOT_FOUND


class TestSharedItemName:
    """Items of the same name in two categories share one directory entry."""

    @pytest.fixture
    def shared(self, state) -> PlanState:
        state, _ = registry.add_item(state, "給与", K.ASSET, K.STOCK)
        return state

    def test_add_plan_clones_into_every_category(self, shared):
        new_state, _ = directory.add_plan(shared, "給与", "楽観プラン")

        assert new_state.incomes["給与"].settings["楽観プラン"] == SALARY
        assert "楽観プラン" in new_state.assets["給与"].settings

    def test_rename_moves_every_category(self, shared):
        state, _ = directory.add_plan(shared, "給与", "A")

        new_state, _ = directory.rename_plan(state, "給与", "A", "B")

        for items in (new_state.incomes, new_state.assets):
            assert "A" not in items["給与"].settings
            assert "B" in items["給与"].settings


class TestReads:
    def test_available_plans_default_first(self, state):
        state, _ = directory.add_plan(state, "給与", "A")
        state, _ = directory.add_plan(state, "給与", "B")

        plans = directory.get_available_plans(state, "給与")

        assert [p.name for p in plans] == [DEFAULT_PLAN_NAME, "A", "B"]
        assert [p.is_default for p in plans] == [True, False, False]
        assert plans[0].id == "給与-default"
        assert plans[1].id == "給与-plan-1"
        assert all(p.item_name == "給与" for p in plans)

    def test_unknown_item_reports_default_only(self, state):
        plans = directory.get_available_plans(state, "存在しない項目")

        assert len(plans) == 1
        assert plans[0].name == DEFAULT_PLAN_NAME
        assert plans[0].is_default
        assert plans[0].item_name == "存在しない項目"

    def test_active_plan_descriptor(self, state):
        state, _ = directory.add_plan(state, "給与", "A")
        state, _ = directory.set_active_plan(state, "給与", "A")

        active = directory.get_active_plan(state, "給与")

        assert active.name == "A"
        assert not active.is_default
        assert active.to_dict() == {
            "id": "給与-plan-1",
            "name": "A",
            "isDefault": False,
            "itemName": "給与",
        }

    def test_orphaned_active_plan_reports_default(self, state):
        state = state.with_entry("給与", PlanDirectoryEntry((DEFAULT_PLAN_NAME,), "消えた"))
        assert directory.get_active_plan(state, "給与").is_default

    def test_plan_exists(self, state):
        assert directory.plan_exists(state, "給与", DEFAULT_PLAN_NAME)
        assert directory.plan_exists(state, "幻", DEFAULT_PLAN_NAME)
        assert not directory.plan_exists(state, "給与", "A")
