"""
Stateful facade over the pure LifePlanLab core.

:class:`PlanStore` holds the current :class:`~lifeplanlab.core.state.PlanState`
snapshot and a last-error slot. Each mutation runs the matching pure state
transition, keeps the new snapshot on success, and records the failure message
on failure. Domain failures never raise.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from lifeplanlab.core import directory, registry, simulation, validation
from lifeplanlab.core.errors import ConfigError, ErrorCode
from lifeplanlab.core.forms import AmountSettingForm, form_to_setting, validate_amount_form
from lifeplanlab.core.kinds import DEFAULT_BASE_YEAR, DEFAULT_PLAN_NAME
from lifeplanlab.core.results import MonthResult, OperationResult, PlanDescriptor, YearResult
from lifeplanlab.core.settings import Setting
from lifeplanlab.core.state import PlanState
from lifeplanlab.core.utils import parse_item_id
from lifeplanlab.core.validation import ConsistencyReport, FixReport, ValidationReport

logger = logging.getLogger(__name__)


class PlanStore:
    """
    Single-writer store for planning data.

    Attributes:
        state: Current snapshot; replaced (never mutated) by successful operations
        last_error: Message of the most recent failed operation, kept until
            :meth:`clear_error` is called

    **Example:**
        ```python
        store = PlanStore()
        store.add_item("給与", "income", "flow")
        store.save_amount_setting("income-給与", "デフォルトプラン",
                                  {"startYear": 2024, "amount": 500_000,
                                   "frequency": "monthly", "growthRate": 3})
        store.add_item_plan("給与", "楽観プラン")
        store.set_item_active_plan("給与", "楽観プラン")
        results = store.calculate_simulation(period_years=10)
        ```
    """

    def __init__(self, state: PlanState | None = None):
        self.state = state if state is not None else PlanState.empty()
        self.last_error: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlanStore:
        """
        Build a store from the external state shape.

        Raises:
            ConfigError: If the snapshot is malformed
        """
        return cls(PlanState.from_dict(data))

    def to_dict(self) -> dict[str, Any]:
        return self.state.to_dict()

    def _commit(
        self, new_state: PlanState, result: OperationResult, operation: str
    ) -> OperationResult:
        if result.success:
            self.state = new_state
        else:
            self._record(result, operation)
        return result

    def _record(self, result: OperationResult, operation: str) -> None:
        self.last_error = result.error
        logger.warning("%s failed (%s): %s", operation, result.code.value, result.error)

    def clear_error(self) -> None:
        self.last_error = None

    # === Mutations ===

    def add_item(self, name: str, category: str, item_type: str) -> OperationResult:
        """Add an item; adding an existing item is a silent no-op."""
        new_state, result = registry.add_item(self.state, name, category, item_type)
        if result.code is ErrorCode.ITEM_EXISTS:
            return result
        return self._commit(new_state, result, "add_item")

    def add_item_plan(self, item_name: str, plan_name: str) -> OperationResult:
        new_state, result = directory.add_plan(self.state, item_name, plan_name)
        return self._commit(new_state, result, "add_item_plan")

    def delete_item_plan(self, item_name: str, plan_name: str) -> OperationResult:
        new_state, result = directory.delete_plan(self.state, item_name, plan_name)
        return self._commit(new_state, result, "delete_item_plan")

    def rename_item_plan(
        self, item_name: str, old_name: str, new_name: str
    ) -> OperationResult:
        new_state, result = directory.rename_plan(
            self.state, item_name, old_name, new_name
        )
        return self._commit(new_state, result, "rename_item_plan")

    def set_item_active_plan(self, item_name: str, plan_name: str) -> OperationResult:
        new_state, result = directory.set_active_plan(self.state, item_name, plan_name)
        return self._commit(new_state, result, "set_item_active_plan")

    def save_amount_setting(
        self,
        item_id: str,
        plan_name: str,
        data: Setting | Mapping[str, Any] | AmountSettingForm,
    ) -> OperationResult:
        """
        Write the setting of one plan of an item.

        Args:
            item_id: Composite ``"category-itemName"`` identifier
            plan_name: Target plan; must exist for the item
            data: A resolved setting, a camelCase payload mapping, or an
                :class:`AmountSettingForm` (validated, then converted)
        """
        try:
            category, item_name = parse_item_id(item_id)
        except ConfigError as e:
            return self._fail(ErrorCode.INVALID_ITEM_ID, str(e), "save_amount_setting")

        if not directory.plan_exists(self.state, item_name, plan_name):
            return self._fail(
                ErrorCode.PLAN_NOT_AVAILABLE,
                f"Plan '{plan_name}' is not available for '{item_name}'",
                "save_amount_setting",
            )

        if isinstance(data, AmountSettingForm):
            item = self.state.category_items(category).get(item_name)
            if item is None:
                return self._fail(
                    ErrorCode.NOT_FOUND,
                    f"Item '{item_name}' not found in {category}",
                    "save_amount_setting",
                )
            errors = validate_amount_form(data)
            if errors:
                message = "; ".join(f"{k}: {v}" for k, v in errors.items())
                return self._fail(ErrorCode.INVALID_FORM, message, "save_amount_setting")
            try:
                data = form_to_setting(data, item.type)
            except ConfigError as e:
                return self._fail(ErrorCode.INVALID_SETTING, str(e), "save_amount_setting")

        new_state, result = registry.write_setting(
            self.state, category, item_name, plan_name, data
        )
        return self._commit(new_state, result, "save_amount_setting")

    def _fail(self, code: ErrorCode, message: str, operation: str) -> OperationResult:
        result = OperationResult.fail(code, message)
        self._record(result, operation)
        return result

    def fix_data_integrity_issues(self, auto_fix: bool = True) -> FixReport:
        new_state, report = validation.fix_data_integrity_issues(self.state, auto_fix)
        self.state = new_state
        return report

    # === Reads ===

    def get_item_plans(self, item_name: str) -> list[PlanDescriptor]:
        return directory.get_available_plans(self.state, item_name)

    def get_item_active_plan(self, item_name: str) -> PlanDescriptor:
        return directory.get_active_plan(self.state, item_name)

    def get_available_plans(self, item_name: str) -> list[str]:
        """Raw plan names of an item, as stored in its directory entry."""
        entry = self.state.plans.get(item_name)
        if entry is None:
            return [DEFAULT_PLAN_NAME]
        return list(entry.available_plans)

    def plan_exists(self, item_name: str, plan_name: str) -> bool:
        return directory.plan_exists(self.state, item_name, plan_name)

    def get_setting(self, item_id: str, plan_name: str) -> Setting | None:
        """
        Setting of a plan addressed by composite id, ``None`` when absent.

        Raises:
            ConfigError: If ``item_id`` is malformed
        """
        category, item_name = parse_item_id(item_id)
        return registry.get_setting(self.state, category, item_name, plan_name)

    def validate_plan_data(self) -> ValidationReport:
        return validation.validate_plan_data(self.state)

    def check_data_consistency(self) -> ConsistencyReport:
        return validation.check_data_consistency(self.state)

    def validate_plan_references(self) -> ValidationReport:
        return validation.validate_plan_references(self.state)

    def calculate_simulation(
        self, period_years: int, start_year: int = DEFAULT_BASE_YEAR
    ) -> list[YearResult]:
        return simulation.calculate_simulation(self.state, period_years, start_year)

    def calculate_monthly_data(self, year: int) -> list[MonthResult]:
        return simulation.calculate_monthly_data(self.state, year)
