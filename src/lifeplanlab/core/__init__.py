"""
Core module for LifePlanLab.

This module contains the state model, the plan directory, validation and the
projection engine of the household planning system.
"""

from .directory import (
    add_plan,
    delete_plan,
    get_active_plan,
    get_available_plans,
    plan_exists,
    rename_plan,
    set_active_plan,
)
from .errors import ConfigError, ErrorCode, ErrorKind
from .forms import AmountSettingForm, form_to_setting, validate_amount_form
from .interfaces import IProjectionStrategy, ProjectionRegistry
from .kinds import DEFAULT_PLAN_NAME, K
from .registry import add_item, get_setting, write_setting
from .results import MonthResult, OperationResult, PlanDescriptor, YearResult
from .settings import FlowSetting, StockSetting
from .simulation import calculate_monthly_data, calculate_simulation, results_to_frame
from .state import Item, PlanDirectoryEntry, PlanState
from .utils import parse_item_id, round_half_up
from .validation import (
    ConsistencyReport,
    FixReport,
    ValidationIssue,
    ValidationReport,
    check_data_consistency,
    fix_data_integrity_issues,
    validate_plan_data,
    validate_plan_references,
)
