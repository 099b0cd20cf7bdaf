"""
LifePlanLab - Plan-Aware Household Financial Projections

LifePlanLab models a household's finances as items (income, expense, asset,
debt), each owning any number of named plans. A plan is a parameter variant of
one item; exactly one plan per item is active and drives the multi-year
projection of income, expenses, assets and debts.

Key Features:
- **Per-item plans**: Every item always owns the default plan "デフォルトプラン";
  custom plans are scoped to their item
- **Pure core**: Every operation maps a state snapshot to a new snapshot plus a
  result value; nothing raises for domain failures
- **Self-healing data**: Validators report structural defects and an explicit
  repair step fixes those marked fixable
- **Strategy-driven projection**: Flow and stock amounts come from strategies
  registered by setting kind

Architecture Overview:
- **PlanState**: Immutable snapshot (plan directory + four category maps)
- **Item Registry / Plan Directory**: Item creation and per-item plan management
- **Validation Engine**: Read-only checks and the repair entry point
- **Projection Engine**: Yearly totals and monthly breakdowns from active plans
- **PlanStore**: Stateful facade with a last-error slot for UI callers

Quick Start:
    ```python
    from lifeplanlab import PlanStore

    store = PlanStore()
    store.add_item("給与", "income", "flow")
    store.save_amount_setting("income-給与", "デフォルトプラン",
                              {"startYear": 2024, "amount": 500_000,
                               "frequency": "monthly", "growthRate": 3})
    results = store.calculate_simulation(period_years=5)
    results[2].income  # 6365400
    ```

Available Strategies:
    - 'flow': Recurring income/expense over a start/end window
    - 'stock': Asset/debt balance with growth and yearly contribution
"""

__version__ = "0.1.0"

# Import strategies to register them
import lifeplanlab.strategies  # noqa: F401

from .core import (
    AmountSettingForm,
    ConfigError,
    ConsistencyReport,
    ErrorCode,
    ErrorKind,
    FixReport,
    FlowSetting,
    IProjectionStrategy,
    Item,
    K,
    MonthResult,
    OperationResult,
    PlanDescriptor,
    PlanDirectoryEntry,
    PlanState,
    ProjectionRegistry,
    StockSetting,
    ValidationIssue,
    ValidationReport,
    YearResult,
    calculate_monthly_data,
    calculate_simulation,
    check_data_consistency,
    fix_data_integrity_issues,
    results_to_frame,
    validate_plan_data,
    validate_plan_references,
)
from .core.kinds import DEFAULT_PLAN_NAME
from .progression import (
    calculate_compound_growth,
    calculate_simple_progression,
    calculate_yearly_progression,
)
from .store import PlanStore

__all__ = [
    # State model
    "PlanState",
    "PlanDirectoryEntry",
    "Item",
    "FlowSetting",
    "StockSetting",
    "K",
    "DEFAULT_PLAN_NAME",
    # Results
    "OperationResult",
    "PlanDescriptor",
    "YearResult",
    "MonthResult",
    # Errors
    "ConfigError",
    "ErrorCode",
    "ErrorKind",
    # Validation
    "ValidationIssue",
    "ValidationReport",
    "ConsistencyReport",
    "FixReport",
    "validate_plan_data",
    "check_data_consistency",
    "validate_plan_references",
    "fix_data_integrity_issues",
    # Projection
    "calculate_simulation",
    "calculate_monthly_data",
    "results_to_frame",
    "IProjectionStrategy",
    "ProjectionRegistry",
    # Forms and previews
    "AmountSettingForm",
    "calculate_compound_growth",
    "calculate_yearly_progression",
    "calculate_simple_progression",
    # Store
    "PlanStore",
    "__version__",
]
