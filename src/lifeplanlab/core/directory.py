"""
Plan Directory: per-item plan names and the active selection.

Plan names are scoped to their item; two items may both own a plan called
``"楽観プラン"`` without any relationship between the two. Operations that make a
plan usable (add, activate) take a second, explicit step through
:func:`lifeplanlab.core.registry.clone_default_setting` so that every plan the
projection can select resolves to a setting.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from . import registry
from .errors import ErrorCode
from .kinds import DEFAULT_PLAN_NAME, MAX_PLAN_NAME_LENGTH
from .results import OperationResult, PlanDescriptor
from .state import PlanState
from .utils import normalize_plan_name

logger = logging.getLogger(__name__)


def _default_descriptor(item_name: str) -> PlanDescriptor:
    return PlanDescriptor(
        id=f"{item_name}-default",
        name=DEFAULT_PLAN_NAME,
        is_default=True,
        item_name=item_name,
    )


def _check_plan_name(plan_name: str) -> OperationResult | None:
    if not plan_name:
        return OperationResult.fail(ErrorCode.EMPTY_NAME, "Plan name must not be empty")
    if len(plan_name) > MAX_PLAN_NAME_LENGTH:
        return OperationResult.fail(
            ErrorCode.NAME_TOO_LONG,
            f"Plan name must be at most {MAX_PLAN_NAME_LENGTH} characters",
        )
    return None


def _item_not_found(item_name: str) -> OperationResult:
    return OperationResult.fail(
        ErrorCode.ITEM_NOT_FOUND, f"Item '{item_name}' has no plan directory entry"
    )


def get_available_plans(state: PlanState, item_name: str) -> list[PlanDescriptor]:
    """
    List the plans of an item, default plan first.

    Unknown items are treated as not yet configured and yield the synthetic
    default plan only.

    Args:
        state: Current snapshot
        item_name: Item whose plans to list

    Returns:
        Descriptors of the default plan followed by custom plans in the order
        they were added
    """
    plans = [_default_descriptor(item_name)]
    entry = state.plans.get(item_name)
    if entry is None:
        return plans

    seen = {DEFAULT_PLAN_NAME}
    for index, name in enumerate(entry.available_plans):
        if name in seen:
            continue
        seen.add(name)
        plans.append(
            PlanDescriptor(
                id=f"{item_name}-plan-{index}",
                name=name,
                is_default=False,
                item_name=item_name,
            )
        )
    return plans


def get_active_plan(state: PlanState, item_name: str) -> PlanDescriptor:
    """Descriptor of the item's active plan (default plan for unknown items)."""
    entry = state.plans.get(item_name)
    if entry is None:
        return _default_descriptor(item_name)
    for plan in get_available_plans(state, item_name):
        if plan.name == entry.active_plan:
            return plan
    logger.warning(
        "Active plan '%s' of '%s' is not available; reporting the default plan",
        entry.active_plan,
        item_name,
    )
    return _default_descriptor(item_name)


def plan_exists(state: PlanState, item_name: str, plan_name: str) -> bool:
    """The default plan always exists; otherwise test membership."""
    if plan_name == DEFAULT_PLAN_NAME:
        return True
    entry = state.plans.get(item_name)
    return entry is not None and entry.has_plan(plan_name)


def add_plan(
    state: PlanState, item_name: str, plan_name: str
) -> tuple[PlanState, OperationResult]:
    """
    Append a plan to an item and seed it with a copy of the default setting.

    A setting left behind under the same name by an earlier delete is replaced.

    Validation order (first failure wins): empty item name, empty plan name,
    plan name too long, unknown item, duplicate plan name.
    """
    if not item_name or not item_name.strip():
        return state, OperationResult.fail(
            ErrorCode.INVALID_ITEM, "Item name must not be empty"
        )
    plan_name = normalize_plan_name(plan_name)
    failure = _check_plan_name(plan_name)
    if failure is not None:
        return state, failure
    entry = state.plans.get(item_name)
    if entry is None:
        return state, _item_not_found(item_name)
    if entry.has_plan(plan_name):
        return state, OperationResult.fail(
            ErrorCode.DUPLICATE_NAME,
            f"Plan '{plan_name}' already exists for '{item_name}'",
        )

    entry = replace(entry, available_plans=entry.available_plans + (plan_name,))
    new_state = state.with_entry(item_name, entry)
    new_state = registry.clone_default_setting(
        new_state, item_name, plan_name, overwrite=True
    )
    logger.debug("Added plan '%s' to '%s'", plan_name, item_name)
    return new_state, OperationResult.ok()


def delete_plan(
    state: PlanState, item_name: str, plan_name: str
) -> tuple[PlanState, OperationResult]:
    """
    Remove a plan from an item; the active selection falls back to the default.

    The default plan can never be deleted. The deleted plan's setting data is
    kept on the item.
    """
    plan_name = normalize_plan_name(plan_name)
    if plan_name == DEFAULT_PLAN_NAME:
        return state, OperationResult.fail(
            ErrorCode.CANNOT_DELETE_DEFAULT, "The default plan cannot be deleted"
        )
    entry = state.plans.get(item_name)
    if entry is None:
        return state, _item_not_found(item_name)
    if not entry.has_plan(plan_name):
        return state, OperationResult.fail(
            ErrorCode.NOT_FOUND, f"Plan '{plan_name}' not found for '{item_name}'"
        )

    available = tuple(name for name in entry.available_plans if name != plan_name)
    active = DEFAULT_PLAN_NAME if entry.active_plan == plan_name else entry.active_plan
    new_state = state.with_entry(
        item_name, replace(entry, available_plans=available, active_plan=active)
    )
    logger.debug("Deleted plan '%s' from '%s'", plan_name, item_name)
    return new_state, OperationResult.ok()


def rename_plan(
    state: PlanState, item_name: str, old_name: str, new_name: str
) -> tuple[PlanState, OperationResult]:
    """
    Rename a plan, re-pointing the active selection and re-keying its setting.
    """
    if not item_name or not item_name.strip():
        return state, OperationResult.fail(
            ErrorCode.INVALID_ITEM, "Item name must not be empty"
        )
    old_name = normalize_plan_name(old_name)
    new_name = normalize_plan_name(new_name)
    failure = _check_plan_name(new_name)
    if failure is not None:
        return state, failure
    if old_name == DEFAULT_PLAN_NAME:
        return state, OperationResult.fail(
            ErrorCode.CANNOT_RENAME_DEFAULT, "The default plan cannot be renamed"
        )
    entry = state.plans.get(item_name)
    if entry is None:
        return state, _item_not_found(item_name)
    if not entry.has_plan(old_name):
        return state, OperationResult.fail(
            ErrorCode.NOT_FOUND, f"Plan '{old_name}' not found for '{item_name}'"
        )
    if entry.has_plan(new_name):
        return state, OperationResult.fail(
            ErrorCode.DUPLICATE_NAME,
            f"Plan '{new_name}' already exists for '{item_name}'",
        )

    available = tuple(
        new_name if name == old_name else name for name in entry.available_plans
    )
    active = new_name if entry.active_plan == old_name else entry.active_plan
    new_state = state.with_entry(
        item_name, replace(entry, available_plans=available, active_plan=active)
    )
    new_state = registry.rekey_setting(new_state, item_name, old_name, new_name)
    logger.debug("Renamed plan '%s' of '%s' to '%s'", old_name, item_name, new_name)
    return new_state, OperationResult.ok()


def set_active_plan(
    state: PlanState, item_name: str, plan_name: str
) -> tuple[PlanState, OperationResult]:
    """
    Select the plan used by the projection for an item.

    When the selected plan has no setting yet, the default plan's setting is
    cloned into it.
    """
    plan_name = normalize_plan_name(plan_name)
    entry = state.plans.get(item_name)
    if entry is None:
        return state, _item_not_found(item_name)
    if not entry.has_plan(plan_name):
        return state, OperationResult.fail(
            ErrorCode.PLAN_NOT_AVAILABLE,
            f"Plan '{plan_name}' is not available for '{item_name}'",
        )

    new_state = state.with_entry(item_name, replace(entry, active_plan=plan_name))
    new_state = registry.clone_default_setting(new_state, item_name, plan_name)
    return new_state, OperationResult.ok()
