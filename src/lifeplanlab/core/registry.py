"""
Item Registry: category-grouped items and their plan-keyed settings.

Every function is a pure state transition. Mutations return
``(new_state, OperationResult)``; on failure the input state is returned as is.
"""

from __future__ import annotations

import logging

from .errors import ConfigError, ErrorCode
from .kinds import DEFAULT_PLAN_NAME, K
from .results import OperationResult
from .settings import Setting, default_setting, setting_from_dict
from .state import Item, PlanDirectoryEntry, PlanState

logger = logging.getLogger(__name__)


def add_item(
    state: PlanState, name: str, category: str, item_type: str
) -> tuple[PlanState, OperationResult]:
    """
    Create an item seeded with a zeroed default-plan setting.

    A directory entry holding only the default plan is seeded alongside when the
    name has none yet. Adding a name that already exists in the category is a
    no-op reported with ``ErrorCode.ITEM_EXISTS``.

    Args:
        state: Current snapshot
        name: Item name (free text)
        category: ``"income"``, ``"expense"``, ``"asset"`` or ``"debt"``
        item_type: ``"flow"`` or ``"stock"``

    Returns:
        ``(new_state, result)``
    """
    name = (name or "").strip()
    if not name:
        return state, OperationResult.fail(
            ErrorCode.INVALID_ITEM, "Item name must not be empty"
        )
    if category not in K.all_categories():
        return state, OperationResult.fail(
            ErrorCode.INVALID_CATEGORY, f"Unknown category: {category!r}"
        )
    if item_type not in K.all_item_types():
        return state, OperationResult.fail(
            ErrorCode.INVALID_TYPE, f"Unknown item type: {item_type!r}"
        )
    if name in state.category_items(category):
        return state, OperationResult.fail(
            ErrorCode.ITEM_EXISTS, f"Item '{name}' already exists in {category}"
        )

    item = Item(type=item_type, settings={DEFAULT_PLAN_NAME: default_setting(item_type)})
    new_state = state.with_item(category, name, item)
    if name not in new_state.plans:
        new_state = new_state.with_entry(name, PlanDirectoryEntry.seeded())
    logger.debug("Added %s item '%s' to %s", item_type, name, category)
    return new_state, OperationResult.ok()


def get_setting(
    state: PlanState, category: str, item_name: str, plan_name: str
) -> Setting | None:
    """Look up the setting of ``plan_name`` for an item, ``None`` when absent."""
    if category not in K.all_categories():
        return None
    item = state.category_items(category).get(item_name)
    if item is None:
        return None
    return item.settings.get(plan_name)


def write_setting(
    state: PlanState, category: str, item_name: str, plan_name: str, setting
) -> tuple[PlanState, OperationResult]:
    """
    Upsert the setting of ``plan_name`` on an item.

    ``setting`` may be a resolved setting or a camelCase payload mapping; it must
    match the item's type.
    """
    if category not in K.all_categories():
        return state, OperationResult.fail(
            ErrorCode.INVALID_CATEGORY, f"Unknown category: {category!r}"
        )
    item = state.category_items(category).get(item_name)
    if item is None:
        return state, OperationResult.fail(
            ErrorCode.NOT_FOUND, f"Item '{item_name}' not found in {category}"
        )
    try:
        resolved = setting_from_dict(item.type, setting)
    except ConfigError as e:
        return state, OperationResult.fail(ErrorCode.INVALID_SETTING, str(e))

    new_state = state.with_item(category, item_name, item.with_setting(plan_name, resolved))
    return new_state, OperationResult.ok()


def clone_default_setting(
    state: PlanState, item_name: str, plan_name: str, overwrite: bool = False
) -> PlanState:
    """
    Materialize a setting for ``plan_name`` by copying the default plan's.

    Applies to every category holding ``item_name``, since items sharing a name
    share one directory entry. Existing settings are left untouched unless
    ``overwrite`` is set. Items without a default-plan setting get the zeroed
    default for their type. Items with an invalid type tag are skipped.
    """
    for category, item in state.find_items(item_name):
        if not item.has_valid_type:
            continue
        if plan_name in item.settings and not overwrite:
            continue
        source = item.settings.get(DEFAULT_PLAN_NAME)
        if source is None:
            source = default_setting(item.type)
        state = state.with_item(category, item_name, item.with_setting(plan_name, source))
        logger.debug(
            "Cloned default setting of '%s' (%s) into plan '%s'",
            item_name,
            category,
            plan_name,
        )
    return state


def rekey_setting(
    state: PlanState, item_name: str, old_name: str, new_name: str
) -> PlanState:
    """Move the setting stored under ``old_name`` to ``new_name`` in every category."""
    for category, item in state.find_items(item_name):
        if old_name not in item.settings:
            continue
        settings = {}
        for name, setting in item.settings.items():
            if name == old_name:
                settings[new_name] = setting
            elif name != new_name:
                settings[name] = setting
        state = state.with_item(category, item_name, Item(type=item.type, settings=settings))
    return state
