"""
Utility functions for LifePlanLab.
"""

from __future__ import annotations

import math

from .errors import ConfigError
from .kinds import K


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties toward positive infinity.

    Python's built-in ``round`` uses banker's rounding; projections need
    ``2.5 -> 3`` and ``-2.5 -> -2`` so that totals match the amounts users see
    in the tables.

    **Example:**
        ```python
        round_half_up(2.5)   # 3
        round_half_up(-2.5)  # -2
        round_half_up(6365400.000000001)  # 6365400
        ```
    """
    return int(math.floor(value + 0.5))


def parse_item_id(item_id: str) -> tuple[str, str]:
    """
    Split a composite ``"category-itemName"`` identifier.

    The category is the prefix up to the first hyphen; the remainder, which may
    itself contain hyphens, is the item name.

    Args:
        item_id: Composite identifier such as ``"income-給与"``

    Returns:
        ``(category, item_name)``

    Raises:
        ConfigError: If there is no hyphen, either part is empty, or the
            category is unknown
    """
    if not isinstance(item_id, str) or "-" not in item_id:
        raise ConfigError(f"Item id must look like 'category-itemName', got {item_id!r}")
    category, item_name = item_id.split("-", 1)
    if category not in K.all_categories():
        raise ConfigError(f"Unknown category {category!r} in item id {item_id!r}")
    if not item_name:
        raise ConfigError(f"Missing item name in item id {item_id!r}")
    return category, item_name


def make_item_id(category: str, item_name: str) -> str:
    return f"{category}-{item_name}"


def normalize_plan_name(name: str | None) -> str:
    """Trim surrounding whitespace; ``None`` becomes the empty string."""
    return (name or "").strip()


def dedupe(names) -> tuple[str, ...]:
    """Collapse duplicates keeping the first occurrence."""
    return tuple(dict.fromkeys(names))
