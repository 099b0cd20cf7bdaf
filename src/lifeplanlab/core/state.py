"""
Immutable state snapshot for LifePlanLab.

A :class:`PlanState` holds the per-item plan directory and the four category
collections of items. Every core operation takes a snapshot and returns a new
one; snapshots are never mutated in place.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from .errors import ConfigError
from .kinds import CATEGORY_KEYS, DEFAULT_PLAN_NAME, K
from .settings import Setting, setting_from_dict, setting_to_dict


@dataclass(frozen=True)
class Item:
    """
    A trackable financial item.

    Attributes:
        type: ``"flow"`` or ``"stock"``; fixed at creation. Snapshots loaded from
            storage may carry any other tag, which validation reports as invalid.
        settings: Plan name -> parameter setting. For items with an invalid type
            tag the values are the raw payload mappings.
    """

    type: str
    settings: dict[str, Setting] = field(default_factory=dict)

    @property
    def has_valid_type(self) -> bool:
        return self.type in K.all_item_types()

    def with_setting(self, plan_name: str, setting: Setting) -> Item:
        settings = dict(self.settings)
        settings[plan_name] = setting
        return replace(self, settings=settings)

    def without_setting(self, plan_name: str) -> Item:
        settings = {k: v for k, v in self.settings.items() if k != plan_name}
        return replace(self, settings=settings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "settings": {
                name: setting_to_dict(setting)
                for name, setting in self.settings.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Item:
        if not isinstance(data, Mapping) or "type" not in data:
            raise ConfigError(f"Item must be a mapping with a 'type', got {data!r}")
        item_type = data["type"]
        raw_settings = data.get("settings") or {}
        if item_type in K.all_item_types():
            settings = {
                name: setting_from_dict(item_type, payload)
                for name, payload in raw_settings.items()
            }
        else:
            settings = {name: dict(payload) for name, payload in raw_settings.items()}
        return cls(type=item_type, settings=settings)


@dataclass(frozen=True)
class PlanDirectoryEntry:
    """
    Plan names available for one item plus its active selection.

    ``available_plans`` keeps insertion order. It is a tuple rather than a set so
    that duplicated names in stored snapshots remain visible to validation.
    """

    available_plans: tuple[str, ...] = (DEFAULT_PLAN_NAME,)
    active_plan: str = DEFAULT_PLAN_NAME

    def __post_init__(self):
        if not isinstance(self.available_plans, tuple):
            object.__setattr__(self, "available_plans", tuple(self.available_plans))

    @classmethod
    def seeded(cls) -> PlanDirectoryEntry:
        return cls((DEFAULT_PLAN_NAME,), DEFAULT_PLAN_NAME)

    def has_plan(self, plan_name: str) -> bool:
        return plan_name in self.available_plans

    def to_dict(self) -> dict[str, Any]:
        return {
            "availablePlans": list(self.available_plans),
            "activePlan": self.active_plan,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlanDirectoryEntry:
        if not isinstance(data, Mapping):
            raise ConfigError(f"Plan entry must be a mapping, got {data!r}")
        return cls(
            available_plans=tuple(data.get("availablePlans") or ()),
            active_plan=data.get("activePlan") or DEFAULT_PLAN_NAME,
        )


@dataclass(frozen=True)
class PlanState:
    """
    Full snapshot of the planning data.

    The external dict shape (see :meth:`to_dict`) is::

        {
            "plans": {item: {"availablePlans": [...], "activePlan": str}},
            "incomes": {item: {"type": "flow", "settings": {plan: {...}}}},
            "expenses": {...}, "assets": {...}, "debts": {...},
        }
    """

    plans: dict[str, PlanDirectoryEntry] = field(default_factory=dict)
    incomes: dict[str, Item] = field(default_factory=dict)
    expenses: dict[str, Item] = field(default_factory=dict)
    assets: dict[str, Item] = field(default_factory=dict)
    debts: dict[str, Item] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> PlanState:
        return cls()

    def category_items(self, category: str) -> dict[str, Item]:
        """Items of a category (``"income"``, ``"expense"``, ``"asset"``, ``"debt"``)."""
        try:
            return getattr(self, CATEGORY_KEYS[category])
        except KeyError:
            raise ConfigError(f"Unknown category: {category!r}") from None

    def iter_items(self) -> Iterator[tuple[str, str, Item]]:
        """Iterate ``(category, item_name, item)`` over all categories in order."""
        for category in K.all_categories():
            for name, item in self.category_items(category).items():
                yield category, name, item

    def find_item(self, item_name: str) -> tuple[str, Item] | None:
        """Return ``(category, item)`` for the first category holding the name."""
        for category in K.all_categories():
            item = self.category_items(category).get(item_name)
            if item is not None:
                return category, item
        return None

    def find_items(self, item_name: str) -> list[tuple[str, Item]]:
        """Return ``(category, item)`` for every category holding the name."""
        return [
            (category, item)
            for category, name, item in self.iter_items()
            if name == item_name
        ]

    def has_item(self, item_name: str) -> bool:
        return self.find_item(item_name) is not None

    def with_item(self, category: str, item_name: str, item: Item) -> PlanState:
        items = dict(self.category_items(category))
        items[item_name] = item
        return replace(self, **{CATEGORY_KEYS[category]: items})

    def with_entry(self, item_name: str, entry: PlanDirectoryEntry) -> PlanState:
        plans = dict(self.plans)
        plans[item_name] = entry
        return replace(self, plans=plans)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "plans": {name: entry.to_dict() for name, entry in self.plans.items()}
        }
        for category in K.all_categories():
            key = CATEGORY_KEYS[category]
            data[key] = {
                name: item.to_dict()
                for name, item in self.category_items(category).items()
            }
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlanState:
        """
        Parse the external dict shape.

        Raises:
            ConfigError: If any entry, item or setting payload is malformed
        """
        if not isinstance(data, Mapping):
            raise ConfigError(f"State must be a mapping, got {type(data)}")
        kwargs: dict[str, Any] = {
            "plans": {
                name: PlanDirectoryEntry.from_dict(entry)
                for name, entry in (data.get("plans") or {}).items()
            }
        }
        for key in CATEGORY_KEYS.values():
            kwargs[key] = {
                name: Item.from_dict(item)
                for name, item in (data.get(key) or {}).items()
            }
        return cls(**kwargs)
