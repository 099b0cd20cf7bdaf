"""
Parameter settings for flow and stock items.

A setting is the parameter set of one plan of one item. The variant is fixed by
the owning item's type and resolved once when a snapshot is parsed, so nothing
downstream needs to inspect payload shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from .errors import ConfigError
from .kinds import DEFAULT_BASE_YEAR, K


def _number(data: Mapping[str, Any], key: str, default: Any = ...) -> float:
    if key not in data or data[key] is None:
        if default is ...:
            raise ConfigError(f"Missing required parameter: {key}")
        return default
    value = data[key]
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a number, got {value!r}") from e


def _year(data: Mapping[str, Any], key: str, default: Any = ...) -> int | None:
    value = _number(data, key, default)
    if value is None:
        return None
    if value != int(value):
        raise ConfigError(f"{key} must be a whole year, got {data[key]!r}")
    return int(value)


def _plain(value: float) -> int | float:
    """Render integral floats as ints in external payloads."""
    return int(value) if float(value).is_integer() else value


@dataclass(frozen=True)
class FlowSetting:
    """
    Recurring income/expense parameters.

    Attributes:
        start_year: First year the flow is active
        amount: Amount per period (month or year, see ``frequency``)
        frequency: ``"monthly"`` or ``"yearly"``
        growth_rate: Compound growth in percent per year (may be negative)
        end_year: Last active year, ``None`` for open-ended
        yearly_change: Flat per-period increment added each year, ``None`` for none
    """

    kind: ClassVar[str] = K.FLOW

    start_year: int
    amount: float
    frequency: str = K.MONTHLY
    growth_rate: float = 0.0
    end_year: int | None = None
    yearly_change: float | None = None

    def __post_init__(self):
        if self.frequency not in K.all_frequencies():
            raise ConfigError(
                f"frequency must be 'monthly'|'yearly', got {self.frequency!r}"
            )

    @property
    def periods_per_year(self) -> int:
        return 12 if self.frequency == K.MONTHLY else 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "startYear": self.start_year,
            "endYear": self.end_year,
            "amount": _plain(self.amount),
            "frequency": self.frequency,
            "growthRate": _plain(self.growth_rate),
            "yearlyChange": (
                None if self.yearly_change is None else _plain(self.yearly_change)
            ),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FlowSetting:
        if not isinstance(data, Mapping):
            raise ConfigError(f"Flow setting must be a mapping, got {type(data)}")
        return cls(
            start_year=_year(data, "startYear"),
            amount=_number(data, "amount"),
            frequency=data.get("frequency") or K.MONTHLY,
            growth_rate=_number(data, "growthRate", 0.0),
            end_year=_year(data, "endYear", None),
            yearly_change=_number(data, "yearlyChange", None),
        )


@dataclass(frozen=True)
class StockSetting:
    """
    Asset/debt balance parameters.

    Attributes:
        base_year: Year at which ``base_amount`` holds
        base_amount: Balance at ``base_year``
        rate: Compound growth in percent per year
        yearly_change: Flat contribution (+) or withdrawal (-) applied each year
    """

    kind: ClassVar[str] = K.STOCK

    base_year: int
    base_amount: float
    rate: float = 0.0
    yearly_change: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseYear": self.base_year,
            "baseAmount": _plain(self.base_amount),
            "rate": _plain(self.rate),
            "yearlyChange": _plain(self.yearly_change),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StockSetting:
        if not isinstance(data, Mapping):
            raise ConfigError(f"Stock setting must be a mapping, got {type(data)}")
        return cls(
            base_year=_year(data, "baseYear"),
            base_amount=_number(data, "baseAmount"),
            rate=_number(data, "rate", 0.0),
            yearly_change=_number(data, "yearlyChange", 0.0),
        )


Setting = Union[FlowSetting, StockSetting]

SETTING_CLASSES: dict[str, type] = {
    K.FLOW: FlowSetting,
    K.STOCK: StockSetting,
}


def default_setting(item_type: str) -> Setting:
    """Zeroed setting used to seed a new item's default plan."""
    if item_type == K.FLOW:
        return FlowSetting(
            start_year=DEFAULT_BASE_YEAR,
            amount=0.0,
            frequency=K.MONTHLY,
            growth_rate=0.0,
        )
    if item_type == K.STOCK:
        return StockSetting(
            base_year=DEFAULT_BASE_YEAR, base_amount=0.0, rate=0.0, yearly_change=0.0
        )
    raise ConfigError(f"Unknown item type: {item_type!r}")


def setting_from_dict(item_type: str, data: Mapping[str, Any] | Setting) -> Setting:
    """
    Resolve a setting payload into the variant fixed by ``item_type``.

    Already-resolved settings pass through unchanged when they match the type.

    Raises:
        ConfigError: If the type is unknown, the payload is malformed, or a
            resolved setting of the other variant is given
    """
    cls = SETTING_CLASSES.get(item_type)
    if cls is None:
        raise ConfigError(f"Unknown item type: {item_type!r}")
    if isinstance(data, (FlowSetting, StockSetting)):
        if not isinstance(data, cls):
            raise ConfigError(
                f"{data.kind} setting cannot be stored on a {item_type} item"
            )
        return data
    return cls.from_dict(data)


def setting_to_dict(setting: Setting | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(setting, (FlowSetting, StockSetting)):
        return setting.to_dict()
    # Raw payload of an item with an invalid type tag
    return dict(setting)
