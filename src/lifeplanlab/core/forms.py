"""
Unified amount-setting form for flow and stock items.

The form is the single input shape an amount dialog collects for either item
type. :func:`validate_amount_form` reports field errors without raising, and
:func:`form_to_setting` converts a valid form into the item's setting variant.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Any

from ..progression import calculate_yearly_progression
from .errors import ConfigError
from .kinds import (
    EXTREME_RATE,
    MAX_AMOUNT,
    MAX_RATE,
    MAX_SPAN_YEARS,
    MAX_YEAR,
    MIN_RATE,
    MIN_YEAR,
    K,
)
from .settings import FlowSetting, Setting, StockSetting

# Rates above this over spans longer than LONG_SPAN_YEARS are flagged
LONG_SPAN_RATE = 20
LONG_SPAN_YEARS = 20


@dataclass(frozen=True)
class AmountSettingForm:
    """
    Amount dialog input.

    Attributes:
        start_year: First year (flows) or base year (stocks)
        base_amount: Amount per period (flows) or base balance (stocks)
        frequency: ``"monthly"`` or ``"yearly"``; ignored for stocks
        end_year: Optional last year (flows only)
        change_amount: Optional flat yearly change
        change_rate: Optional yearly change in percent
    """

    start_year: Any
    base_amount: Any
    frequency: str = K.MONTHLY
    end_year: Any = None
    change_amount: Any = None
    change_rate: Any = None

    def preview(self, years: int = 5) -> list[float]:
        """Amounts for the first ``years`` years, as shown next to the form."""
        return calculate_yearly_progression(
            self.base_amount, self.change_rate, self.change_amount, years
        )

    @classmethod
    def from_setting(cls, setting: Setting) -> AmountSettingForm:
        """Pre-fill the form from an existing setting."""
        if isinstance(setting, FlowSetting):
            return cls(
                start_year=setting.start_year,
                base_amount=setting.amount,
                frequency=setting.frequency,
                end_year=setting.end_year,
                change_amount=setting.yearly_change or None,
                change_rate=setting.growth_rate or None,
            )
        if isinstance(setting, StockSetting):
            return cls(
                start_year=setting.base_year,
                base_amount=setting.base_amount,
                change_amount=setting.yearly_change or None,
                change_rate=setting.rate or None,
            )
        raise ConfigError(f"Cannot build a form from {type(setting).__name__}")


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and not math.isnan(value)
    )


def _is_integer(value) -> bool:
    return float(value).is_integer()


def _check_year(value) -> str | None:
    if not _is_number(value):
        return "Enter a valid year"
    if value < MIN_YEAR or value > MAX_YEAR:
        return f"Year must be between {MIN_YEAR} and {MAX_YEAR}"
    if not _is_integer(value):
        return "Year must be a whole number"
    return None


def validate_amount_form(form: AmountSettingForm) -> dict[str, str]:
    """
    Validate a form field by field.

    Rules:
    - ``start_year`` is required, whole, within 1900-2100
    - ``end_year`` (optional) is whole, within 1900-2100, after ``start_year``
      and at most 100 years after it
    - ``base_amount`` is required, whole, within 0..999,999,999
    - ``change_amount`` (optional) is whole with magnitude up to 999,999,999
    - ``change_rate`` (optional) is whole, within -100..1000
    - ``change_amount`` and ``change_rate`` are mutually exclusive (``"general"``)

    Rates beyond +/-50 % and rates above 20 % over spans longer than 20 years
    are legal but emit a ``UserWarning``.

    Returns:
        Field name -> message; empty when the form is valid
    """
    errors: dict[str, str] = {}

    if form.start_year is None:
        errors["start_year"] = "Start year is required"
    else:
        message = _check_year(form.start_year)
        if message:
            errors["start_year"] = message

    if form.end_year is not None:
        message = _check_year(form.end_year)
        if message:
            errors["end_year"] = message
        elif "start_year" not in errors:
            if form.end_year <= form.start_year:
                errors["end_year"] = "End year must be after the start year"
            elif form.end_year - form.start_year > MAX_SPAN_YEARS:
                errors["end_year"] = f"Period must be at most {MAX_SPAN_YEARS} years"

    if form.base_amount is None:
        errors["base_amount"] = "Base amount is required"
    elif not _is_number(form.base_amount):
        errors["base_amount"] = "Enter a valid amount"
    elif form.base_amount < 0:
        errors["base_amount"] = "Amount must be 0 or more"
    elif not _is_integer(form.base_amount):
        errors["base_amount"] = "Amount must be a whole number"
    elif form.base_amount > MAX_AMOUNT:
        errors["base_amount"] = f"Amount must be at most {MAX_AMOUNT:,}"

    if form.change_amount is not None:
        if not _is_number(form.change_amount):
            errors["change_amount"] = "Enter a valid amount"
        elif not _is_integer(form.change_amount):
            errors["change_amount"] = "Amount must be a whole number"
        elif abs(form.change_amount) > MAX_AMOUNT:
            errors["change_amount"] = f"Amount must be at most {MAX_AMOUNT:,}"

    if form.change_rate is not None:
        if not _is_number(form.change_rate):
            errors["change_rate"] = "Enter a valid rate"
        elif not _is_integer(form.change_rate):
            errors["change_rate"] = "Rate must be a whole number"
        elif form.change_rate < MIN_RATE:
            errors["change_rate"] = f"Rate must be {MIN_RATE}% or more"
        elif form.change_rate > MAX_RATE:
            errors["change_rate"] = f"Rate must be {MAX_RATE}% or less"

    if form.frequency not in K.all_frequencies():
        errors["frequency"] = "Frequency must be 'monthly' or 'yearly'"

    if form.change_amount is not None and form.change_rate is not None:
        errors["general"] = "Set either a change amount or a change rate, not both"

    if "change_rate" not in errors and form.change_rate is not None:
        if abs(form.change_rate) > EXTREME_RATE:
            warnings.warn(
                f"Change rate {form.change_rate}% is an extreme value.",
                category=UserWarning,
                stacklevel=2,
            )
        elif (
            abs(form.change_rate) > LONG_SPAN_RATE
            and not errors.keys() & {"start_year", "end_year"}
            and form.end_year is not None
            and form.end_year - form.start_year > LONG_SPAN_YEARS
        ):
            warnings.warn(
                f"A {form.change_rate}% rate over {form.end_year - form.start_year} "
                f"years may be unrealistic.",
                category=UserWarning,
                stacklevel=2,
            )

    return errors


def form_to_setting(form: AmountSettingForm, item_type: str) -> Setting:
    """
    Convert a validated form into the setting variant of ``item_type``.

    Flow: ``base_amount`` is the per-period amount, ``change_rate`` the growth
    rate and ``change_amount`` the per-period yearly change.
    Stock: ``start_year`` is the base year, ``change_rate`` the rate and
    ``change_amount`` the yearly contribution.

    Raises:
        ConfigError: If ``item_type`` is unknown
    """
    if item_type == K.FLOW:
        return FlowSetting(
            start_year=int(form.start_year),
            amount=float(form.base_amount),
            frequency=form.frequency,
            growth_rate=float(form.change_rate or 0),
            end_year=None if form.end_year is None else int(form.end_year),
            yearly_change=(
                None if form.change_amount is None else float(form.change_amount)
            ),
        )
    if item_type == K.STOCK:
        return StockSetting(
            base_year=int(form.start_year),
            base_amount=float(form.base_amount),
            rate=float(form.change_rate or 0),
            yearly_change=float(form.change_amount or 0),
        )
    raise ConfigError(f"Unknown item type: {item_type!r}")
