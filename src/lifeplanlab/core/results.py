"""
Results and output structures for LifePlanLab.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import ErrorCode, ErrorKind


@dataclass(frozen=True)
class OperationResult:
    """
    Discriminated outcome of a mutating operation.

    Attributes:
        success: Whether the operation was applied
        error: Human-readable failure message (``None`` on success)
        code: Fine-grained failure code (``None`` on success)
    """

    success: bool
    error: str | None = None
    code: ErrorCode | None = None

    @classmethod
    def ok(cls) -> OperationResult:
        return cls(success=True)

    @classmethod
    def fail(cls, code: ErrorCode, message: str) -> OperationResult:
        return cls(success=False, error=message, code=code)

    @property
    def kind(self) -> ErrorKind | None:
        """Taxonomy of the failure (``None`` on success)."""
        return None if self.code is None else self.code.kind

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self.success}
        if self.error is not None:
            data["error"] = self.error
        if self.code is not None:
            data["code"] = self.code.value
            data["kind"] = self.kind.value
        return data


@dataclass(frozen=True)
class PlanDescriptor:
    """Read-model of one plan of one item."""

    id: str
    name: str
    is_default: bool
    item_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "isDefault": self.is_default,
            "itemName": self.item_name,
        }


@dataclass(frozen=True)
class YearResult:
    """
    Projection totals for one year.

    Attributes:
        year: Calendar year
        income: Sum of income flows
        expense: Sum of expense flows
        net_income: ``income - expense``
        assets: Sum of asset balances
        debts: Sum of debt balances
        net_assets: ``assets - debts``
    """

    year: int
    income: float
    expense: float
    net_income: float
    assets: float
    debts: float
    net_assets: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "income": self.income,
            "expense": self.expense,
            "netIncome": self.net_income,
            "assets": self.assets,
            "debts": self.debts,
            "netAssets": self.net_assets,
        }


@dataclass(frozen=True)
class MonthResult:
    """Income/expense booked in one month of a year."""

    month: int
    income: float
    expense: float
    net: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "income": self.income,
            "expense": self.expense,
            "net": self.net,
        }
