"""
Strategy interface protocols for LifePlanLab.
Defines the contract that projection strategies must satisfy.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from .errors import ConfigError
from .settings import Setting


@runtime_checkable
class IProjectionStrategy(Protocol):
    """
    Contract for projection strategies, one per setting kind.
    Responsibilities: turn a plan setting into amounts per calendar year and
    per month of a year.
    """

    def amount_at(self, setting: Setting, year: int) -> float:
        """
        Amount of the setting in one calendar year.

        For flows this is the annualised amount booked in the year; for stocks
        it is the balance at the end of the year.
        """
        ...

    def project(self, setting: Setting, years: np.ndarray) -> np.ndarray:
        """
        Vectorised :meth:`amount_at` over an array of years.

        Returns:
            Float array with the same length as ``years``
        """
        ...

    def monthly_amount(self, setting: Setting, year: int, month: int) -> float:
        """Amount booked in month ``month`` (1-12) of ``year``."""
        ...


# Global registry keyed by setting kind (``K.FLOW``, ``K.STOCK``)
ProjectionRegistry: dict[str, IProjectionStrategy] = {}


def strategy_for(setting: Setting) -> IProjectionStrategy:
    """
    Look up the projection strategy registered for a setting's kind.

    Raises:
        ConfigError: If no strategy is registered for the kind
    """
    kind = getattr(setting, "kind", None)
    if kind not in ProjectionRegistry:
        raise ConfigError(f"No projection strategy registered for kind {kind!r}")
    return ProjectionRegistry[kind]
