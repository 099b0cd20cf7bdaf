"""
Strategy implementations for LifePlanLab.

Each item type has a projection strategy that turns one plan setting into
yearly (and monthly) amounts. Strategies are looked up by the setting's
``kind`` discriminator in :data:`lifeplanlab.core.interfaces.ProjectionRegistry`.

Registry System:
The module automatically registers the default strategies in the global
registry, making them available to the projection engine.
"""

from .flow import ProjectionFlow
from .registry import register_defaults
from .stock import ProjectionStock

# Register all default strategies when module is imported
register_defaults()

__all__ = [
    "ProjectionFlow",
    "ProjectionStock",
    "register_defaults",
]
