"""
Strategy registry setup for LifePlanLab.
"""

from lifeplanlab.core.interfaces import ProjectionRegistry
from lifeplanlab.core.kinds import K

from .flow import ProjectionFlow
from .stock import ProjectionStock


def register_defaults():
    """
    Register the default projection strategies in the global registry.

    Registered Strategies:
        - 'flow': Recurring income/expense over a start/end window
        - 'stock': Asset/debt balance rolled forward from a base year

    Note:
        This function is automatically called when ``lifeplanlab.strategies``
        is imported. Additional strategies can be registered by assigning to
        ``ProjectionRegistry`` directly.
    """
    ProjectionRegistry[K.FLOW] = ProjectionFlow()
    ProjectionRegistry[K.STOCK] = ProjectionStock()
