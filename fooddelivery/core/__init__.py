"""
Core module initialization.
Exports configuration, logging and error utilities.
"""

from fooddelivery.core.config import get_settings, setup_logging, Settings, EnvironmentMode
from fooddelivery.core.exceptions import FoodDeliveryError

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "FoodDeliveryError",
]
