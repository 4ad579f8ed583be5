"""
                Food Delivery Demo Backend

An in-memory food-ordering backend: user profiles, a menu catalogue,
per-user shopping carts and orders derived from carts, served over
FastAPI.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
