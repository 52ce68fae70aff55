"""
Core module for the roll layout estimator.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
"""

from .exceptions import (
    RollLayoutError,
    InvalidInputError,
    ConfigurationError,
    UnsatisfiablePackingError,
    CatalogLookupError,
)

__all__ = [
    "RollLayoutError",
    "InvalidInputError",
    "ConfigurationError",
    "UnsatisfiablePackingError",
    "CatalogLookupError",
]
