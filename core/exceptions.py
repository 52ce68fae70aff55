"""
Custom exceptions for the roll layout estimator.

Exception Hierarchy:
    RollLayoutError (base)
    ├── InvalidInputError          - job dimension/quantity missing or non-positive
    ├── ConfigurationError         - roll, press, cost or ink setting unusable
    ├── UnsatisfiablePackingError  - sticker does not fit the roll/section at all
    └── CatalogLookupError         - unknown substrate, laminate or roll width preset

Usage:
    The layout engine raises these internally and converts them into a
    NoResult outcome at its boundary. Callers of compute_layout() never see
    them for ordinary bad input. ConfigurationError is also raised by
    config.py at startup so a broken .env fails fast.
"""

from typing import Optional, Dict, Any


class RollLayoutError(Exception):
    """
    Base exception for all roll layout errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(RollLayoutError):
    """
    A job input (sticker width, height or quantity) is missing or unusable.

    This is the "form not yet complete" case. The engine reports it as
    NoResult(reason=invalid_input) rather than propagating it.
    """

    def __init__(self, field: str, value: Any, reason: str = "must be a positive number"):
        message = f"Invalid {field}: {value!r} {reason}"
        details = {
            "field": field,
            "value": value,
            "reason": reason,
        }
        super().__init__(message, details)
        self.field = field
        self.value = value
        self.reason = reason


class ConfigurationError(RollLayoutError):
    """
    A roll, press, cost, ink or packaging setting is unusable.

    Raised for a non-positive roll length, cost per roll, ink cost and the
    like. Every division in the engine is guarded by these checks.
    """

    def __init__(self, setting: str, value: Any, reason: str = "must be a positive number"):
        message = f"Invalid setting {setting}: {value!r} {reason}"
        details = {
            "setting": setting,
            "value": value,
            "reason": reason,
        }
        super().__init__(message, details)
        self.setting = setting
        self.value = value
        self.reason = reason


class UnsatisfiablePackingError(RollLayoutError):
    """
    The sticker does not fit even once within the given constraints.

    `factor` names which capacity came out as zero: "stickers_per_row"
    (wider than the usable width) or "rows_per_section" (taller than the
    maximum section length).
    """

    def __init__(self, factor: str, sticker_size: float, limit: float):
        message = f"Sticker dimension {sticker_size} does not fit within {limit} ({factor} = 0)"
        details = {
            "factor": factor,
            "sticker_size": sticker_size,
            "limit": limit,
        }
        super().__init__(message, details)
        self.factor = factor
        self.sticker_size = sticker_size
        self.limit = limit


class CatalogLookupError(RollLayoutError):
    """Requested preset is not in the material catalog."""

    def __init__(self, kind: str, key: Any, available: Optional[list] = None):
        message = f"Unknown {kind}: {key!r}"
        details = {
            "kind": kind,
            "key": key,
            "available": available or [],
        }
        super().__init__(message, details)
        self.kind = kind
        self.key = key
