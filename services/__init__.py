"""
Services layer for the roll layout estimator.

This module contains the services the HTTP layer calls:
- EstimateService: fills request gaps from configuration, runs the layout
  engine and adds display figures and margin

Services hold configuration only, never per-request state, so a single
instance is shared by every Flask worker thread.
"""

from .estimate_service import EstimateService, EstimateResponse, MarginSummary

__all__ = [
    "EstimateService",
    "EstimateResponse",
    "MarginSummary",
]
