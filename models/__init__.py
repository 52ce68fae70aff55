"""
Data models for the roll layout estimator.

This module contains immutable dataclasses for:
- Inputs: StickerSpec, RollSpec, PressSettings, MaterialCostTable,
  InkProfile, PackagingTable
- Results: SectionPlan, MaterialLength, RollUsage, PackingResult,
  CostBreakdown, PrintTime, LayoutEstimate
- NoResult: the explicit "no result" outcome

All dataclasses are frozen, so a result can be handed to any number of
threads without copying.
"""

from .specs import (
    CostLine,
    StickerSpec,
    RollSpec,
    PressSettings,
    MaterialCostTable,
    InkProfile,
    PackagingTable,
)
from .layout_result import (
    SectionPlan,
    MaterialLength,
    RollUsage,
    PackingResult,
    CostBreakdown,
    PrintTime,
    LayoutEstimate,
    NoResult,
    NoResultReason,
)

__all__ = [
    # Input models
    "CostLine",
    "StickerSpec",
    "RollSpec",
    "PressSettings",
    "MaterialCostTable",
    "InkProfile",
    "PackagingTable",
    # Result models
    "SectionPlan",
    "MaterialLength",
    "RollUsage",
    "PackingResult",
    "CostBreakdown",
    "PrintTime",
    "LayoutEstimate",
    "NoResult",
    "NoResultReason",
]
