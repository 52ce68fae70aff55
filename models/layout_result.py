"""
Derived data models produced by one layout computation.

Every instance is frozen and built fresh per call; nothing here is ever
updated in place. Numeric fields are exact (Fraction or int). to_dict()
renders floats for JSON, which is a display concern only.

Lifecycle:
    compute_layout() -> LayoutEstimate   (inputs were usable)
    compute_layout() -> NoResult         (insufficient or unusable input)
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from fractions import Fraction
from typing import Dict, Any, FrozenSet, Optional

from .specs import CostLine, StickerSpec, as_float


@dataclass(frozen=True)
class SectionPlan:
    """Grid produced by the row/section packer."""

    quantity: int
    """Requested quantity."""

    stickers_per_row: int
    rows_per_section: int
    stickers_per_section: int
    full_sections: int
    remainder: int
    """Stickers left over after the full sections (quantity mod stickers_per_section)."""

    sections_needed: int
    total_rows: int
    actual_units_printed: int
    """total_rows * stickers_per_row. Whole rows are always printed."""

    @property
    def overage(self) -> int:
        """Extra stickers printed to complete the last row."""
        return self.actual_units_printed - self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "quantity": self.quantity,
            "stickers_per_row": self.stickers_per_row,
            "rows_per_section": self.rows_per_section,
            "stickers_per_section": self.stickers_per_section,
            "full_sections": self.full_sections,
            "remainder": self.remainder,
            "sections_needed": self.sections_needed,
            "total_rows": self.total_rows,
            "actual_units_printed": self.actual_units_printed,
            "overage": self.overage,
        }


@dataclass(frozen=True)
class MaterialLength:
    """Linear material consumed by a section plan."""

    full_section_length_in: Fraction
    final_section_length_in: Fraction
    gap_count: int
    base_length_in: Fraction
    total_length_in: Fraction
    """base_length_in plus the leader allowance."""

    total_length_ft: Fraction
    """total_length_in / 12, exact."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_section_length_in": as_float(self.full_section_length_in),
            "final_section_length_in": as_float(self.final_section_length_in),
            "gap_count": self.gap_count,
            "base_length_in": as_float(self.base_length_in),
            "total_length_in": as_float(self.total_length_in),
            "total_length_ft": as_float(self.total_length_ft),
        }


@dataclass(frozen=True)
class RollUsage:
    """Whole and partial roll counts for a material length."""

    roll_length_ft: Fraction
    rolls_needed: int
    full_rolls_used: int
    remaining_feet_on_last_roll: Fraction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roll_length_ft": as_float(self.roll_length_ft),
            "rolls_needed": self.rolls_needed,
            "full_rolls_used": self.full_rolls_used,
            "remaining_feet_on_last_roll": as_float(self.remaining_feet_on_last_roll),
        }


@dataclass(frozen=True)
class PackingResult:
    """
    Layout, material length and roll usage of one job.

    The three parts are kept as computed; the flat properties below are
    read-through accessors so callers never re-derive a length ad hoc.
    """

    plan: SectionPlan
    length: MaterialLength
    rolls: RollUsage

    @property
    def stickers_per_row(self) -> int:
        return self.plan.stickers_per_row

    @property
    def rows_per_section(self) -> int:
        return self.plan.rows_per_section

    @property
    def sections_needed(self) -> int:
        return self.plan.sections_needed

    @property
    def total_rows(self) -> int:
        return self.plan.total_rows

    @property
    def actual_units_printed(self) -> int:
        return self.plan.actual_units_printed

    @property
    def total_length_in(self) -> Fraction:
        return self.length.total_length_in

    @property
    def total_length_ft(self) -> Fraction:
        return self.length.total_length_ft

    @property
    def rolls_needed(self) -> int:
        return self.rolls.rolls_needed

    @property
    def remaining_feet_on_last_roll(self) -> Fraction:
        return self.rolls.remaining_feet_on_last_roll

    def to_dict(self) -> Dict[str, Any]:
        data = self.plan.to_dict()
        data.update(self.length.to_dict())
        data.update(self.rolls.to_dict())
        return data


@dataclass(frozen=True)
class CostBreakdown:
    """
    Priced line items for one job.

    Raw line values are always populated, whether or not the line is
    enabled; only total_cost and cost_per_unit depend on enabled_lines.
    """

    material_cost: Fraction
    laminate_cost: Fraction
    ink_cost: Fraction
    ink_volume_ml: Fraction
    packaging_cost: Fraction
    promo_cost: Fraction
    enabled_lines: FrozenSet[CostLine]
    total_cost: Fraction
    cost_per_unit: Fraction

    def line(self, line: CostLine) -> Fraction:
        """Raw value of a line item, regardless of whether it is enabled."""
        return self.lines()[line]

    def lines(self) -> Dict[CostLine, Fraction]:
        return {
            CostLine.MATERIAL: self.material_cost,
            CostLine.LAMINATE: self.laminate_cost,
            CostLine.INK: self.ink_cost,
            CostLine.PACKAGING: self.packaging_cost,
            CostLine.PROMO: self.promo_cost,
        }

    def is_enabled(self, line: CostLine) -> bool:
        return line in self.enabled_lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines": {
                line.value: {
                    "cost": as_float(value),
                    "enabled": line in self.enabled_lines,
                }
                for line, value in self.lines().items()
            },
            "ink_volume_ml": as_float(self.ink_volume_ml),
            "total_cost": as_float(self.total_cost),
            "cost_per_unit": as_float(self.cost_per_unit),
        }


@dataclass(frozen=True)
class PrintTime:
    """
    Estimated press run time.

    Cleaning and changeover cycles between jobs are NOT included.
    """

    total_seconds: Fraction
    hours: int
    minutes: int
    seconds: Fraction

    @property
    def total_minutes(self) -> Fraction:
        return self.total_seconds / 60

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_seconds": as_float(self.total_seconds),
            "total_minutes": as_float(self.total_minutes),
            "hours": self.hours,
            "minutes": self.minutes,
            "seconds": as_float(self.seconds),
        }


@dataclass(frozen=True)
class LayoutEstimate:
    """A fully populated computation result."""

    sticker: StickerSpec
    packing: PackingResult
    costs: CostBreakdown
    print_time: PrintTime

    def __bool__(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sticker": self.sticker.to_dict(),
            "packing": self.packing.to_dict(),
            "costs": self.costs.to_dict(),
            "print_time": self.print_time.to_dict(),
        }


class NoResultReason(Enum):
    """Why a computation produced no result."""

    INVALID_INPUT = "invalid_input"
    """A job dimension or quantity is missing, zero, negative or non-numeric."""

    UNSATISFIABLE_PACKING = "unsatisfiable_packing"
    """The sticker does not fit the usable width or the maximum section length."""

    CONFIGURATION_ERROR = "configuration_error"
    """A roll, press, cost, ink or packaging setting is unusable."""


@dataclass(frozen=True)
class NoResult:
    """
    Explicit "no result" outcome.

    Falsy, so callers can write `if not outcome:`. Treat it as "form not yet
    complete", not as an error requiring recovery.
    """

    reason: NoResultReason
    field: Optional[str] = None
    """Which input or capacity factor caused it (e.g. "quantity", "stickers_per_row")."""

    detail: str = ""
    context: Dict[str, Any] = dataclass_field(default_factory=dict, compare=False, hash=False)

    def __bool__(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reason": self.reason.value,
            "field": self.field,
            "detail": self.detail,
        }
