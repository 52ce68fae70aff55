"""
Input data models for a layout computation.

These describe one job (StickerSpec) and the physical and commercial
settings it is printed under (RollSpec, PressSettings, MaterialCostTable,
InkProfile, PackagingTable). All are frozen; the validator builds them
from raw caller values, so by the time the engine sees one every field is
an exact Fraction (or int) that has already been range-checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Dict, Any, Optional


def as_float(value: Optional[Fraction]) -> Optional[float]:
    """Render an exact value for JSON/display. Never feed the result back into math."""
    if value is None:
        return None
    return float(value)


class CostLine(str, Enum):
    """Independently togglable line items of a cost breakdown."""

    MATERIAL = "material"
    LAMINATE = "laminate"
    INK = "ink"
    PACKAGING = "packaging"
    PROMO = "promo"


@dataclass(frozen=True)
class StickerSpec:
    """
    One job: a uniform rectangular sticker printed `quantity` times.
    """

    width_in: Fraction
    """Sticker width across the roll, inches."""

    height_in: Fraction
    """Sticker height along the roll, inches."""

    quantity: int
    """Requested number of stickers."""

    @property
    def area_sq_in(self) -> Fraction:
        return self.width_in * self.height_in

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width_in": as_float(self.width_in),
            "height_in": as_float(self.height_in),
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class RollSpec:
    """
    Printable geometry of the roll and press.

    The usable width is what the packer fills; the physical roll width is
    optional and only used to check usable_width_in <= roll_width_in.
    """

    usable_width_in: Fraction
    """Printable width across the roll, inches."""

    spacing_in: Fraction
    """Spacing between adjacent stickers, both across and along the roll."""

    max_section_length_in: Fraction
    """Longest run the press prints in one pass, inches."""

    roll_length_ft: Fraction
    """Length of one roll of substrate, feet."""

    roll_width_in: Optional[Fraction] = None
    """Physical roll width, inches (informational)."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "usable_width_in": as_float(self.usable_width_in),
            "spacing_in": as_float(self.spacing_in),
            "max_section_length_in": as_float(self.max_section_length_in),
            "roll_length_ft": as_float(self.roll_length_ft),
            "roll_width_in": as_float(self.roll_width_in),
        }


@dataclass(frozen=True)
class PressSettings:
    """Press-specific constants."""

    gap_allowance_in: Fraction = Fraction(4)
    """Material inserted between consecutive sections (barcode gap)."""

    leader_allowance_in: Fraction = Fraction(4)
    """Material reserved once per job for the barcode/leader."""

    seconds_per_section: Fraction = Fraction(200)
    """Press run time for one section (200s = 3 min 20 sec)."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gap_allowance_in": as_float(self.gap_allowance_in),
            "leader_allowance_in": as_float(self.leader_allowance_in),
            "seconds_per_section": as_float(self.seconds_per_section),
        }


@dataclass(frozen=True)
class MaterialCostTable:
    """Cost per roll of the selected substrate and laminate."""

    material_cost_per_roll: Fraction
    laminate_cost_per_roll: Fraction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "material_cost_per_roll": as_float(self.material_cost_per_roll),
            "laminate_cost_per_roll": as_float(self.laminate_cost_per_roll),
        }


@dataclass(frozen=True)
class InkProfile:
    """
    Ink calibration.

    ml_per_sq_in is an empirical ratio: a reference job of known printed
    area consumed a known volume of ink. The overhead multiplier covers
    purge and waste and is kept separate so it can be tuned on its own.
    """

    ml_per_sq_in: Fraction
    cost_per_ml: Fraction
    overhead_multiplier: Fraction = Fraction(6, 5)

    @classmethod
    def from_reference(
        cls,
        reference_area_sq_in: Fraction,
        reference_volume_ml: Fraction,
        cartridge_cost: Fraction,
        cartridge_size_ml: Fraction,
        overhead_multiplier: Fraction = Fraction(6, 5),
    ) -> "InkProfile":
        """
        Build a profile from a reference print and a cartridge price.

        Args:
            reference_area_sq_in: Printed area of the reference job
            reference_volume_ml: Ink the reference job consumed
            cartridge_cost: Price of one ink cartridge
            cartridge_size_ml: Volume of one ink cartridge
            overhead_multiplier: Purge/waste multiplier applied to ink cost

        Returns:
            InkProfile with the derived per-square-inch and per-ml constants
        """
        return cls(
            ml_per_sq_in=reference_volume_ml / reference_area_sq_in,
            cost_per_ml=cartridge_cost / cartridge_size_ml,
            overhead_multiplier=overhead_multiplier,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ml_per_sq_in": as_float(self.ml_per_sq_in),
            "cost_per_ml": as_float(self.cost_per_ml),
            "overhead_multiplier": as_float(self.overhead_multiplier),
        }


@dataclass(frozen=True)
class PackagingTable:
    """
    Packaging cost as a step function of quantity.

    Jobs below the breakpoint ship in a small-parcel mailer, jobs at or
    above it ship in a cheaper bulk box.
    """

    breakpoint_qty: int
    cost_below: Fraction
    cost_at_or_above: Fraction

    def cost_for(self, quantity: int) -> Fraction:
        if quantity < self.breakpoint_qty:
            return self.cost_below
        return self.cost_at_or_above

    def to_dict(self) -> Dict[str, Any]:
        return {
            "breakpoint_qty": self.breakpoint_qty,
            "cost_below": as_float(self.cost_below),
            "cost_at_or_above": as_float(self.cost_at_or_above),
        }
