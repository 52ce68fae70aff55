"""
Dimension, quantity and settings validation.

Turns raw caller values (numbers, or strings straight from a form) into the
exact, range-checked input models. Job inputs that are missing, non-numeric,
zero or negative raise InvalidInputError; unusable roll/press/cost settings
raise ConfigurationError. The layout engine converts both into a NoResult.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from numbers import Number
from typing import Any, Optional, Type, FrozenSet

from core.exceptions import ConfigurationError, InvalidInputError, RollLayoutError
from models.specs import (
    CostLine,
    InkProfile,
    MaterialCostTable,
    PackagingTable,
    PressSettings,
    RollSpec,
    StickerSpec,
)


def to_exact(
    value: Any,
    name: str,
    error_cls: Type[RollLayoutError] = InvalidInputError,
    allow_zero: bool = False,
) -> Fraction:
    """
    Convert a caller value to an exact Fraction and range-check it.

    Floats go through their shortest decimal repr, so 0.15 becomes 3/20
    rather than the nearest binary fraction.

    Args:
        value: int, float, Decimal, Fraction or numeric string
        name: Field name reported in the error
        error_cls: InvalidInputError for job inputs, ConfigurationError for settings
        allow_zero: Accept 0 (spacing, allowances, optional costs)

    Returns:
        The value as a Fraction

    Raises:
        InvalidInputError / ConfigurationError: missing, non-numeric, non-finite,
            negative, or zero when zero is not allowed
    """
    if value is None or isinstance(value, bool):
        raise error_cls(name, value, "is required")

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise error_cls(name, value, "is required")
        try:
            exact = Fraction(text)
        except (ValueError, ZeroDivisionError):
            raise error_cls(name, value, "is not a number")
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise error_cls(name, value, "must be finite")
        exact = Fraction(repr(value))
    elif isinstance(value, Decimal):
        if not value.is_finite():
            raise error_cls(name, value, "must be finite")
        exact = Fraction(value)
    elif isinstance(value, (int, Fraction)):
        exact = Fraction(value)
    elif isinstance(value, Number):
        raise error_cls(name, value, "must be a real number")
    else:
        raise error_cls(name, value, "is not a number")

    if exact < 0 or (exact == 0 and not allow_zero):
        reason = "must not be negative" if allow_zero else "must be a positive number"
        raise error_cls(name, value, reason)
    return exact


def to_count(
    value: Any,
    name: str,
    error_cls: Type[RollLayoutError] = InvalidInputError,
) -> int:
    """Convert a caller value to a positive whole number."""
    exact = to_exact(value, name, error_cls)
    if exact.denominator != 1:
        raise error_cls(name, value, "must be a whole number")
    return int(exact)


# =============================================================================
# Job inputs
# =============================================================================

def validate_sticker(width_in: Any, height_in: Any, quantity: Any) -> StickerSpec:
    return StickerSpec(
        width_in=to_exact(width_in, "sticker_width_in"),
        height_in=to_exact(height_in, "sticker_height_in"),
        quantity=to_count(quantity, "quantity"),
    )


# =============================================================================
# Settings
# =============================================================================

def validate_roll(
    usable_width_in: Any,
    spacing_in: Any,
    max_section_length_in: Any,
    roll_length_ft: Any,
    roll_width_in: Optional[Any] = None,
) -> RollSpec:
    """
    Validate roll and press geometry.

    Raises:
        ConfigurationError: any dimension non-positive (spacing may be 0), or
            the usable width exceeds the physical roll width
    """
    usable = to_exact(usable_width_in, "usable_width_in", ConfigurationError)
    physical = None
    if roll_width_in is not None:
        physical = to_exact(roll_width_in, "roll_width_in", ConfigurationError)
        if usable > physical:
            raise ConfigurationError(
                "usable_width_in", usable_width_in,
                f"exceeds the physical roll width {float(physical)}",
            )

    return RollSpec(
        usable_width_in=usable,
        spacing_in=to_exact(spacing_in, "spacing_in", ConfigurationError, allow_zero=True),
        max_section_length_in=to_exact(max_section_length_in, "max_section_length_in", ConfigurationError),
        roll_length_ft=to_exact(roll_length_ft, "roll_length_ft", ConfigurationError),
        roll_width_in=physical,
    )


def validate_press(
    gap_allowance_in: Any,
    leader_allowance_in: Any,
    seconds_per_section: Any,
) -> PressSettings:
    return PressSettings(
        gap_allowance_in=to_exact(gap_allowance_in, "gap_allowance_in", ConfigurationError, allow_zero=True),
        leader_allowance_in=to_exact(leader_allowance_in, "leader_allowance_in", ConfigurationError, allow_zero=True),
        seconds_per_section=to_exact(seconds_per_section, "seconds_per_section", ConfigurationError),
    )


def validate_costs(material_cost_per_roll: Any, laminate_cost_per_roll: Any) -> MaterialCostTable:
    return MaterialCostTable(
        material_cost_per_roll=to_exact(material_cost_per_roll, "material_cost_per_roll", ConfigurationError),
        laminate_cost_per_roll=to_exact(laminate_cost_per_roll, "laminate_cost_per_roll", ConfigurationError),
    )


def validate_ink(ml_per_sq_in: Any, cost_per_ml: Any, overhead_multiplier: Any) -> InkProfile:
    return InkProfile(
        ml_per_sq_in=to_exact(ml_per_sq_in, "ink_ml_per_sq_in", ConfigurationError),
        cost_per_ml=to_exact(cost_per_ml, "ink_cost_per_ml", ConfigurationError),
        overhead_multiplier=to_exact(overhead_multiplier, "ink_overhead_multiplier", ConfigurationError),
    )


def validate_packaging(breakpoint_qty: Any, cost_below: Any, cost_at_or_above: Any) -> PackagingTable:
    return PackagingTable(
        breakpoint_qty=to_count(breakpoint_qty, "packaging_breakpoint_qty", ConfigurationError),
        cost_below=to_exact(cost_below, "packaging_cost_below", ConfigurationError, allow_zero=True),
        cost_at_or_above=to_exact(cost_at_or_above, "packaging_cost_at_or_above", ConfigurationError, allow_zero=True),
    )


def parse_cost_lines(lines: Optional[Iterable[Any]]) -> FrozenSet[CostLine]:
    """
    Normalize the enabled cost lines.

    Accepts CostLine members or their names ("material", "ink", ...), in any
    case. None means no line is enabled.

    Raises:
        ConfigurationError: an unknown line name, or a value that is not a
            collection of names (a bare string, a number, a bool, a mapping)
    """
    if lines is None:
        return frozenset()
    if isinstance(lines, (str, bytes, Mapping)) or not isinstance(lines, Iterable):
        raise ConfigurationError("enabled_cost_lines", lines, "must be a collection of line names")

    parsed = set()
    for line in lines:
        if isinstance(line, CostLine):
            parsed.add(line)
            continue
        try:
            parsed.add(CostLine(str(line).strip().lower()))
        except ValueError:
            raise ConfigurationError(
                "enabled_cost_lines", line,
                f"is not one of {', '.join(c.value for c in CostLine)}",
            )
    return frozenset(parsed)


# =============================================================================
# Whole request
# =============================================================================

@dataclass(frozen=True)
class ValidatedInputs:
    """Every engine input, converted and range-checked."""
    sticker: StickerSpec
    roll: RollSpec
    press: PressSettings
    costs: MaterialCostTable
    ink: InkProfile
    packaging: PackagingTable
    promo_cost_per_job: Fraction
    enabled_lines: FrozenSet[CostLine]
    packaging_cost_override: Optional[Fraction] = None


def validate_inputs(
    sticker_width_in: Any,
    sticker_height_in: Any,
    quantity: Any,
    usable_width_in: Any,
    spacing_in: Any,
    max_section_length_in: Any,
    roll_length_ft: Any,
    gap_allowance_in: Any,
    leader_allowance_in: Any,
    material_cost_per_roll: Any,
    laminate_cost_per_roll: Any,
    ink_ml_per_sq_in: Any,
    ink_cost_per_ml: Any,
    ink_overhead_multiplier: Any,
    seconds_per_section: Any,
    packaging_breakpoint_qty: Any,
    packaging_cost_below: Any,
    packaging_cost_at_or_above: Any,
    promo_cost_per_job: Any,
    enabled_cost_lines: Optional[Iterable[Any]],
    packaging_cost_override: Optional[Any] = None,
    roll_width_in: Optional[Any] = None,
) -> ValidatedInputs:
    """
    Validate a whole request, job inputs first.

    Raises:
        InvalidInputError: sticker width, height or quantity unusable
        ConfigurationError: any roll, press, cost, ink, packaging or cost-line setting unusable
    """
    sticker = validate_sticker(sticker_width_in, sticker_height_in, quantity)
    roll = validate_roll(usable_width_in, spacing_in, max_section_length_in, roll_length_ft, roll_width_in)
    press = validate_press(gap_allowance_in, leader_allowance_in, seconds_per_section)
    costs = validate_costs(material_cost_per_roll, laminate_cost_per_roll)
    ink = validate_ink(ink_ml_per_sq_in, ink_cost_per_ml, ink_overhead_multiplier)
    packaging = validate_packaging(packaging_breakpoint_qty, packaging_cost_below, packaging_cost_at_or_above)
    promo_cost = to_exact(promo_cost_per_job, "promo_cost_per_job", ConfigurationError, allow_zero=True)
    lines = parse_cost_lines(enabled_cost_lines)

    override = None
    if packaging_cost_override is not None:
        override = to_exact(
            packaging_cost_override, "packaging_cost_override", ConfigurationError, allow_zero=True
        )

    return ValidatedInputs(
        sticker=sticker,
        roll=roll,
        press=press,
        costs=costs,
        ink=ink,
        packaging=packaging,
        promo_cost_per_job=promo_cost,
        enabled_lines=lines,
        packaging_cost_override=override,
    )
