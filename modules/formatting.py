"""
Display helpers for layout estimates.

Everything here produces values for people to read. Nothing returned by
these functions should be fed back into the cost math.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from fractions import Fraction
from typing import Dict, Any, Tuple

from models.layout_result import LayoutEstimate, PrintTime

INCHES_PER_FOOT = 12


def split_feet_inches(total_length_in: Fraction) -> Tuple[int, Fraction]:
    """Whole feet and the inches left over, e.g. 40 in -> (3, 4)."""
    feet = int(total_length_in // INCHES_PER_FOOT)
    return feet, total_length_in - feet * INCHES_PER_FOOT


def roll_fraction(total_length_ft: Fraction, roll_length_ft: Fraction) -> Fraction:
    """How many rolls' worth of material a job uses (e.g. 0.07 of a roll)."""
    if roll_length_ft <= 0:
        return Fraction(0)
    return total_length_ft / roll_length_ft


def round_to(value: Fraction, places: int) -> Decimal:
    """Round half-up to a fixed number of decimal places."""
    quantum = Decimal(1).scaleb(-places)
    exact = Decimal(value.numerator) / Decimal(value.denominator)
    return exact.quantize(quantum, rounding=ROUND_HALF_UP)


def money(value: Fraction) -> str:
    return f"${round_to(value, 2)}"


def format_print_time(print_time: PrintTime) -> str:
    """
    Format a print time the way the production board shows it.

    "1 hr 6 min" when there is at least an hour, otherwise "3 min 20 sec",
    and just "40 sec" under a minute.
    """
    seconds = round(print_time.seconds)
    if print_time.hours > 0:
        return f"{print_time.hours} hr {print_time.minutes} min"
    if print_time.minutes > 0:
        return f"{print_time.minutes} min {seconds} sec"
    return f"{seconds} sec"


def estimate_summary(estimate: LayoutEstimate) -> Dict[str, Any]:
    """
    Rounded, human-readable figures for an estimate.

    Returns:
        Dictionary of display strings and rounded numbers
    """
    packing = estimate.packing
    costs = estimate.costs
    feet, inches = split_feet_inches(packing.total_length_in)
    rolls_used = roll_fraction(packing.total_length_ft, packing.rolls.roll_length_ft)

    return {
        "length": f"{feet} ft {round_to(inches, 2)} in",
        "length_ft": str(round_to(packing.total_length_ft, 2)),
        "rolls_used": str(round_to(rolls_used, 2)),
        "roll_capacity_percent": str(round_to(rolls_used * 100, 1)),
        "ink_ml": str(round_to(costs.ink_volume_ml, 2)),
        "lines": {line.value: money(value) for line, value in costs.lines().items()},
        "total_cost": money(costs.total_cost),
        "cost_per_unit": f"${round_to(costs.cost_per_unit, 3)}",
        "print_time": format_print_time(estimate.print_time),
    }
