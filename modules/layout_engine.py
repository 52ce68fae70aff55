"""
Layout and cost-estimation engine.

Single pure pipeline, leaf first:

    validator -> packer -> material length -> roll accounting
              -> cost estimator -> print time

Each call is independent: no state survives between calls, nothing is
mutated, there is no I/O. The engine can be called from any number of
threads at once without locking.

Ordinary bad input never raises. The outcome is either a LayoutEstimate or
a NoResult saying why (invalid input, unsatisfiable packing, or a bad
setting) and which field or capacity factor was responsible.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Any, Iterable, Optional, Union

from core.exceptions import (
    CatalogLookupError,
    ConfigurationError,
    InvalidInputError,
    RollLayoutError,
    UnsatisfiablePackingError,
)
from logging_config import get_logger
from models.layout_result import (
    LayoutEstimate,
    NoResult,
    NoResultReason,
    PackingResult,
)
from models.specs import (
    CostLine,
    InkProfile,
    MaterialCostTable,
    PackagingTable,
    PressSettings,
    RollSpec,
    StickerSpec,
)
from modules import validator
from modules.cost_estimator import CostEstimator
from modules.material_length import calculate_length
from modules.packer import pack_sections
from modules.print_time import estimate_print_time
from modules.roll_accounting import account_rolls

logger = get_logger(__name__)

LayoutOutcome = Union[LayoutEstimate, NoResult]

DEFAULT_COST_LINES = frozenset({CostLine.MATERIAL, CostLine.LAMINATE, CostLine.INK})


def compute_layout(
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
    enabled_cost_lines: Optional[Iterable[Any]] = DEFAULT_COST_LINES,
    packaging_cost_override: Optional[Any] = None,
    roll_width_in: Optional[Any] = None,
) -> LayoutOutcome:
    """
    Compute layout, material, rolls, cost and print time from raw values.

    Values may be numbers or numeric strings (form input). Job inputs are
    validated before settings, so an incomplete form reports invalid_input
    even when a setting is also wrong.

    Args:
        sticker_width_in / sticker_height_in / quantity: The job
        usable_width_in, spacing_in, max_section_length_in, roll_length_ft: Roll geometry
        gap_allowance_in, leader_allowance_in, seconds_per_section: Press constants
        material_cost_per_roll, laminate_cost_per_roll: Selected roll prices
        ink_ml_per_sq_in, ink_cost_per_ml, ink_overhead_multiplier: Ink calibration
        packaging_breakpoint_qty, packaging_cost_below, packaging_cost_at_or_above: Packaging steps
        promo_cost_per_job: Flat promo insert cost
        enabled_cost_lines: Lines counted in the total (CostLine or names)
        packaging_cost_override: Caller-edited packaging cost, if any
        roll_width_in: Physical roll width, checked against usable_width_in

    Returns:
        LayoutEstimate, or NoResult when the inputs cannot produce one
    """
    try:
        inputs = validator.validate_inputs(
            sticker_width_in=sticker_width_in,
            sticker_height_in=sticker_height_in,
            quantity=quantity,
            usable_width_in=usable_width_in,
            spacing_in=spacing_in,
            max_section_length_in=max_section_length_in,
            roll_length_ft=roll_length_ft,
            gap_allowance_in=gap_allowance_in,
            leader_allowance_in=leader_allowance_in,
            material_cost_per_roll=material_cost_per_roll,
            laminate_cost_per_roll=laminate_cost_per_roll,
            ink_ml_per_sq_in=ink_ml_per_sq_in,
            ink_cost_per_ml=ink_cost_per_ml,
            ink_overhead_multiplier=ink_overhead_multiplier,
            seconds_per_section=seconds_per_section,
            packaging_breakpoint_qty=packaging_breakpoint_qty,
            packaging_cost_below=packaging_cost_below,
            packaging_cost_at_or_above=packaging_cost_at_or_above,
            promo_cost_per_job=promo_cost_per_job,
            enabled_cost_lines=enabled_cost_lines,
            packaging_cost_override=packaging_cost_override,
            roll_width_in=roll_width_in,
        )
    except RollLayoutError as e:
        return no_result_from_error(e)

    return estimate_layout(
        sticker=inputs.sticker,
        roll=inputs.roll,
        press=inputs.press,
        costs=inputs.costs,
        ink=inputs.ink,
        packaging=inputs.packaging,
        promo_cost_per_job=inputs.promo_cost_per_job,
        enabled_lines=inputs.enabled_lines,
        packaging_cost_override=inputs.packaging_cost_override,
    )


def estimate_layout(
    sticker: StickerSpec,
    roll: RollSpec,
    press: PressSettings,
    costs: MaterialCostTable,
    ink: InkProfile,
    packaging: PackagingTable,
    promo_cost_per_job: Fraction = Fraction(0),
    enabled_lines: Iterable[CostLine] = DEFAULT_COST_LINES,
    packaging_cost_override: Optional[Fraction] = None,
) -> LayoutOutcome:
    """
    Run the pipeline on already-validated input models.

    Returns:
        LayoutEstimate, or NoResult if the sticker does not fit or a
        setting makes a division impossible
    """
    try:
        plan = pack_sections(sticker, roll)
        length = calculate_length(plan, sticker, roll, press)
        rolls = account_rolls(length.total_length_ft, roll.roll_length_ft)
        packing = PackingResult(plan=plan, length=length, rolls=rolls)

        estimator = CostEstimator(costs, ink, packaging, promo_cost_per_job)
        cost_breakdown = estimator.estimate(
            sticker, packing, frozenset(enabled_lines), packaging_cost_override
        )
        print_time = estimate_print_time(plan.sections_needed, press.seconds_per_section)
    except RollLayoutError as e:
        return no_result_from_error(e)

    logger.debug(
        f"Estimate: {plan.sections_needed} section(s), {rolls.rolls_needed} roll(s), "
        f"total {float(cost_breakdown.total_cost):.2f}"
    )
    return LayoutEstimate(
        sticker=sticker,
        packing=packing,
        costs=cost_breakdown,
        print_time=print_time,
    )


def no_result_from_error(error: RollLayoutError) -> NoResult:
    """Map an engine error onto the NoResult reason a caller can explain."""
    if isinstance(error, UnsatisfiablePackingError):
        outcome = NoResult(
            reason=NoResultReason.UNSATISFIABLE_PACKING,
            field=error.factor,
            detail=error.message,
            context=dict(error.details),
        )
    elif isinstance(error, InvalidInputError):
        outcome = NoResult(
            reason=NoResultReason.INVALID_INPUT,
            field=error.field,
            detail=error.message,
            context=dict(error.details),
        )
    elif isinstance(error, ConfigurationError):
        outcome = NoResult(
            reason=NoResultReason.CONFIGURATION_ERROR,
            field=error.setting,
            detail=error.message,
            context=dict(error.details),
        )
    elif isinstance(error, CatalogLookupError):
        outcome = NoResult(
            reason=NoResultReason.CONFIGURATION_ERROR,
            field=error.kind.replace(" ", "_"),
            detail=error.message,
            context=dict(error.details),
        )
    else:
        raise error

    logger.debug(f"No result ({outcome.reason.value}): {outcome.detail}")
    return outcome
