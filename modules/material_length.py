"""Material length calculator: linear roll consumed by a section plan."""

from __future__ import annotations

from fractions import Fraction

from logging_config import get_logger
from models.layout_result import MaterialLength, SectionPlan
from models.specs import PressSettings, RollSpec, StickerSpec

logger = get_logger(__name__)

INCHES_PER_FOOT = 12


def run_length(rows: int, height_in: Fraction, spacing_in: Fraction) -> Fraction:
    """Length of `rows` consecutive rows: spacing between rows, none after the last."""
    if rows <= 0:
        return Fraction(0)
    return rows * height_in + (rows - 1) * spacing_in


def calculate_length(
    plan: SectionPlan,
    sticker: StickerSpec,
    roll: RollSpec,
    press: PressSettings,
) -> MaterialLength:
    """
    Convert a section plan into material length.

    total = full_sections * full_section_length
            + final_section_length
            + (sections_needed - 1) * gap_allowance
            + leader_allowance

    The leader allowance is added unconditionally, even for a one-sticker job.
    """
    full_section_length = run_length(plan.rows_per_section, sticker.height_in, roll.spacing_in)

    final_section_length = Fraction(0)
    if plan.remainder > 0:
        final_rows = -(-plan.remainder // plan.stickers_per_row)  # ceil
        final_section_length = run_length(final_rows, sticker.height_in, roll.spacing_in)

    gap_count = plan.sections_needed - 1 if plan.sections_needed > 1 else 0

    base_length = (
        plan.full_sections * full_section_length
        + final_section_length
        + gap_count * press.gap_allowance_in
    )
    total_length_in = base_length + press.leader_allowance_in

    length = MaterialLength(
        full_section_length_in=full_section_length,
        final_section_length_in=final_section_length,
        gap_count=gap_count,
        base_length_in=base_length,
        total_length_in=total_length_in,
        total_length_ft=total_length_in / INCHES_PER_FOOT,
    )

    logger.debug(
        f"Material length: {float(total_length_in):.3f} in "
        f"({gap_count} gap(s), leader {float(press.leader_allowance_in)} in)"
    )
    return length
