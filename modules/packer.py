"""Row/section packer: how uniform stickers are laid out on the roll."""

from __future__ import annotations

import math

from core.exceptions import UnsatisfiablePackingError
from logging_config import get_logger
from models.layout_result import SectionPlan
from models.specs import RollSpec, StickerSpec

logger = get_logger(__name__)


def stickers_per_row(sticker: StickerSpec, roll: RollSpec) -> int:
    """
    Stickers that fit across the usable width.

    n stickers need n*w + (n-1)*s inches, so the capacity is
    floor((usable + s) / (w + s)).
    """
    return math.floor((roll.usable_width_in + roll.spacing_in) / (sticker.width_in + roll.spacing_in))


def rows_per_section(sticker: StickerSpec, roll: RollSpec) -> int:
    """Rows that fit within one press section, same formula along the roll."""
    return math.floor(
        (roll.max_section_length_in + roll.spacing_in) / (sticker.height_in + roll.spacing_in)
    )


def pack_sections(sticker: StickerSpec, roll: RollSpec) -> SectionPlan:
    """
    Lay out `sticker.quantity` stickers in rows and sections.

    Rows are never printed partially: once a row is started it is filled to
    stickers_per_row, so a job smaller than one row still consumes a full row
    of material. That overstatement is how the press operates.

    Args:
        sticker: Validated job
        roll: Validated roll geometry

    Returns:
        SectionPlan with row capacity, section counts and units printed

    Raises:
        UnsatisfiablePackingError: the sticker is wider than the usable width
            or taller than the maximum section length
    """
    per_row = stickers_per_row(sticker, roll)
    if per_row == 0:
        raise UnsatisfiablePackingError("stickers_per_row", float(sticker.width_in), float(roll.usable_width_in))

    rows = rows_per_section(sticker, roll)
    if rows == 0:
        raise UnsatisfiablePackingError(
            "rows_per_section", float(sticker.height_in), float(roll.max_section_length_in)
        )

    quantity = sticker.quantity
    per_section = per_row * rows
    full_sections, remainder = divmod(quantity, per_section)

    total_rows = -(-quantity // per_row)  # ceil
    sections_needed = full_sections + (1 if remainder > 0 else 0)

    plan = SectionPlan(
        quantity=quantity,
        stickers_per_row=per_row,
        rows_per_section=rows,
        stickers_per_section=per_section,
        full_sections=full_sections,
        remainder=remainder,
        sections_needed=sections_needed,
        total_rows=total_rows,
        actual_units_printed=total_rows * per_row,
    )

    logger.debug(
        f"Packed {quantity} stickers: {per_row} per row, {rows} rows per section, "
        f"{full_sections} full section(s) + {remainder} remainder -> {sections_needed} section(s), "
        f"{plan.actual_units_printed} printed"
    )
    return plan
