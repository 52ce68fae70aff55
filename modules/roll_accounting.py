"""Roll accounting: whole and partial rolls for a material length."""

from __future__ import annotations

import math
from fractions import Fraction

from core.exceptions import ConfigurationError
from models.layout_result import RollUsage


def account_rolls(total_length_ft: Fraction, roll_length_ft: Fraction) -> RollUsage:
    """
    Count the rolls a job consumes.

    The roll length is a catalog choice supplied by the caller; nothing here
    tries to pick a better one.

    Raises:
        ConfigurationError: roll_length_ft is zero or negative
    """
    if roll_length_ft <= 0:
        raise ConfigurationError("roll_length_ft", roll_length_ft)

    rolls = total_length_ft / roll_length_ft
    full_rolls_used = math.floor(rolls)

    return RollUsage(
        roll_length_ft=roll_length_ft,
        rolls_needed=math.ceil(rolls),
        full_rolls_used=full_rolls_used,
        remaining_feet_on_last_roll=total_length_ft - full_rolls_used * roll_length_ft,
    )
