"""
Print time estimator.

Press run time is sections_needed × seconds_per_section. Cleaning and
changeover cycles between jobs are NOT included; the estimate covers
printing only.
"""

from __future__ import annotations

from fractions import Fraction

from core.exceptions import ConfigurationError
from models.layout_result import PrintTime

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600


def split_seconds(total_seconds: Fraction) -> PrintTime:
    """Split a duration into hours, minutes and seconds by integer division."""
    hours = int(total_seconds // SECONDS_PER_HOUR)
    minutes = int((total_seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE)
    seconds = total_seconds % SECONDS_PER_MINUTE
    return PrintTime(
        total_seconds=total_seconds,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )


def estimate_print_time(sections_needed: int, seconds_per_section: Fraction) -> PrintTime:
    if seconds_per_section <= 0:
        raise ConfigurationError("seconds_per_section", seconds_per_section)
    return split_seconds(Fraction(sections_needed) * seconds_per_section)
