"""
Unit tests for input validation.

Covers conversion of form values to exact numbers and the rejection of
missing, non-numeric, zero and negative inputs.
"""

import math
from decimal import Decimal
from fractions import Fraction

import pytest

from core.exceptions import ConfigurationError, InvalidInputError
from models.specs import CostLine
from modules import validator


# to_exact

@pytest.mark.parametrize("value, expected", [
    (3, Fraction(3)),
    ("3", Fraction(3)),
    (" 53.25 ", Fraction(213, 4)),
    (0.15, Fraction(3, 20)),
    (Decimal("0.15"), Fraction(3, 20)),
    (Fraction(1, 3), Fraction(1, 3)),
])
def test_to_exact_accepts_numbers_and_numeric_strings(value, expected):
    assert validator.to_exact(value, "width") == expected


@pytest.mark.parametrize("value", [None, "", "   ", "abc", True, False, [], object()])
def test_to_exact_rejects_missing_or_non_numeric(value):
    with pytest.raises(InvalidInputError) as exc_info:
        validator.to_exact(value, "width")
    assert exc_info.value.field == "width"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), -math.inf, Decimal("NaN"), "inf"])
def test_to_exact_rejects_non_finite(value):
    with pytest.raises(InvalidInputError):
        validator.to_exact(value, "width")


@pytest.mark.parametrize("value", [0, "0", -1, "-0.5", 0.0])
def test_to_exact_rejects_zero_and_negative(value):
    with pytest.raises(InvalidInputError):
        validator.to_exact(value, "width")


def test_to_exact_allow_zero_still_rejects_negative():
    assert validator.to_exact(0, "spacing", allow_zero=True) == 0
    with pytest.raises(InvalidInputError):
        validator.to_exact(-0.1, "spacing", allow_zero=True)


def test_to_exact_uses_requested_error_class():
    with pytest.raises(ConfigurationError) as exc_info:
        validator.to_exact(0, "roll_length_ft", ConfigurationError)
    assert exc_info.value.setting == "roll_length_ft"


# to_count

def test_to_count_accepts_whole_numbers():
    assert validator.to_count("100", "quantity") == 100
    assert validator.to_count(100.0, "quantity") == 100


def test_to_count_rejects_fractional_quantity():
    with pytest.raises(InvalidInputError) as exc_info:
        validator.to_count("2.5", "quantity")
    assert "whole number" in exc_info.value.reason


# Job and settings

def test_validate_sticker_builds_exact_spec():
    sticker = validator.validate_sticker("3", 2.5, "100")
    assert sticker.width_in == 3
    assert sticker.height_in == Fraction(5, 2)
    assert sticker.quantity == 100


def test_validate_sticker_names_offending_field():
    with pytest.raises(InvalidInputError) as exc_info:
        validator.validate_sticker(3, 0, 100)
    assert exc_info.value.field == "sticker_height_in"


def test_validate_roll_allows_zero_spacing():
    roll = validator.validate_roll(53.25, 0, 42, 150)
    assert roll.spacing_in == 0


def test_validate_roll_rejects_usable_wider_than_roll():
    with pytest.raises(ConfigurationError) as exc_info:
        validator.validate_roll(56, 0.15, 42, 150, roll_width_in=54)
    assert exc_info.value.setting == "usable_width_in"


def test_validate_roll_rejects_non_positive_roll_length():
    with pytest.raises(ConfigurationError) as exc_info:
        validator.validate_roll(53.25, 0.15, 42, 0)
    assert exc_info.value.setting == "roll_length_ft"


def test_validate_costs_rejects_zero_cost_per_roll():
    with pytest.raises(ConfigurationError):
        validator.validate_costs(0, 237.50)


def test_validate_ink_rejects_zero_cost_per_ml():
    with pytest.raises(ConfigurationError):
        validator.validate_ink(0.00403, 0, 1.2)


def test_validate_packaging_allows_free_packaging():
    table = validator.validate_packaging(301, 0, "0")
    assert table.cost_below == 0
    assert table.breakpoint_qty == 301


# parse_cost_lines

def test_parse_cost_lines_accepts_names_and_members():
    lines = validator.parse_cost_lines(["Material", " ink ", CostLine.PROMO])
    assert lines == frozenset({CostLine.MATERIAL, CostLine.INK, CostLine.PROMO})


def test_parse_cost_lines_none_means_nothing_enabled():
    assert validator.parse_cost_lines(None) == frozenset()


def test_parse_cost_lines_rejects_unknown_line():
    with pytest.raises(ConfigurationError):
        validator.parse_cost_lines(["material", "shipping"])


def test_parse_cost_lines_rejects_bare_string():
    with pytest.raises(ConfigurationError):
        validator.parse_cost_lines("material")


# validate_inputs

def _request(**overrides):
    values = {
        "sticker_width_in": "3",
        "sticker_height_in": "3",
        "quantity": "100",
        "usable_width_in": 53.25,
        "spacing_in": 0.15,
        "max_section_length_in": 42,
        "roll_length_ft": 150,
        "gap_allowance_in": 4,
        "leader_allowance_in": 4,
        "material_cost_per_roll": 189.95,
        "laminate_cost_per_roll": 237.50,
        "ink_ml_per_sq_in": 0.00403,
        "ink_cost_per_ml": 0.19,
        "ink_overhead_multiplier": 1.2,
        "seconds_per_section": 200,
        "packaging_breakpoint_qty": 301,
        "packaging_cost_below": 1.18,
        "packaging_cost_at_or_above": 0.50,
        "promo_cost_per_job": 0,
        "enabled_cost_lines": ["material", "ink"],
    }
    values.update(overrides)
    return values


def test_validate_inputs_builds_every_model():
    inputs = validator.validate_inputs(**_request(packaging_cost_override="0"))

    assert inputs.sticker.quantity == 100
    assert inputs.roll.usable_width_in == Fraction("53.25")
    assert inputs.press.seconds_per_section == 200
    assert inputs.promo_cost_per_job == 0
    assert inputs.enabled_lines == frozenset({CostLine.MATERIAL, CostLine.INK})
    assert inputs.packaging_cost_override == 0


def test_validate_inputs_checks_job_before_settings():
    with pytest.raises(InvalidInputError):
        validator.validate_inputs(**_request(quantity="", roll_length_ft=0))


@pytest.mark.parametrize("lines", [5, True, {}, {"material": True}, b"ink"])
def test_parse_cost_lines_rejects_non_collections(lines):
    with pytest.raises(ConfigurationError) as exc_info:
        validator.parse_cost_lines(lines)
    assert exc_info.value.setting == "enabled_cost_lines"
