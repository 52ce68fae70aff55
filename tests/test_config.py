"""
Tests for environment-driven settings.
"""

from fractions import Fraction

import pytest

from config import _env_fraction, _env_int, _env_list
from core.exceptions import ConfigurationError


def test_env_fraction_reads_decimal_exactly(monkeypatch):
    monkeypatch.setenv("PRESS_SPACING_IN", " 0.15 ")
    assert _env_fraction("PRESS_SPACING_IN", "0") == Fraction(3, 20)


def test_env_fraction_falls_back_to_default(monkeypatch):
    monkeypatch.delenv("PRESS_SPACING_IN", raising=False)
    assert _env_fraction("PRESS_SPACING_IN", "0.15") == Fraction("0.15")


def test_env_fraction_rejects_garbage(monkeypatch):
    monkeypatch.setenv("INK_CARTRIDGE_COST", "two hundred")
    with pytest.raises(ConfigurationError) as exc_info:
        _env_fraction("INK_CARTRIDGE_COST", "286")
    assert exc_info.value.setting == "INK_CARTRIDGE_COST"


def test_env_int_rejects_decimal(monkeypatch):
    monkeypatch.setenv("PACKAGING_BREAKPOINT_QTY", "300.5")
    with pytest.raises(ConfigurationError):
        _env_int("PACKAGING_BREAKPOINT_QTY", "301")


def test_env_list(monkeypatch):
    monkeypatch.setenv("DEFAULT_COST_LINES", "Material, ink,,promo ")
    assert _env_list("DEFAULT_COST_LINES", "") == ("material", "ink", "promo")
