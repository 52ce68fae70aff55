"""
Unit tests for the material catalog.
"""

from fractions import Fraction

import pytest

from core.exceptions import CatalogLookupError
from modules import catalog


@pytest.mark.parametrize("key, cost", [
    ("vinyl", "189.95"),
    ("holo", "719.95"),
    ("clear", "199.95"),
    ("glitter", "249.95"),
    ("economy", "149.95"),
])
def test_substrate_prices(key, cost):
    assert catalog.get_substrate(key).cost_per_roll == Fraction(cost)


def test_substrate_lookup_ignores_case_and_whitespace():
    assert catalog.get_substrate("  Holo ").key == "holo"


def test_unknown_substrate():
    with pytest.raises(CatalogLookupError) as exc_info:
        catalog.get_substrate("chrome")
    assert exc_info.value.kind == "sticker type"
    assert "vinyl" in exc_info.value.details["available"]


def test_laminate_prices():
    assert catalog.get_laminate("gf402_matte").cost_per_roll == Fraction("237.50")
    assert catalog.get_laminate("substance_3150").cost_per_roll == Fraction("199.95")


def test_unknown_laminate():
    with pytest.raises(CatalogLookupError):
        catalog.get_laminate(None)


@pytest.mark.parametrize("width, cost", [
    (Fraction(20), "90.95"),
    (Fraction(30), "109.95"),
    (Fraction(54), "189.95"),
    (Fraction("53.9"), "189.95"),
    (Fraction(60), "209.95"),
])
def test_roll_width_prices(width, cost):
    assert catalog.material_cost_for_roll_width(width) == Fraction(cost)


def test_unstocked_roll_width():
    with pytest.raises(CatalogLookupError) as exc_info:
        catalog.material_cost_for_roll_width(Fraction(42))
    assert exc_info.value.kind == "roll width"


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        catalog.SUBSTRATES["chrome"] = catalog.SUBSTRATES["vinyl"]


def test_catalog_to_dict():
    data = catalog.catalog_to_dict()

    assert [item["key"] for item in data["sticker_types"]] == ["vinyl", "holo", "clear", "glitter", "economy", "pro"]
    assert data["laminates"][0] == {
        "key": "gf402_matte",
        "label": "General Formulations 402 Matte",
        "cost_per_roll": 237.5,
    }
    assert {"width_in": 60, "cost_per_roll": 209.95} in data["roll_widths"]
