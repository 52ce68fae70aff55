"""
Tests for the estimate service: defaults, catalog overrides, sanitizing
and margin.
"""

from fractions import Fraction

import pytest

from config import TestingConfig
from models.layout_result import NoResultReason
from services.estimate_service import EstimateService, MarginSummary, _sanitize_text


# Fixtures

@pytest.fixture
def service():
    return EstimateService(TestingConfig)


@pytest.fixture
def job():
    return {
        "job_name": "Order 12",
        "sticker_width_in": 3,
        "sticker_height_in": 3,
        "quantity": 100,
    }


# Defaults

def test_defaults_come_from_config(service):
    defaults = service.defaults()

    assert defaults["sticker_type"] == "vinyl"
    assert defaults["laminate"] == "gf402_matte"
    assert defaults["usable_width_in"] == 53.25
    assert defaults["enabled_cost_lines"] == ["material", "laminate", "ink"]
    assert defaults["ink_overhead_multiplier"] == 1.2


def test_estimate_with_defaults(service, job):
    response = service.estimate(job)

    assert response.has_result
    assert response.job_name == "Order 12"
    costs = response.outcome.costs
    length_ft = Fraction("25.9") / 12
    assert costs.material_cost == length_ft * Fraction("189.95") / 150
    assert costs.laminate_cost == length_ft * Fraction("237.50") / 150
    assert response.margin.price_source == "storefront"


def test_incomplete_form_is_no_result(service, job):
    del job["sticker_width_in"]
    response = service.estimate(job)

    assert not response.has_result
    data = response.to_dict()
    assert data["result"] is None
    assert data["no_result"]["reason"] == "invalid_input"
    assert data["no_result"]["field"] == "sticker_width_in"


# Catalog overrides

def test_sticker_type_selects_substrate_cost(service, job):
    vinyl = service.estimate(job).outcome.costs.material_cost
    holo = service.estimate(dict(job, sticker_type="holo")).outcome.costs.material_cost

    assert holo == vinyl * Fraction("719.95") / Fraction("189.95")


def test_laminate_preset(service, job):
    costs = service.estimate(dict(job, laminate="substance_3150")).outcome.costs
    assert costs.laminate_cost == Fraction("25.9") / 12 * Fraction("199.95") / 150


def test_unknown_sticker_type(service, job):
    response = service.estimate(dict(job, sticker_type="chrome"))

    assert response.outcome.reason is NoResultReason.CONFIGURATION_ERROR
    assert response.outcome.field == "sticker_type"


def test_roll_width_preset_matches_explicit_cost(service, job):
    geometry = {"roll_width_in": 60, "usable_width_in": 59}
    from_width = service.estimate(dict(job, **geometry))
    explicit = service.estimate(dict(job, material_cost_per_roll="209.95", **geometry))

    assert from_width.outcome.costs.material_cost == explicit.outcome.costs.material_cost
    assert from_width.outcome.packing.stickers_per_row == 18


def test_explicit_cost_beats_sticker_type(service, job):
    response = service.estimate(dict(job, sticker_type="holo", material_cost_per_roll=150))
    assert response.outcome.costs.material_cost == Fraction("25.9") / 12 * 150 / 150


def test_usable_width_wider_than_roll(service, job):
    response = service.estimate(dict(job, roll_width_in=54, usable_width_in=56))

    assert response.outcome.reason is NoResultReason.CONFIGURATION_ERROR
    assert response.outcome.field == "usable_width_in"


def test_request_can_enable_all_lines(service, job):
    base = service.estimate(job).outcome.costs.total_cost
    request = dict(job, enabled_cost_lines=["material", "laminate", "ink", "packaging", "promo"])
    total = service.estimate(request).outcome.costs.total_cost

    assert total == base + Fraction("1.18") + Fraction("0.20")


# Job name

def test_job_name_is_sanitized(service, job):
    response = service.estimate(dict(job, job_name="<b>Order</b> 12<script>x</script>"))
    assert "<" not in response.job_name
    assert response.job_name.startswith("Order 12")


def test_sanitize_text_truncates():
    assert _sanitize_text("x" * 150, 100) == "x" * 100
    assert _sanitize_text(None) == ""


# Margin

def test_margin_against_sale_price(service, job):
    response = service.estimate(dict(job, sale_price="50"))
    total = response.outcome.costs.total_cost
    margin = response.margin

    assert margin.sale_price == 50
    assert margin.profit == 50 - total
    assert margin.margin_percent == (50 - total) / 50 * 100
    assert margin.profit_per_unit == Fraction(50, 100) - total / 100
    assert response.to_dict()["margin"]["sale_price"] == 50.0


def test_margin_at_a_loss_clamps_profit(service, job):
    margin = service.estimate(dict(job, sale_price=1)).margin

    assert margin.profit == 0
    assert margin.profit_per_unit == 0
    assert margin.margin_percent < 0


def test_bad_sale_price_skips_margin(service, job):
    response = service.estimate(dict(job, sale_price="abc"))

    assert response.has_result
    assert response.margin is None


def test_zero_sale_price_has_zero_margin(service, job):
    estimate = service.estimate(job).outcome
    margin = MarginSummary.from_estimate(Fraction(0), estimate)

    assert margin.margin_percent == 0
    assert margin.profit == 0


def test_summary_in_response(service, job):
    data = service.estimate(job).to_dict()

    assert data["summary"]["length"] == "2 ft 1.90 in"
    assert data["summary"]["print_time"] == "3 min 20 sec"
    assert data["summary"]["total_cost"].startswith("$")


# Storefront price

def test_storefront_price_is_the_default_sale_price(service, job):
    response = service.estimate(job)
    total = response.outcome.costs.total_cost

    # 9 sq in base $1.38, 40% off at 100
    assert response.storefront.total_price == Fraction("82.8")
    assert response.margin.sale_price == Fraction("82.8")
    assert response.margin.profit == Fraction("82.8") - total
    assert response.to_dict()["storefront"]["rule"] == "tiered"


def test_premium_sticker_type_raises_storefront_price(service, job):
    vinyl = service.estimate(job).storefront.total_price
    glitter = service.estimate(dict(job, sticker_type="glitter")).storefront.total_price

    assert glitter == vinyl * Fraction("1.15")


def test_pro_sticker_type_uses_subscription_price(service, job):
    response = service.estimate(dict(job, sticker_type="pro"))

    assert response.storefront.rule == "pro"
    assert response.storefront.total_price == 39
    assert response.outcome.costs.material_cost == Fraction("25.9") / 12 * Fraction("189.95") / 150


def test_blank_sale_price_falls_back_to_storefront(service, job):
    response = service.estimate(dict(job, sale_price=""))
    assert response.margin.price_source == "storefront"


def test_quoted_sale_price_wins_over_storefront(service, job):
    response = service.estimate(dict(job, sale_price="50"))

    assert response.margin.price_source == "sale_price"
    assert response.storefront.total_price == Fraction("82.8")


def test_storefront_tables_from_csv(tmp_path, job):
    base_csv = tmp_path / "base-price.csv"
    base_csv.write_text("Sq. Inches,Base Price\n9,$2.00\n", encoding="utf-8")
    discount_csv = tmp_path / "qty-sq.csv"
    discount_csv.write_text("Quantity,Square Inches\n,9\n100,0.50\n", encoding="utf-8")

    class CsvPricingConfig(TestingConfig):
        PRICING_BASE_PRICE_CSV = str(base_csv)
        PRICING_QUANTITY_DISCOUNT_CSV = str(discount_csv)

    response = EstimateService(CsvPricingConfig).estimate(job)
    assert response.storefront.total_price == 100


# Cleared form fields

def test_blank_packaging_override_means_no_override(service, job):
    request = dict(job, enabled_cost_lines=["packaging"], packaging_cost_override="")
    response = service.estimate(request)

    assert response.has_result
    assert response.outcome.costs.packaging_cost == Fraction("1.18")


def test_packaging_override_still_applies(service, job):
    request = dict(job, enabled_cost_lines=["packaging"], packaging_cost_override="2.5")
    assert service.estimate(request).outcome.costs.total_cost == Fraction("2.5")
