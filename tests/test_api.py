"""
Tests for the JSON API routes.
"""

import pytest

from app import create_app


# Fixtures

@pytest.fixture
def app():
    return create_app("config.TestingConfig")


@pytest.fixture
def client(app):
    return app.test_client()


# /api/estimate

def test_estimate(client):
    response = client.post("/api/estimate", json={
        "job_name": "Order 12",
        "sticker_width_in": "3",
        "sticker_height_in": "3",
        "quantity": "100",
    })

    assert response.status_code == 200
    data = response.get_json()
    assert data["job_name"] == "Order 12"
    assert data["result"]["packing"]["stickers_per_row"] == 16
    assert data["result"]["packing"]["actual_units_printed"] == 112
    assert data["result"]["print_time"]["total_seconds"] == 200.0
    assert data["summary"]["print_time"] == "3 min 20 sec"
    assert data["margin"]["price_source"] == "storefront"
    assert data["storefront"]["total_price"] == pytest.approx(82.8)


def test_incomplete_form_is_still_ok(client):
    response = client.post("/api/estimate", json={
        "sticker_height_in": 3,
        "quantity": 100,
    })

    assert response.status_code == 200
    data = response.get_json()
    assert data["result"] is None
    assert data["no_result"]["reason"] == "invalid_input"
    assert data["no_result"]["field"] == "sticker_width_in"


def test_unsatisfiable_job(client):
    response = client.post("/api/estimate", json={
        "sticker_width_in": 60,
        "sticker_height_in": 3,
        "quantity": 10,
    })

    data = response.get_json()
    assert data["no_result"]["reason"] == "unsatisfiable_packing"
    assert data["no_result"]["field"] == "stickers_per_row"


@pytest.mark.parametrize("lines", [5, True, {}])
def test_malformed_cost_lines_are_no_result(client, lines):
    response = client.post("/api/estimate", json={
        "sticker_width_in": 3,
        "sticker_height_in": 3,
        "quantity": 100,
        "enabled_cost_lines": lines,
    })

    assert response.status_code == 200
    data = response.get_json()
    assert data["result"] is None
    assert data["no_result"] == {
        "reason": "configuration_error",
        "field": "enabled_cost_lines",
        "detail": data["no_result"]["detail"],
    }


def test_cleared_form_fields_are_ignored(client):
    response = client.post("/api/estimate", json={
        "sticker_width_in": "3",
        "sticker_height_in": "3",
        "quantity": "100",
        "enabled_cost_lines": ["packaging"],
        "packaging_cost_override": "",
        "sale_price": "",
    })

    assert response.status_code == 200
    data = response.get_json()
    assert data["result"]["costs"]["lines"]["packaging"]["cost"] == pytest.approx(1.18)
    assert data["margin"]["price_source"] == "storefront"


@pytest.mark.parametrize("body", ["not json", "[1, 2, 3]"])
def test_estimate_rejects_non_object_body(client, body):
    response = client.post("/api/estimate", data=body, content_type="application/json")
    assert response.status_code == 400


def test_estimate_without_service(app, client):
    app.config["ESTIMATE_SERVICE"] = None
    response = client.post("/api/estimate", json={"quantity": 1})
    assert response.status_code == 503


# /api/catalog and /health

def test_catalog(client):
    response = client.get("/api/catalog")

    assert response.status_code == 200
    data = response.get_json()
    assert {item["key"] for item in data["sticker_types"]} >= {"vinyl", "holo"}
    assert data["defaults"]["roll_length_ft"] == 150.0


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "ok"
    assert data["checks"]["estimate_service"] == "ok"


def test_not_found_is_json(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_wrong_method_is_json(client):
    response = client.get("/api/estimate")
    assert response.status_code == 405
