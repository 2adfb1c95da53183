import os
import sys

import pytest
from fastapi.testclient import TestClient

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from detail_pricing.api.main import app


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "online"


def test_calculate_base_package(client):
    response = client.post("/pricing/calculate", json={
        "basePriceSource": {"type": "package", "amount": 149},
        "sizeMultiplier": 1.0,
        "conditionMultiplier": 1.0,
        "jobType": "one_time",
        "addOnAmounts": [],
    })

    assert response.status_code == 200
    assert response.json() == {
        "clientPrice": 149,
        "estimatedHours": 1.5,
        "employeePay": 60,
        "suppliesCost": 12,
        "companyProfit": 77,
        "employeeHourlyRate": 40,
        "meetsHourlyTarget": False,
        "suggestedClientPrice": 188,
    }


def test_calculate_maintenance(client):
    response = client.post("/pricing/calculate", json={
        "basePriceSource": {"type": "package", "amount": 399},
        "sizeMultiplier": 1.2,
        "conditionMultiplier": 1.0,
        "jobType": "maintenance",
        "frequency": "monthly",
        "addOnAmounts": [40],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["clientPrice"] == 399
    assert data["estimatedHours"] == 5.1
    assert data["employeeHourlyRate"] == 31


def test_healthy_job_has_no_suggestion(client):
    response = client.post("/pricing/calculate", json={
        "basePriceSource": {"type": "custom", "amount": 500},
        "conditionMultiplier": 0.9,
        "jobType": "one_time",
    })

    assert response.status_code == 200
    data = response.json()
    assert data["meetsHourlyTarget"] is True
    assert "suggestedClientPrice" not in data


def test_trace_is_opt_in(client):
    response = client.post("/pricing/calculate?trace=true", json={
        "basePriceSource": {"type": "package", "amount": 249},
    })

    assert response.status_code == 200
    data = response.json()
    assert data["breakdown"]["baseTimeHours"] == 3.0
    assert data["trace"][0]["step"] == "Frequency"


@pytest.mark.parametrize("body,error", [
    ({"basePriceSource": {"type": "custom", "amount": 0}}, "invalid base price"),
    ({"basePriceSource": {"type": "custom", "amount": -5}}, "invalid base price"),
    ({"basePriceSource": {"type": "voucher", "amount": 100}}, "invalid base price"),
    ({"basePriceSource": {"type": "package", "amount": 199}}, "unknown package amount"),
    ({"basePriceSource": {"type": "package", "amount": 149}, "jobType": "maintenance"}, "missing frequency"),
    ({"basePriceSource": {"type": "package", "amount": 149}, "jobType": "maintenance", "frequency": "daily"},
     "unrecognized frequency"),
    ({"basePriceSource": {"type": "package", "amount": 149}, "addOnAmounts": [-10]}, "negative add-on amount"),
])
def test_calculate_validation_errors(client, body, error):
    response = client.post("/pricing/calculate", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": error}


def test_malformed_body_is_a_400(client):
    response = client.post("/pricing/calculate", json={"sizeMultiplier": 1.0})
    assert response.status_code == 400
    assert "basePriceSource" in response.json()["error"]


def test_quote_from_catalog_codes(client):
    response = client.post("/pricing/quote", json={
        "vehicle": "Mercedes S560",
        "package": "works",
        "size": "suv",
        "jobType": "maintenance",
        "frequency": "monthly",
        "addOns": ["wax"],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["vehicle"] == "Mercedes S560"
    assert data["result"]["clientPrice"] == 399
    assert data["hourlyBand"] == "below"


def test_quote_defaults_vehicle_name(client):
    response = client.post("/pricing/quote", json={"customAmount": 500, "condition": "excellent"})

    assert response.status_code == 200
    data = response.json()
    assert data["vehicle"] == "Unnamed Vehicle"
    assert data["hourlyBand"] == "target"


def test_quote_unknown_add_on(client):
    response = client.post("/pricing/quote", json={"package": "base", "addOns": ["ceramic"]})
    assert response.status_code == 400
    assert "ceramic" in response.json()["error"]


def test_quote_without_price(client):
    response = client.post("/pricing/quote", json={"size": "suv"})
    assert response.status_code == 400
    assert response.json() == {"error": "invalid base price"}


def test_catalog(client):
    response = client.get("/catalog")
    assert response.status_code == 200
    data = response.json()
    assert [p["price"] for p in data["packages"]] == [149.0, 249.0, 399.0]
    assert {"packages", "sizes", "conditions", "addOns"} <= set(data)


def test_oversized_custom_price_is_a_400(client):
    response = client.post("/pricing/calculate", json={
        "basePriceSource": {"type": "custom", "amount": 1e28},
    })
    assert response.status_code == 400
    assert response.json() == {"error": "invalid base price"}


def test_oversized_add_on_is_a_400(client):
    response = client.post("/pricing/calculate", json={
        "basePriceSource": {"type": "package", "amount": 149},
        "addOnAmounts": [1e28],
    })
    assert response.status_code == 400
    assert response.json() == {"error": "invalid add-on amount"}


@pytest.mark.parametrize("body", [
    {"basePriceSource": {"type": "custom", "amount": True}},
    {"basePriceSource": {"type": "package", "amount": 149}, "sizeMultiplier": True},
    {"basePriceSource": {"type": "package", "amount": 149}, "conditionMultiplier": True},
    {"basePriceSource": {"type": "package", "amount": 149}, "addOnAmounts": [True]},
    {"basePriceSource": {"type": "custom", "amount": "185"}},
])
def test_non_numeric_json_values_are_rejected(client, body):
    """Booleans and strings are not coerced into amounts or multipliers."""
    response = client.post("/pricing/calculate", json=body)
    assert response.status_code == 400
    assert "error" in response.json()


def test_quote_rejects_boolean_custom_amount(client):
    response = client.post("/pricing/quote", json={"customAmount": True})
    assert response.status_code == 400
    assert "error" in response.json()


def test_cors_preflight_allows_calculator_calls(client):
    response = client.options("/pricing/calculate", headers={
        "Origin": "http://localhost:8501",
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "Content-Type",
    })
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]
