import json

import pytest

from mortgage_calc_web.app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_index_renders_default_calculation(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "$1,996" in body
    assert "30 year fixed" in body


def test_index_post_with_extra_payment(client):
    response = client.post(
        "/",
        data={"loan_amount": "300000", "interest": "7", "loan_term": "1", "extra_monthly_payment": "500"},
    )
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Total years" in body
    assert "Loan amount is invalid" not in body


def test_index_post_shows_validation_error(client):
    response = client.post(
        "/",
        data={"loan_amount": "-1", "interest": "0", "loan_term": "0", "extra_monthly_payment": "-1"},
    )
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Loan amount is invalid" in body
    assert "Interest is invalid" not in body
    assert "Total years" not in body


def test_api_returns_rounded_summary_and_chart(client):
    response = client.post(
        "/api/amortization",
        json={"principal": 300000, "annual_rate_percent": 7, "term_code": 0, "extra_monthly_payment": 0},
    )
    assert response.status_code == 200
    data = response.get_json()
    assert data["monthly_payment"] == 1996
    assert data["total_years"] == 30
    assert data["schedule"][-1]["ending_balance"] == 0
    assert data["chart"]["datasets"][0]["label"] == "Interest"


def test_api_reports_validation_error(client):
    response = client.post(
        "/api/amortization",
        json={"principal": 1000, "annual_rate_percent": 5, "term_code": 0, "extra_monthly_payment": -10},
    )
    assert response.status_code == 400
    assert response.get_json() == {
        "error": "InvalidExtraPayment",
        "message": "Extra monthly payment is invalid",
    }


def test_api_rejects_non_object_body(client):
    response = client.post(
        "/api/amortization", data=json.dumps([1, 2]), content_type="application/json"
    )
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidRequest"


def test_index_post_shows_unknown_term_error(client):
    response = client.post(
        "/",
        data={"loan_amount": "300000", "interest": "7", "loan_term": "5", "extra_monthly_payment": "0"},
    )
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Loan term is invalid" in body
    assert "Total years" not in body


def test_api_rejects_rate_that_never_pays_down(client):
    response = client.post(
        "/api/amortization",
        json={"principal": 300000, "annual_rate_percent": 200, "term_code": 0},
    )
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidRate"


def test_api_rejects_oversized_principal(client):
    body = '{"principal": 1' + "0" * 400 + ', "annual_rate_percent": 7}'
    response = client.post("/api/amortization", data=body, content_type="application/json")
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvalidPrincipal"
