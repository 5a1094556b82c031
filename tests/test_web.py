from datetime import date, timedelta

import pytest

from fintrack_web.app import app
from fintrack_web.goal_registry import GoalRegistry


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_salary(client):
    resp = client.post("/api/salary", json={"salary": "100000"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["allocations"]["needs"]["amount"] == 40000
    assert data["allocations"]["credit_emi"]["label"] == "Credit/EMI"


def test_salary_rejection(client):
    resp = client.post("/api/salary", data={"salary": "abc"})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "not_a_number"
    assert resp.get_json()["field"] == "salary"


def test_loan(client):
    resp = client.post("/api/loan", json={"amount": 1000000, "rate": 8.5, "tenure": 20, "type": "home"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert round(data["emi"]) == 8678
    assert len(data["amortization_schedule"]) == 240
    assert data["amortization_schedule"][-1]["balance"] == 0


def test_loan_rejection(client):
    resp = client.post("/api/loan", json={"amount": 1000000, "rate": 8.5, "tenure": 40})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "tenure"


def test_loan_with_vanishing_rate(client):
    resp = client.post("/api/loan", json={"amount": 120000, "rate": "1e-30", "tenure": 1})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["emi"] == 10000
    assert data["amortization_schedule"][-1]["balance"] == 0


def test_oversized_amounts_are_rejected(client):
    resp = client.post("/api/loan", json={"amount": "1e1000000", "rate": 8, "tenure": 1})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "not_a_number"

    goal = client.post(
        "/api/goals",
        json={"amount": 1000, "purpose": "Bike", "deadline": "2030-01-01", "priority": "Low", "category": "Other"},
    ).get_json()
    resp = client.post(f"/api/goals/{goal['id']}/contributions", json={"amount": "1e1000000"})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "contribution"


def test_sip(client):
    resp = client.post("/api/sip", json={"monthly_investment": 5000, "years": 5, "risk_profile": "moderate"})
    assert resp.status_code == 200
    large_cap = resp.get_json()[1]
    assert large_cap["fund_name"] == "Large Cap Fund"
    assert large_cap["calculation"]["total_value"] == 412432
    assert large_cap["calculation"]["monthly_value"] == 6874


def test_sip_unknown_profile(client):
    resp = client.post("/api/sip", json={"monthly_investment": 5000, "years": 5, "risk_profile": "wild"})
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "invalid_choice"


def test_investment(client):
    resp = client.post("/api/investment", json={"amount": 100000, "risk_profile": "moderate"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["suggestions"]["Mutual Funds"]["amount"] == 35000
    assert data["returns"]["five_years"]["min"] == 161051


def test_investment_minimum(client):
    resp = client.post("/api/investment", json={"amount": 500})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Minimum investment amount is ₹1,000"


def test_goal_flow(client):
    soon = (date.today() + timedelta(days=3)).isoformat()
    later = (date.today() + timedelta(days=120)).isoformat()

    resp = client.post(
        "/api/goals",
        json={"amount": 50000, "purpose": "Vacation", "deadline": later, "priority": "High", "category": "Travel"},
    )
    assert resp.status_code == 201
    vacation = resp.get_json()
    assert vacation["state"] == "Active"

    resp = client.post(
        "/api/goals",
        json={"amount": 80000, "purpose": "Laptop", "deadline": soon, "priority": "low", "category": "Gadgets"},
    )
    assert resp.get_json()["state"] == "NearDeadline"

    resp = client.post(f"/api/goals/{vacation['id']}/contributions", json={"amount": 26000})
    assert resp.status_code == 200
    assert [e["kind"] for e in resp.get_json()["events"]] == ["goal_halfway"]

    resp = client.post(f"/api/goals/{vacation['id']}/contributions", json={"amount": 26000})
    body = resp.get_json()
    assert body["goal"]["current_amount"] == 50000
    assert body["goal"]["state"] == "Completed"
    assert [e["kind"] for e in body["events"]] == ["goal_completed"]

    listed = client.get("/api/goals?sort=amount").get_json()
    assert [g["purpose"] for g in listed] == ["Laptop", "Vacation"]
    assert [g["purpose"] for g in client.get("/api/goals?filter=high").get_json()] == ["Vacation"]
    assert [g["purpose"] for g in client.get("/api/goals?search=gadg").get_json()] == ["Laptop"]

    alerts = client.get("/api/goals/alerts").get_json()
    assert [a["days_left"] for a in alerts] == [3]

    summary = client.get("/api/goals/summary").get_json()
    assert summary["total_saved"] == 50000
    assert summary["total_target"] == 130000


def test_goal_errors(client):
    resp = client.post(
        "/api/goals",
        json={"amount": 1000, "purpose": "", "deadline": "2030-01-01", "priority": "High", "category": "Misc"},
    )
    assert resp.status_code == 400
    assert resp.get_json()["code"] == "required"

    resp = client.post("/api/goals/GOAL_nope/contributions", json={"amount": 10})
    assert resp.status_code == 404
    assert resp.get_json()["code"] == "not_found"

    assert client.get("/api/goals?filter=someday").status_code == 400


def test_goal_categories(client):
    data = client.get("/api/goals/categories").get_json()
    assert "Emergency Fund" in data["categories"]
    assert data["priorities"] == ["High", "Medium", "Low"]


def test_sessions_get_separate_trackers():
    first, second = app.test_client(), app.test_client()
    first.post(
        "/api/goals",
        json={"amount": 1000, "purpose": "Shoes", "deadline": "2030-01-01", "priority": "Low", "category": "Misc"},
    )
    assert len(first.get("/api/goals").get_json()) == 1
    assert second.get("/api/goals").get_json() == []


def test_registry_drops_least_recent_tracker():
    registry = GoalRegistry(max_trackers=2)
    first = registry.tracker_for("a")
    registry.tracker_for("b")
    assert registry.tracker_for("a") is first
    registry.tracker_for("c")
    assert len(registry) == 2
    assert registry.tracker_for("a") is first
    assert registry.tracker_for("b") is not None
    assert len(registry) == 2
