import logging
import os
from uuid import uuid4

from flask import Flask, jsonify, request, session

from fintrack import allocation, amortization, investment, sip
from fintrack.catalog import GOAL_CATEGORIES
from fintrack.data_models import GOAL_PRIORITIES
from fintrack.errors import GoalNotFound, Rejection
from fintrack.goals import classify, filter_and_sort
from fintrack.utils import days_until
from fintrack.validation import (
    goal_fields_from_input,
    loan_terms_from_input,
    sip_input_from_input,
    validate,
    validate_choice,
)
from fintrack_web.goal_registry import create_registry_from_env

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("FINTRACK_SECRET_KEY", "dev-secret-key")
goal_registry = create_registry_from_env(os.environ.get("FINTRACK_MAX_TRACKERS"))


def _ensure_user_token() -> str:
    token = session.get("user_token")
    if not token:
        token = uuid4().hex
        session["user_token"] = token
        session.modified = True
    return token


def _payload() -> dict:
    """Return the request body as a dict, accepting JSON or form posts."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _rejected(rejection: Rejection):
    return jsonify({"error": rejection.reason, "code": rejection.code, "field": rejection.kind}), 400


def _serialize_schedule(schedule):
    """Convert schedule rows into JSON-serialisable dictionaries for charts."""
    serialized = []
    for row in schedule:
        serialized.append(
            {
                "month": row.month,
                "installment": float(row.installment),
                "principal": float(row.principal_component),
                "interest": float(row.interest_component),
                "balance": float(row.remaining_balance),
            }
        )
    return serialized


def _serialize_goal(goal, today):
    return {
        "id": goal.id,
        "amount": float(goal.target_amount),
        "purpose": goal.purpose,
        "deadline": goal.deadline.isoformat(),
        "priority": goal.priority,
        "category": goal.category,
        "current_amount": float(goal.current_amount),
        "progress": float(goal.progress_percent),
        "start_date": goal.start_date.isoformat(),
        "notes": goal.notes,
        "days_left": days_until(goal.deadline, today),
        "state": classify(goal, today),
    }


@app.post("/api/salary")
def salary_allocation():
    data = _payload()
    checked = validate("salary", data.get("salary"))
    if isinstance(checked, Rejection):
        return _rejected(checked)
    buckets = allocation.split(checked.value)
    return jsonify(
        {
            "salary": float(checked.value),
            "allocations": {
                b.key: {
                    "amount": float(b.amount),
                    "weight": float(b.weight),
                    "label": b.label,
                    "description": b.description,
                }
                for b in buckets
            },
        }
    )


@app.post("/api/loan")
def loan_emi():
    data = _payload()
    terms = loan_terms_from_input(
        data.get("amount"), data.get("rate"), data.get("tenure"), data.get("type", "home")
    )
    if isinstance(terms, Rejection):
        return _rejected(terms)
    result = amortization.compute_emi(terms)
    return jsonify(
        {
            "emi": float(result.installment),
            "total_interest": float(result.total_interest),
            "total_payment": float(result.total_payment),
            "amortization_schedule": _serialize_schedule(result.schedule),
        }
    )


@app.post("/api/sip")
def sip_projection():
    data = _payload()
    profile = validate_choice("risk_profile", data.get("risk_profile", "moderate"))
    if isinstance(profile, Rejection):
        return _rejected(profile)
    sip_input = sip_input_from_input(data.get("monthly_investment"), data.get("years"))
    if isinstance(sip_input, Rejection):
        return _rejected(sip_input)
    results = sip.project(sip_input, profile.value)
    return jsonify(
        [
            {
                "fund_name": r.fund.name,
                "expected_return": float(r.fund.annual_return_percent),
                "risk": r.fund.risk_tier,
                "description": r.fund.description,
                "calculation": {
                    "total_invested": r.total_invested,
                    "total_interest": r.total_interest,
                    "total_value": r.total_value,
                    "monthly_value": r.average_monthly_value,
                },
            }
            for r in results
        ]
    )


@app.post("/api/investment")
def investment_plan():
    data = _payload()
    profile = validate_choice("risk_profile", data.get("risk_profile", "moderate"))
    if isinstance(profile, Rejection):
        return _rejected(profile)
    amount = validate("investment_amount", data.get("amount"))
    if isinstance(amount, Rejection):
        return _rejected(amount)
    plan = investment.allocate(amount.value, profile.value)

    def _range(projection):
        return {
            "min": float(projection.minimum),
            "max": float(projection.maximum),
            "min_growth_percent": float(projection.min_growth_percent),
            "max_growth_percent": float(projection.max_growth_percent),
        }

    return jsonify(
        {
            "risk_profile": plan.risk_profile,
            "suggestions": {
                name: {
                    "amount": float(r.allocated_amount),
                    "description": r.instrument.description,
                    "expected_return": r.instrument.expected_return,
                    "risk_level": r.instrument.risk_level,
                }
                for name, r in plan.allocations.items()
            },
            "returns": {"one_year": _range(plan.one_year), "five_years": _range(plan.five_year)},
        }
    )


@app.get("/api/goals")
def list_goals():
    tracker = goal_registry.tracker_for(_ensure_user_token())
    filter_by = validate_choice("goal_filter", request.args.get("filter", "all"))
    if isinstance(filter_by, Rejection):
        return _rejected(filter_by)
    sort_key = validate_choice("goal_sort", request.args.get("sort", "deadline"))
    if isinstance(sort_key, Rejection):
        return _rejected(sort_key)
    today = tracker.today()
    goals = filter_and_sort(
        tracker.goals, filter_by.value, sort_key.value, request.args.get("search", ""), today=today
    )
    return jsonify([_serialize_goal(g, today) for g in goals])


@app.post("/api/goals")
def create_goal():
    tracker = goal_registry.tracker_for(_ensure_user_token())
    data = _payload()
    fields = goal_fields_from_input(
        data.get("amount"), data.get("purpose"), data.get("deadline"), data.get("priority"), data.get("category")
    )
    if isinstance(fields, Rejection):
        return _rejected(fields)
    goal = tracker.create_goal(notes=data.get("notes", ""), **fields)
    return jsonify(_serialize_goal(goal, tracker.today())), 201


@app.post("/api/goals/<goal_id>/contributions")
def contribute(goal_id):
    tracker = goal_registry.tracker_for(_ensure_user_token())
    amount = validate("contribution", _payload().get("amount"))
    if isinstance(amount, Rejection):
        return _rejected(amount)
    try:
        goal, events = tracker.apply_contribution(goal_id, amount.value)
    except GoalNotFound as exc:
        return jsonify({"error": str(exc), "code": "not_found", "field": "goal_id"}), 404
    return jsonify(
        {
            "goal": _serialize_goal(goal, tracker.today()),
            "events": [{"kind": e.kind, "message": e.message} for e in events],
        }
    )


@app.get("/api/goals/alerts")
def goal_alerts():
    tracker = goal_registry.tracker_for(_ensure_user_token())
    return jsonify(
        [
            {"goal_id": a.goal.id, "days_left": a.days_remaining, "message": a.message}
            for a in tracker.near_deadline()
        ]
    )


@app.get("/api/goals/categories")
def goal_categories():
    """Choices offered by the goal form."""
    return jsonify({"categories": list(GOAL_CATEGORIES), "priorities": list(GOAL_PRIORITIES)})


@app.get("/api/goals/summary")
def goal_summary():
    summary = goal_registry.tracker_for(_ensure_user_token()).summary()
    return jsonify(
        {
            "total_saved": float(summary.total_saved),
            "total_target": float(summary.total_target),
            "overall_progress": float(summary.overall_progress),
        }
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting Fintrack web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
