import json
import os

from flask import Flask, jsonify, render_template, request

from mortgage_calc.engine import chart_data, compute_loan, loan_from_request, result_to_dict
from mortgage_calc.utils import format_currency
from mortgage_calc.validation import LoanInputError

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")

TERM_OPTIONS = {
    "0": "30 year fixed",
    "1": "15 year fixed",
}

DEFAULT_FORM = {
    "loan_amount": "300000",
    "interest": "7",
    "loan_term": "0",
    "extra_monthly_payment": "0",
}


def _form_values(form) -> dict:
    values = dict(DEFAULT_FORM)
    for key in DEFAULT_FORM:
        if key in form:
            values[key] = form.get(key, "").strip()
    return values


def _form_to_request(values: dict) -> dict:
    return {
        "principal": values["loan_amount"],
        "annual_rate_percent": values["interest"],
        "term_code": values["loan_term"],
        "extra_monthly_payment": values["extra_monthly_payment"] or "0",
    }


def _run_analysis(values: dict):
    """Compute a result for the form and prepare it for the template."""
    result = compute_loan(loan_from_request(_form_to_request(values)))
    summary = {
        "monthly_payment": format_currency(result.monthly_payment),
        "total_paid": format_currency(result.total_paid),
        "total_years": result.total_years,
    }
    table = [
        {
            "year": year.year_index,
            "interest": format_currency(year.interest),
            "principal": format_currency(year.principal),
            "ending_balance": format_currency(year.ending_balance),
        }
        for year in result.schedule
    ]
    return summary, table, chart_data(result)


@app.route("/", methods=["GET", "POST"])
def index():
    values = _form_values(request.form if request.method == "POST" else {})
    summary = None
    table = None
    chart_payload = "null"
    error = None

    try:
        summary, table, chart = _run_analysis(values)
        chart_payload = json.dumps(chart)
    except LoanInputError as exc:
        app.logger.info("Rejected form input: %s", exc.kind)
        error = exc.message

    return render_template(
        "index.html",
        form=values,
        term_options=TERM_OPTIONS,
        summary=summary,
        table=table,
        chart_payload=chart_payload,
        error=error,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.post("/api/amortization")
def amortization_api():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "InvalidRequest", "message": "Request body must be a JSON object"}), 400
    try:
        result = compute_loan(loan_from_request(payload))
    except LoanInputError as exc:
        app.logger.info("Rejected API request: %s", exc.kind)
        return jsonify({"error": exc.kind, "message": exc.message}), 400
    data = result_to_dict(result)
    data["chart"] = chart_data(result)
    return jsonify(data)


if __name__ == "__main__":
    port = int(os.environ.get("MORTGAGE_CALC_PORT", "8710"))
    print("Starting Mortgage Calculator web app...")
    app.run(host="0.0.0.0", port=port, debug=True)
