"""JSON API exposing the loan cost calculator over HTTP.

The enclosing back office posts the loan terms a user is editing and receives
the summary and schedule with every amount as a decimal string. Validation
errors answer 422 with the offending field so the form can highlight it.
"""

import os
from datetime import date
from decimal import Decimal

from flask import Flask, jsonify, request

from loan_cost.config import fee_config_from_env
from loan_cost.data_models import FeeConfig, LoanTerms
from loan_cost.errors import CalculationError, InvalidSettlementDate, InvalidStartDate
from loan_cost.formatter import settlement_to_dict, summary_to_dict
from loan_cost.result import try_calculate
from loan_cost.settlement import early_settlement
from loan_cost.utils import parse_date


def _date_field(payload: dict, name: str, error) -> date:
    try:
        return parse_date(payload.get(name, ""))
    except ValueError as exc:
        raise error(str(exc))


def _terms_from_json(payload: dict) -> LoanTerms:
    term_days = payload.get("term_days")
    if isinstance(term_days, str) and term_days.strip().isdigit():
        term_days = int(term_days)
    salary_day = payload.get("salary_day")
    if isinstance(salary_day, str):
        salary_day = int(salary_day) if salary_day.strip().isdigit() else (salary_day.strip() or None)
    return LoanTerms(
        principal=payload.get("principal"),
        term_days=term_days,
        start_date=_date_field(payload, "start_date", InvalidStartDate),
        monthly_rate=payload.get("monthly_rate", "0.05"),
        salary_day=salary_day,
    )


def _error_response(error: str, field: str):
    return jsonify({"error": error, "field": field}), 422


def _json_object():
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise CalculationError("Request body must be a JSON object")
    return payload


def create_app(fee_config: FeeConfig = None) -> Flask:
    app = Flask(__name__)
    app.config["FEE_CONFIG"] = fee_config or fee_config_from_env()

    @app.get("/api/fee-config")
    def show_fee_config():
        cfg = app.config["FEE_CONFIG"]
        return jsonify({name: str(value) for name, value in cfg.as_dict().items()})

    @app.post("/api/quote")
    def quote():
        try:
            payload = _json_object()
            terms = _terms_from_json(payload)
        except CalculationError as exc:
            return _error_response(exc.message, exc.field)
        result = try_calculate(terms, app.config["FEE_CONFIG"])
        if not result:
            app.logger.info("Rejected quote request: %s", result.error)
            return _error_response(result.error, result.error_type)
        return jsonify(summary_to_dict(result.value))

    @app.post("/api/settlement")
    def settlement():
        try:
            payload = _json_object()
            terms = _terms_from_json(payload)
            quote = early_settlement(
                terms,
                app.config["FEE_CONFIG"],
                _date_field(payload, "settlement_date", InvalidSettlementDate),
                payload.get("previous_payments", Decimal("0")),
            )
        except CalculationError as exc:
            app.logger.info("Rejected settlement request: %s", exc)
            return _error_response(exc.message, exc.field)
        return jsonify(settlement_to_dict(quote))

    return app


if __name__ == "__main__":
    print("Starting loan cost API...")
    create_app().run(host="0.0.0.0", port=int(os.environ.get("PORT", 8710)), debug=True)
