from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date, timedelta
from typing import Any

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, short_label
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.exceptions import PolicyStoreError, ValidationError
from ..container import Container
from ..policy.model import policy_to_mapping
from .model import AnalyticsReport, DateAggregate, HostRanking, StudentScorecard

logger = logging.getLogger(__name__)


def _scorecard_json(card: StudentScorecard) -> dict[str, Any]:
    data = asdict(card)
    data["trend"] = {
        "slope": card.trend.slope,
        "r_squared": card.trend.r_squared,
        "classification": card.trend.classification.value,
    }
    return data


def _date_json(agg: DateAggregate) -> dict[str, Any]:
    data = asdict(agg)
    data["date"] = agg.date.isoformat()
    return data


def _host_json(host: HostRanking) -> dict[str, Any]:
    data = asdict(host)
    data["dates"] = [d.isoformat() for d in host.dates]
    data["date_labels"] = [short_label(d) for d in host.dates]
    return data


def report_json(report: AnalyticsReport) -> dict[str, Any]:
    summary = asdict(report.summary)
    summary["trend_counts"] = {k.value: v for k, v in report.summary.trend_counts.items()}
    return {
        "scorecards": [_scorecard_json(c) for c in report.scorecards],
        "dates": [_date_json(d) for d in report.dates],
        "hosts": [_host_json(h) for h in report.hosts],
        "summary": summary,
    }


def register(app: Flask, container: Container) -> None:
    def _fail(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _date_arg(name: str, default: date) -> date:
        raw = (request.args.get(name) or "").strip()
        if not raw:
            return default
        try:
            return parse_iso_date(raw)
        except ValueError as e:
            raise ValidationError(f"{name} must be YYYY-MM-DD") from e

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return _fail(str(e), 400)

    @app.errorhandler(PolicyStoreError)
    def _store_error(e: PolicyStoreError):
        logger.error("Scoring policy store failure: %s", e)
        return _fail(str(e), 503)

    @app.route("/api/analytics/report", methods=["GET"], endpoint="analytics_report")
    def analytics_report():
        end = _date_arg("end", date.today())
        start = _date_arg("start", end - timedelta(days=DEFAULT_REPORT_DAYS))
        session_id = (request.args.get("session_id") or "").strip() or None

        report = container.analytics_service.evaluate_range(start, end, session_id=session_id)
        return jsonify({"success": True, "report": report_json(report)})

    @app.route("/api/scoring-policy", methods=["GET"], endpoint="get_scoring_policy")
    def get_scoring_policy():
        policy = container.policy_service.load_policy()
        return jsonify({"success": True, "policy": policy_to_mapping(policy)})

    @app.route("/api/scoring-policy", methods=["PUT"], endpoint="save_scoring_policy")
    def save_scoring_policy():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return _fail("Request body must be a JSON object", 400)

        policy = container.policy_service.save_policy(payload)
        return jsonify({"success": True, "policy": policy_to_mapping(policy)})

    @app.route("/api/scoring-policy", methods=["DELETE"], endpoint="reset_scoring_policy")
    def reset_scoring_policy():
        policy = container.policy_service.reset_policy()
        return jsonify({"success": True, "policy": policy_to_mapping(policy)})

    @app.route("/api/scoring-policy/preview", methods=["GET"], endpoint="preview_scoring_policy")
    def preview_scoring_policy():
        curves = container.policy_service.preview()
        return jsonify(
            {
                "success": True,
                "decay": [{"minutes": m, "credit": c} for m, c in curves["decay"]],
                "coverage": [{"days": d, "factor": f} for d, f in curves["coverage"]],
            }
        )
