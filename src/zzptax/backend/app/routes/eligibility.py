"""Endpoints for the standalone eligibility checks (KOR, startersaftrek)."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from zzptax.backend.app.services.calculation_service import (
    evaluate_kor_status,
    evaluate_starters_eligibility,
)
from zzptax.backend.services import build_calculation_response, parse_calculation_payload

blueprint = Blueprint("eligibility", __name__, url_prefix="/api/v1")


@blueprint.post("/kor-status")
def kor_status() -> tuple[Any, int]:
    """Report whether the turnover still fits the kleineondernemersregeling."""

    payload = parse_calculation_payload(request)
    return build_calculation_response(evaluate_kor_status(payload))


@blueprint.post("/starters-eligibility")
def starters_eligibility() -> tuple[Any, int]:
    """Report whether startersaftrek can be claimed for the current year."""

    payload = parse_calculation_payload(request)
    return build_calculation_response(evaluate_starters_eligibility(payload))
