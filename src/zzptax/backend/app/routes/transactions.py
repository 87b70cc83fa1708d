"""Endpoint summarising categorised transactions."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from zzptax.backend.app.services.calculation_service import summarise_transaction_payload
from zzptax.backend.services import build_calculation_response, parse_calculation_payload

blueprint = Blueprint("transactions", __name__, url_prefix="/api/v1/transactions")


@blueprint.post("/summary")
def summarise() -> tuple[Any, int]:
    """Aggregate deductible, VAT and KIA totals for the submitted transactions."""

    payload = parse_calculation_payload(request)
    return build_calculation_response(summarise_transaction_payload(payload))
