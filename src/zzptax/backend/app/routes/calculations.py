"""REST endpoints for tax calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, request
from werkzeug.exceptions import BadRequest

from zzptax.backend.app.services.calculation_service import run_calculation
from zzptax.backend.app.services.export_service import (
    EXPORT_FORMATS,
    render_csv,
    render_pdf,
)
from zzptax.backend.services import (
    build_calculation_response,
    calculate_tax,
    parse_calculation_payload,
)
from zzptax.backend.services.response_builder import build_download_response

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1")


@blueprint.post("/calculations")
def create_calculation() -> tuple[Any, int]:
    """Create a tax calculation using the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    result = calculate_tax(payload)

    return build_calculation_response(result)


@blueprint.post("/calculations/export")
def export_calculation() -> Response:
    """Return the calculation for the submitted payload as CSV or PDF."""

    export_format = (request.args.get("format") or "csv").strip().lower()
    if export_format not in EXPORT_FORMATS:
        raise BadRequest(
            f"Unsupported export format '{export_format}'; "
            f"choose one of: {', '.join(EXPORT_FORMATS)}"
        )

    payload = parse_calculation_payload(request)
    result, config = run_calculation(payload)

    if export_format == "pdf":
        body: str | bytes = render_pdf(result, config)
    else:
        body = render_csv(result, config)

    return build_download_response(body, export_format=export_format, year=config.year)
