"""Utilities for serialising calculation responses."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Tuple

from flask import Response, jsonify

ResponseTuple = Tuple[Any, int]

_MIMETYPES = {
    "csv": "text/csv",
    "pdf": "application/pdf",
}


def build_calculation_response(payload: Mapping[str, Any]) -> ResponseTuple:
    """Return a Flask JSON response for the calculation ``payload``."""

    return jsonify(payload), 200


def build_download_response(body: str | bytes, *, export_format: str, year: int) -> Response:
    """Wrap a rendered export in an attachment response."""

    response = Response(body, mimetype=_MIMETYPES[export_format])
    response.headers["Content-Disposition"] = (
        f'attachment; filename="zzptax-{year}.{export_format}"'
    )
    return response
