"""Unit tests for calculation request parsing helpers."""

from __future__ import annotations

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from zzptax.backend.services.request_parser import parse_calculation_payload


def test_parse_payload_uses_query_year(app: Flask) -> None:
    """The ``year`` query parameter should fill in a missing year."""

    with app.test_request_context(
        "/api/v1/calculations?year=2025",
        method="POST",
        json={"gross_profit": 50_000},
    ):
        payload = parse_calculation_payload(request)

    assert payload == {"gross_profit": 50_000, "year": 2025}


def test_parse_payload_preserves_explicit_year(app: Flask) -> None:
    """A year in the body takes precedence over the query string."""

    with app.test_request_context(
        "/api/v1/calculations?year=2030",
        method="POST",
        json={"year": 2025, "gross_profit": 50_000},
    ):
        payload = parse_calculation_payload(request)

    assert payload["year"] == 2025


def test_parse_payload_rejects_non_integer_year(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations?year=next",
        method="POST",
        json={"gross_profit": 50_000},
    ):
        with pytest.raises(BadRequest, match="must be an integer"):
            parse_calculation_payload(request)


def test_parse_payload_rejects_non_object(app: Flask) -> None:
    """Non-object JSON payloads should trigger BadRequest responses."""

    with app.test_request_context(
        "/api/v1/calculations",
        method="POST",
        json=["not", "an", "object"],
    ):
        with pytest.raises(BadRequest):
            parse_calculation_payload(request)


def test_parse_payload_rejects_invalid_json(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations",
        method="POST",
        data="{not json",
        content_type="application/json",
    ):
        with pytest.raises(BadRequest, match="valid JSON"):
            parse_calculation_payload(request)
