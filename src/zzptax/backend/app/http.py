"""Problem responses and the error handlers that produce them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest, HTTPException

from zzptax.backend.config.schema import ConfigurationError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProblemResponse:
    """JSON error payload with an HTTP status."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.extra:
            payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse`; keyword extras are merged into the body."""

    return ProblemResponse(error=error, status=status, message=message, extra=extra or None)


def register_error_handlers(app: Flask) -> None:
    """Map exceptions raised by routes and services onto problem responses.

    ``ConfigurationError`` is a ``ValueError`` but signals a broken rate table
    rather than a bad request, so it is reported as a server error. Request
    payload problems reach the handlers as plain ``ValueError``; a pydantic
    ``ValidationError`` only escapes when a response model is violated.
    """

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        name = (error.name or "error").lower().replace(" ", "_")
        return problem_response(
            name, status=error.code or 500, message=error.description
        ).to_response()

    @app.errorhandler(FileNotFoundError)
    def handle_missing_year(error: FileNotFoundError):
        return problem_response("not_found", status=404, message=str(error)).to_response()

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(error: ConfigurationError):
        _LOGGER.error("Tax year configuration is invalid: %s", error)
        return problem_response(
            "configuration_error", status=500, message="Tax configuration is invalid"
        ).to_response()

    @app.errorhandler(ValidationError)
    def handle_response_validation_error(error: ValidationError):
        _LOGGER.exception("Calculation response failed validation")
        return problem_response(
            "internal_error", status=500, message="Failed to calculate tax"
        ).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        _LOGGER.exception("Unhandled error while processing request")
        return problem_response(
            "internal_error", status=500, message="Failed to calculate tax"
        ).to_response()


__all__ = ["ProblemResponse", "problem_response", "register_error_handlers"]
