"""Expose configuration metadata consumed by the dashboard front-end.

These endpoints bridge the YAML-backed year configuration and the UI so that
forms can show the current brackets, deduction amounts and thresholds without
duplicating business rules.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from zzptax.backend.app.services.calculators import format_percentage
from zzptax.backend.config.year_config import (
    YearConfiguration,
    available_years,
    load_manifest,
    load_year_configuration,
)
from zzptax.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration manifest."""

    manifest = load_manifest()
    supported_years = list(manifest.supported_years)
    default_year = supported_years[-1] if supported_years else None
    return {
        "version": get_project_version(),
        "supported_years": supported_years,
        "default_year": default_year,
    }


def _serialise_brackets(config: YearConfiguration) -> list[dict[str, Any]]:
    brackets: list[dict[str, Any]] = []
    for lower, bracket in zip(config.income_tax.lower_bounds(), config.income_tax.brackets):
        brackets.append(
            {
                "lower": lower,
                "upper": bracket.upper_bound,
                "rate": bracket.rate,
                "label": format_percentage(bracket.rate),
            }
        )
    return brackets


def _serialise_year(year: int) -> dict[str, Any]:
    entry = load_manifest().get_entry(year)
    config = load_year_configuration(year)
    payload: dict[str, Any] = {
        "year": year,
        "status": entry.status,
        "currency": config.currency,
    }
    if entry.notes_url:
        payload["notes_url"] = entry.notes_url
    label = config.meta.get("label")
    if label:
        payload["label"] = label
    return payload


def serialise_rates(config: YearConfiguration) -> dict[str, Any]:
    """Return the rate table for ``config`` as a JSON-ready mapping."""

    return {
        "year": config.year,
        "currency": config.currency,
        "income_tax": {"brackets": _serialise_brackets(config)},
        "vat": {"rates": dict(config.vat.rates)},
        "entrepreneur": config.entrepreneur.model_dump(mode="json"),
        "mkb_winstvrijstelling": config.mkb_winstvrijstelling.model_dump(mode="json"),
        "kia": config.kia.model_dump(mode="json"),
        "representation": config.representation.model_dump(mode="json"),
        "car_benefit": config.car_benefit.model_dump(mode="json"),
        "kor": {
            **config.kor.model_dump(mode="json"),
            "warning_threshold": config.kor.warning_threshold,
        },
    }


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Expose lightweight application metadata such as the version identifier."""

    payload = get_configuration_metadata()
    return jsonify(payload), 200


@blueprint.get("/years")
def list_years() -> tuple[Any, int]:
    """Return all configured years with lightweight metadata."""

    years = [_serialise_year(year) for year in available_years()]
    metadata = get_configuration_metadata()
    payload = {
        "years": years,
        "default_year": metadata["default_year"],
        "supported_years": metadata["supported_years"],
    }
    return jsonify(payload), 200


@blueprint.get("/<int:year>/rates")
def get_year_rates(year: int) -> tuple[Any, int]:
    """Expose the full rate table configured for ``year``."""

    configuration = load_year_configuration(year)
    return jsonify(serialise_rates(configuration)), 200
