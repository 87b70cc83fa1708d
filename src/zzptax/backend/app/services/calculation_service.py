"""Orchestrate request validation, normalisation, and tax calculations.

The calculation service turns loosely-typed JSON payloads into the frozen
inputs the calculators expect, picks the year's rate table and shapes the
results into the response envelope. Profiling hooks and request validation
live here so the calculators stay plain arithmetic.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from pydantic import BaseModel, ValidationError

from zzptax.backend.app.models import (
    CalculationRequest,
    CalculationResponse,
    CategorisedTransaction,
    KorStatusRequest,
    KorStatusResponse,
    StartersEligibilityRequest,
    StartersEligibilityResponse,
    TaxCalculationInput,
    TaxCalculationResult,
    TransactionSummaryRequest,
    TransactionSummaryResponse,
    format_validation_error,
)
from zzptax.backend.config.year_config import (
    YearConfiguration,
    default_year,
    load_year_configuration,
)

from .calculators import (
    check_kor_status,
    compute_comprehensive_tax,
    is_eligible_for_startersaftrek,
    round_currency,
    round_rate,
    summarise_transactions,
)

_LOGGER = logging.getLogger(__name__)

_RATE_FIELDS = frozenset({"effective_tax_rate"})


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("ZZPTAX_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _validate(model: type[BaseModel], payload: Mapping[str, Any] | BaseModel, subject: str):
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc, subject=subject)) from exc


def _resolve_configuration(year: int | None) -> YearConfiguration:
    return load_year_configuration(year if year is not None else default_year())


def build_calculation_input(request: CalculationRequest) -> TaxCalculationInput:
    """Translate a validated request into calculator input."""

    car = request.car
    return TaxCalculationInput(
        gross_profit=request.gross_profit,
        hours_worked=request.hours_worked,
        is_starter_eligible=request.is_starter_eligible,
        yearly_investments=request.yearly_investments,
        representation_costs=request.representation_costs,
        use_representation_percentage_method=request.use_representation_percentage_method,
        car_catalog_value=car.catalog_value if car else 0.0,
        car_is_electric=car.is_electric if car else False,
        car_is_hydrogen_or_solar=bool(car and (car.is_hydrogen or car.has_solar_panels)),
        car_private_km=car.private_kilometers if car else 0.0,
        vat_on_sales=request.vat_on_sales,
        vat_on_expenses=request.vat_on_expenses,
    )


def serialise_result(result: TaxCalculationResult) -> dict[str, float]:
    """Round a calculation result for presentation."""

    return {
        name: round_rate(value) if name in _RATE_FIELDS else round_currency(value)
        for name, value in result.as_dict().items()
    }


def run_calculation(
    payload: Mapping[str, Any] | CalculationRequest,
) -> tuple[TaxCalculationResult, YearConfiguration]:
    """Validate ``payload`` and return the raw result with its configuration."""

    request_model = _validate(CalculationRequest, payload, "calculation")

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    with _profile_section("configuration", timings):
        config = _resolve_configuration(request_model.year)

    with _profile_section("normalise_payload", timings):
        calculation_input = build_calculation_input(request_model)

    with _profile_section("comprehensive_tax", timings):
        result = compute_comprehensive_tax(calculation_input, config)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_tax timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    return result, config


def calculate_tax(payload: Mapping[str, Any] | CalculationRequest) -> dict[str, Any]:
    """Validate ``payload`` and compute the comprehensive tax position."""

    result, config = run_calculation(payload)

    response_model = CalculationResponse.model_validate(
        {
            "success": True,
            "calculation": serialise_result(result),
            "meta": {"year": config.year, "currency": config.currency},
        }
    )
    return response_model.model_dump(mode="json")


def evaluate_kor_status(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Check a turnover figure against the KOR threshold."""

    request_model = _validate(KorStatusRequest, payload, "KOR status")
    config = _resolve_configuration(request_model.year)
    status = check_kor_status(
        request_model.yearly_turnover, request_model.is_opted_in, config.kor
    )
    return KorStatusResponse.model_validate(status.as_dict()).model_dump(
        mode="json", exclude_none=True
    )


def evaluate_starters_eligibility(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Decide whether startersaftrek can still be claimed."""

    request_model = _validate(StartersEligibilityRequest, payload, "startersaftrek")
    config = _resolve_configuration(request_model.year)
    eligible = is_eligible_for_startersaftrek(
        request_model.current_year,
        request_model.first_year_business,
        request_model.years_used_zelfstandigenaftrek,
        config.entrepreneur,
    )
    return StartersEligibilityResponse(eligible=eligible).model_dump(mode="json")


def summarise_transaction_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Aggregate the categorised transactions contained in ``payload``."""

    request_model = _validate(TransactionSummaryRequest, payload, "transaction summary")
    config = _resolve_configuration(request_model.year)

    transactions = [
        CategorisedTransaction(**entry.model_dump()) for entry in request_model.transactions
    ]
    summary = summarise_transactions(transactions, config)
    _LOGGER.debug("Summarised %d transactions for %d", summary.transaction_count, config.year)

    summary_payload = summary.as_dict()
    for key in (
        "total_amount",
        "total_deductible",
        "total_vat_reclaimable",
        "kia_eligible_amount",
        "kia_deduction",
        "estimated_tax_savings",
    ):
        summary_payload[key] = round_currency(summary_payload[key])
    summary_payload["categories"] = {
        category: round_currency(amount)
        for category, amount in summary_payload["categories"].items()
    }

    response_model = TransactionSummaryResponse.model_validate(
        {
            "success": True,
            "summary": summary_payload,
            "meta": {"year": config.year, "currency": config.currency},
        }
    )
    return response_model.model_dump(mode="json")


__all__ = [
    "build_calculation_input",
    "calculate_tax",
    "evaluate_kor_status",
    "evaluate_starters_eligibility",
    "run_calculation",
    "serialise_result",
    "summarise_transaction_payload",
]
