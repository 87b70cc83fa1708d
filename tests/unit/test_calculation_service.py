"""Unit tests for the calculation service."""

from __future__ import annotations

import logging

import pytest

from zzptax.backend.app.models import CalculationRequest
from zzptax.backend.app.services.calculation_service import (
    build_calculation_input,
    calculate_tax,
    evaluate_kor_status,
    evaluate_starters_eligibility,
    run_calculation,
    summarise_transaction_payload,
)


def test_defaults_to_latest_configured_year() -> None:
    result = calculate_tax({"gross_profit": 50_000, "hours_worked": 1_300})

    assert result["meta"]["year"] == 2025
    assert result["meta"]["currency"] == "EUR"


def test_camel_case_and_snake_case_payloads_agree() -> None:
    snake = calculate_tax(
        {"gross_profit": 60_000, "hours_worked": 1_400, "is_starter_eligible": True}
    )
    camel = calculate_tax(
        {"grossProfit": 60_000, "hoursWorked": 1_400, "isStarterEligible": True}
    )

    assert snake == camel


def test_null_values_fall_back_to_defaults() -> None:
    result = calculate_tax(
        {
            "gross_profit": 30_000,
            "hours_worked": None,
            "representation_costs": None,
            "car": None,
        }
    )

    assert result["calculation"]["zelfstandigenaftrek"] == 0
    assert result["calculation"]["representation_deduction"] == 0
    assert result["calculation"]["car_bijtelling"] == 0


def test_results_are_rounded_for_presentation() -> None:
    result = calculate_tax({"gross_profit": 85_420, "hours_worked": 1_450})

    calculation = result["calculation"]
    assert calculation["income_tax"] == 26_503.15
    assert calculation["effective_tax_rate"] == 31.0269


def test_run_calculation_keeps_unrounded_values() -> None:
    result, config = run_calculation({"gross_profit": 85_420, "hours_worked": 1_450})

    assert config.year == 2025
    assert result.income_tax == pytest.approx(26_503.15258)
    assert result.income_tax != 26_503.15


def test_flat_car_fields_are_collected() -> None:
    request = CalculationRequest.model_validate(
        {
            "gross_profit": 40_000,
            "car_catalog_value": 35_000,
            "car_is_electric": True,
            "car_private_km": 2_000,
        }
    )

    calculation_input = build_calculation_input(request)

    assert calculation_input.car_catalog_value == 35_000
    assert calculation_input.car_is_electric is True
    assert calculation_input.car_private_km == 2_000


def test_hydrogen_or_solar_flags_share_the_exception() -> None:
    for car in ({"is_hydrogen": True}, {"has_solar_panels": True}):
        request = CalculationRequest.model_validate(
            {"gross_profit": 0, "car": {"catalog_value": 80_000, **car}}
        )
        assert build_calculation_input(request).car_is_hydrogen_or_solar is True


def test_car_cannot_be_given_twice() -> None:
    with pytest.raises(ValueError, match="either as 'car'"):
        calculate_tax(
            {
                "gross_profit": 40_000,
                "car": {"catalog_value": 30_000},
                "car_catalog_value": 30_000,
            }
        )


def test_negative_amounts_are_rejected() -> None:
    with pytest.raises(ValueError, match="value cannot be negative"):
        calculate_tax({"gross_profit": 40_000, "hours_worked": -1})


def test_negative_gross_profit_is_accepted() -> None:
    result = calculate_tax({"gross_profit": -1_000, "hours_worked": 1_500})

    assert result["calculation"]["taxable_profit"] == 0


def test_unknown_fields_are_rejected() -> None:
    with pytest.raises(ValueError, match="Invalid calculation payload"):
        calculate_tax({"gross_profit": 1, "salary": 2})


def test_unknown_year_raises_file_not_found() -> None:
    with pytest.raises(FileNotFoundError):
        calculate_tax({"year": 2019, "gross_profit": 1})


def test_profiling_logs_timings(monkeypatch, caplog) -> None:
    monkeypatch.setenv("ZZPTAX_PROFILE_CALCULATIONS", "true")

    with caplog.at_level(
        logging.DEBUG, logger="zzptax.backend.app.services.calculation_service"
    ):
        calculate_tax({"gross_profit": 50_000, "hours_worked": 1_300})

    assert "calculate_tax timings" in caplog.text


def test_kor_status_payload() -> None:
    assert evaluate_kor_status({"yearlyTurnover": 10_000}) == {
        "eligible": True,
        "must_exit": False,
    }

    warning = evaluate_kor_status({"yearly_turnover": 19_000, "is_opted_in": True})
    assert warning["eligible"] is True
    assert warning["warning_message"].startswith("Warning: Approaching KOR limit")

    exceeded = evaluate_kor_status({"yearly_turnover": 25_000})
    assert exceeded["eligible"] is False
    assert exceeded["must_exit"] is True


def test_starters_eligibility_payload() -> None:
    assert evaluate_starters_eligibility(
        {"currentYear": 2025, "firstYearBusiness": 2022, "yearsUsedZelfstandigenaftrek": 1}
    ) == {"eligible": True}
    assert evaluate_starters_eligibility(
        {"current_year": 2025, "first_year_business": 2019}
    ) == {"eligible": False}


def test_starters_eligibility_requires_years() -> None:
    with pytest.raises(ValueError, match="current_?[Yy]ear"):
        evaluate_starters_eligibility({"first_year_business": 2022})


def test_transaction_summary_payload() -> None:
    result = summarise_transaction_payload(
        {
            "transactions": [
                {
                    "amount": 121,
                    "category": "software",
                    "deductiblePercentage": 100,
                    "vatReclaimable": True,
                    "vatPercentage": 21,
                },
                {"amount": 33.333, "category": "software", "confidence": 20},
            ]
        }
    )

    summary = result["summary"]
    assert result["meta"]["year"] == 2025
    assert summary["transaction_count"] == 2
    assert summary["total_amount"] == 154.33
    assert summary["total_vat_reclaimable"] == 21.0
    assert summary["categories"] == {"software": 154.33}
    assert summary["warnings"] == [
        "1 transactions have low confidence categorization - review manually"
    ]


def test_non_finite_numbers_are_rejected() -> None:
    with pytest.raises(ValueError, match="finite"):
        calculate_tax({"gross_profit": float("nan"), "hours_worked": 1_450})

    with pytest.raises(ValueError, match="finite"):
        evaluate_kor_status({"yearly_turnover": float("inf")})
