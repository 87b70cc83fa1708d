"""Unit coverage for the aggregate sole-proprietor calculation."""

from __future__ import annotations

import math
from dataclasses import replace

import pytest

from zzptax.backend.app.models import TaxCalculationInput
from zzptax.backend.app.services.calculators import (
    compute_comprehensive_tax,
    compute_income_tax,
)

BASE_INPUT = TaxCalculationInput(
    gross_profit=85_420,
    hours_worked=1_450,
    is_starter_eligible=False,
)


def test_established_entrepreneur_chain() -> None:
    result = compute_comprehensive_tax(BASE_INPUT)

    assert result.zelfstandigenaftrek == 2_470
    assert result.startersaftrek == 0
    assert result.total_ondernemersaftrek == 2_470
    assert result.profit_after_ondernemersaftrek == pytest.approx(82_950)
    assert result.mkb_winstvrijstelling == pytest.approx(10_534.65)
    assert result.taxable_profit == pytest.approx(72_415.35)
    assert result.income_tax == pytest.approx(compute_income_tax(72_415.35))
    assert result.income_tax == pytest.approx(26_503.15258)
    assert result.effective_tax_rate == pytest.approx(result.income_tax / 85_420 * 100)


def test_starter_needs_hours_as_well() -> None:
    result = compute_comprehensive_tax(
        replace(BASE_INPUT, hours_worked=1_000, is_starter_eligible=True)
    )

    assert result.total_ondernemersaftrek == 0
    assert result.profit_after_ondernemersaftrek == pytest.approx(85_420)


def test_starter_with_hours_gets_both_deductions() -> None:
    result = compute_comprehensive_tax(replace(BASE_INPUT, is_starter_eligible=True))

    assert result.startersaftrek == 2_123
    assert result.total_ondernemersaftrek == 4_593


def test_kia_and_representation_are_informational_only() -> None:
    plain = compute_comprehensive_tax(BASE_INPUT)
    with_extras = compute_comprehensive_tax(
        replace(BASE_INPUT, yearly_investments=10_000, representation_costs=2_000)
    )

    assert with_extras.kia_deduction == pytest.approx(2_800)
    assert with_extras.representation_deduction == pytest.approx(1_600)
    assert with_extras.taxable_profit == plain.taxable_profit
    assert with_extras.income_tax == plain.income_tax


def test_representation_threshold_method_can_be_selected() -> None:
    result = compute_comprehensive_tax(
        replace(
            BASE_INPUT,
            representation_costs=8_000,
            use_representation_percentage_method=False,
        )
    )

    assert result.representation_deduction == pytest.approx(2_300)


def test_bijtelling_is_added_to_taxable_profit() -> None:
    plain = compute_comprehensive_tax(BASE_INPUT)
    with_car = compute_comprehensive_tax(
        replace(
            BASE_INPUT,
            car_catalog_value=40_000,
            car_is_electric=True,
            car_private_km=600,
        )
    )

    assert with_car.car_bijtelling == pytest.approx(7_300)
    assert with_car.taxable_profit == pytest.approx(plain.taxable_profit + 7_300)


def test_car_without_catalog_value_is_ignored() -> None:
    result = compute_comprehensive_tax(
        replace(BASE_INPUT, car_catalog_value=0, car_private_km=20_000)
    )

    assert result.car_bijtelling == 0


def test_loss_is_floored_before_exemption() -> None:
    result = compute_comprehensive_tax(replace(BASE_INPUT, gross_profit=-10_000))

    assert result.profit_after_ondernemersaftrek == 0
    assert result.mkb_winstvrijstelling == 0
    assert result.income_tax == 0
    assert result.effective_tax_rate == 0


def test_vat_is_passed_through() -> None:
    result = compute_comprehensive_tax(
        replace(BASE_INPUT, vat_on_sales=17_938.20, vat_on_expenses=4_861.50)
    )

    assert result.vat_due == pytest.approx(17_938.20)
    assert result.vat_reclaimable == pytest.approx(4_861.50)
    assert result.net_vat_position == pytest.approx(13_076.70)


def test_repeated_calls_are_identical() -> None:
    first = compute_comprehensive_tax(BASE_INPUT)
    second = compute_comprehensive_tax(BASE_INPUT)

    assert first == second
    assert first.as_dict() == second.as_dict()


def test_nan_profit_propagates_without_raising() -> None:
    result = compute_comprehensive_tax(replace(BASE_INPUT, gross_profit=float("nan")))

    assert math.isnan(result.profit_after_ondernemersaftrek)
    assert math.isnan(result.income_tax)
    assert result.effective_tax_rate == 0


def test_alternative_year_table_is_used(config_2025) -> None:
    lower_exemption = config_2025.model_copy(
        update={
            "mkb_winstvrijstelling": config_2025.mkb_winstvrijstelling.model_copy(
                update={"rate": 0.0}
            )
        }
    )

    result = compute_comprehensive_tax(BASE_INPUT, lower_exemption)

    assert result.mkb_winstvrijstelling == 0
    assert result.taxable_profit == pytest.approx(82_950)
