"""Aggregate income tax and VAT position for a sole proprietorship."""

from __future__ import annotations

from zzptax.backend.app.models import TaxCalculationInput, TaxCalculationResult
from zzptax.backend.config.year_config import YearConfiguration, default_configuration

from .car import compute_car_bijtelling
from .entrepreneur import compute_ondernemersaftrek
from .income_tax import compute_income_tax
from .investment import compute_kia
from .representation import compute_representation_deduction
from .utils import clamp_non_negative
from .vat import net_vat_position


def compute_comprehensive_tax(
    params: TaxCalculationInput, config: YearConfiguration | None = None
) -> TaxCalculationResult:
    """Compute the full income tax and VAT position for ``params``.

    The chain runs gross profit → ondernemersaftrek → MKB-winstvrijstelling →
    bijtelling → income tax. KIA and representation deductions are reported
    alongside but are not subtracted from the taxable profit.
    """

    year = config or default_configuration()

    zelfstandigenaftrek, startersaftrek = compute_ondernemersaftrek(
        params.hours_worked, params.is_starter_eligible, year.entrepreneur
    )
    total_ondernemersaftrek = zelfstandigenaftrek + startersaftrek

    kia_deduction = compute_kia(params.yearly_investments, year.kia)
    representation_deduction = compute_representation_deduction(
        params.representation_costs,
        params.use_representation_percentage_method,
        year.representation,
    )

    car_bijtelling = 0.0
    if params.car_catalog_value > 0:
        car_bijtelling = compute_car_bijtelling(
            params.car_catalog_value,
            params.car_is_electric,
            params.car_is_hydrogen_or_solar,
            params.car_private_km,
            year.car_benefit,
        )

    profit_after_ondernemersaftrek = clamp_non_negative(
        params.gross_profit - total_ondernemersaftrek
    )
    mkb_winstvrijstelling = (
        profit_after_ondernemersaftrek * year.mkb_winstvrijstelling.rate
    )
    taxable_profit = profit_after_ondernemersaftrek - mkb_winstvrijstelling + car_bijtelling

    income_tax = compute_income_tax(taxable_profit, year.income_tax)
    effective_tax_rate = (
        (income_tax / params.gross_profit) * 100 if params.gross_profit > 0 else 0.0
    )

    return TaxCalculationResult(
        gross_profit=params.gross_profit,
        zelfstandigenaftrek=zelfstandigenaftrek,
        startersaftrek=startersaftrek,
        total_ondernemersaftrek=total_ondernemersaftrek,
        profit_after_ondernemersaftrek=profit_after_ondernemersaftrek,
        mkb_winstvrijstelling=mkb_winstvrijstelling,
        taxable_profit=taxable_profit,
        income_tax=income_tax,
        effective_tax_rate=effective_tax_rate,
        vat_due=params.vat_on_sales,
        vat_reclaimable=params.vat_on_expenses,
        net_vat_position=net_vat_position(params.vat_on_sales, params.vat_on_expenses),
        kia_deduction=kia_deduction,
        representation_deduction=representation_deduction,
        car_bijtelling=car_bijtelling,
    )


__all__ = ["compute_comprehensive_tax"]
