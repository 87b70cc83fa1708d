"""Box 1 income tax on business profit."""

from __future__ import annotations

from zzptax.backend.app.models import BracketShare
from zzptax.backend.config.year_config import IncomeTaxConfig, default_configuration

from .utils import calculate_progressive_tax


def compute_income_tax(
    taxable_income: float, config: IncomeTaxConfig | None = None
) -> float:
    """Return income tax due on ``taxable_income``.

    Income is not floored at zero; see :func:`calculate_progressive_tax`.
    """

    schedule = config or default_configuration().income_tax
    return calculate_progressive_tax(taxable_income, schedule.brackets)


def income_tax_breakdown(
    taxable_income: float, config: IncomeTaxConfig | None = None
) -> list[BracketShare]:
    """Split ``taxable_income`` over the brackets it reaches.

    Only brackets that receive a positive amount are returned, so the list is
    empty for zero or negative income.
    """

    schedule = config or default_configuration().income_tax
    shares: list[BracketShare] = []

    for lower, bracket in zip(schedule.lower_bounds(), schedule.brackets):
        if not taxable_income > lower:
            break
        upper = bracket.upper_bound
        top = taxable_income if upper is None else min(taxable_income, upper)
        portion = top - lower
        shares.append(
            BracketShare(
                lower_bound=lower,
                upper_bound=upper,
                rate=bracket.rate,
                taxable_amount=portion,
                tax=portion * bracket.rate,
            )
        )

    return shares


__all__ = ["compute_income_tax", "income_tax_breakdown"]
