"""Typed request/response models shared across the calculation services.

Requests arrive as Pydantic models (see :mod:`.api`) and are converted into
the frozen dataclasses below before reaching the calculators. The calculators
only ever see plain numbers and booleans, which keeps them independent from
Flask and from the JSON field naming used by the front-end.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from .api import (
    CalculationMeta,
    CalculationRequest,
    CalculationResponse,
    CalculationResultPayload,
    CarInput,
    KorStatusRequest,
    KorStatusResponse,
    StartersEligibilityRequest,
    StartersEligibilityResponse,
    TransactionInput,
    TransactionSummaryPayload,
    TransactionSummaryRequest,
    TransactionSummaryResponse,
    format_validation_error,
)

__all__ = [
    "BracketShare",
    "CalculationMeta",
    "CalculationRequest",
    "CalculationResponse",
    "CalculationResultPayload",
    "CarInput",
    "CategorisedTransaction",
    "KorStatus",
    "KorStatusRequest",
    "KorStatusResponse",
    "StartersEligibilityRequest",
    "StartersEligibilityResponse",
    "TaxCalculationInput",
    "TaxCalculationResult",
    "TransactionInput",
    "TransactionSummary",
    "TransactionSummaryPayload",
    "TransactionSummaryRequest",
    "TransactionSummaryResponse",
    "format_validation_error",
]


@dataclass(frozen=True)
class TaxCalculationInput:
    """One year of business figures for a sole proprietorship."""

    gross_profit: float
    hours_worked: float
    is_starter_eligible: bool = False
    yearly_investments: float = 0.0
    representation_costs: float = 0.0
    use_representation_percentage_method: bool = True
    car_catalog_value: float = 0.0
    car_is_electric: bool = False
    car_is_hydrogen_or_solar: bool = False
    car_private_km: float = 0.0
    vat_on_sales: float = 0.0
    vat_on_expenses: float = 0.0


@dataclass(frozen=True)
class TaxCalculationResult:
    """Income tax and VAT position derived from a :class:`TaxCalculationInput`.

    ``kia_deduction`` and ``representation_deduction`` are informational: they
    are reported but do not reduce ``taxable_profit``. ``car_bijtelling`` is
    the only side amount folded into the taxable base.
    """

    gross_profit: float
    zelfstandigenaftrek: float
    startersaftrek: float
    total_ondernemersaftrek: float
    profit_after_ondernemersaftrek: float
    mkb_winstvrijstelling: float
    taxable_profit: float
    income_tax: float
    effective_tax_rate: float
    vat_due: float
    vat_reclaimable: float
    net_vat_position: float
    kia_deduction: float
    representation_deduction: float
    car_bijtelling: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class KorStatus:
    """Outcome of a kleineondernemersregeling turnover check."""

    eligible: bool
    must_exit: bool
    warning_message: str | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"eligible": self.eligible, "must_exit": self.must_exit}
        if self.warning_message is not None:
            payload["warning_message"] = self.warning_message
        return payload


@dataclass(frozen=True)
class BracketShare:
    """Portion of taxable income that falls inside one bracket."""

    lower_bound: float
    upper_bound: float | None
    rate: float
    taxable_amount: float
    tax: float


@dataclass(frozen=True)
class CategorisedTransaction:
    """A bank transaction that has already been assigned a tax category."""

    amount: float
    category: str = "uncategorized"
    deductible_percentage: float = 0.0
    vat_reclaimable: bool = False
    vat_percentage: float = 0.0
    is_kia_eligible: bool = False
    confidence: float = 100.0
    description: str | None = None
    date: str | None = None
    merchant: str | None = None


@dataclass(frozen=True)
class TransactionSummary:
    """Totals and review warnings for a batch of categorised transactions."""

    transaction_count: int
    total_amount: float
    total_deductible: float
    total_vat_reclaimable: float
    kia_eligible_amount: float
    kia_deduction: float
    estimated_tax_savings: float
    categories: Mapping[str, float] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["categories"] = dict(self.categories)
        payload["warnings"] = list(self.warnings)
        return payload
