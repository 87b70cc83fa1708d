"""Pydantic models describing the public API surface."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

__all__ = [
    "CalculationMeta",
    "CalculationRequest",
    "CalculationResponse",
    "CalculationResultPayload",
    "CarInput",
    "KorStatusRequest",
    "KorStatusResponse",
    "StartersEligibilityRequest",
    "StartersEligibilityResponse",
    "TransactionInput",
    "TransactionSummaryPayload",
    "TransactionSummaryRequest",
    "TransactionSummaryResponse",
    "format_validation_error",
]


class RequestModel(BaseModel):
    """Base for request bodies accepting ``snake_case`` and ``camelCase`` keys.

    Explicit ``null`` values fall back to the field default so that the
    dashboard can submit blank form inputs. NaN and infinite numbers are
    rejected because they cannot be written back as JSON.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name is not None:
            field_info = cls.model_fields[info.field_name]
            if not field_info.is_required():
                return field_info.get_default(call_default_factory=True)
        return value


class CarInput(RequestModel):
    """Business car made available for private use."""

    catalog_value: float = Field(default=0.0, ge=0)
    is_electric: bool = False
    is_hydrogen: bool = False
    has_solar_panels: bool = False
    private_kilometers: float = Field(default=0.0, ge=0)


class CalculationRequest(RequestModel):
    """Yearly figures submitted for a comprehensive tax calculation."""

    year: int | None = Field(default=None, ge=1900, le=2100)
    gross_profit: float = 0.0
    hours_worked: float = Field(default=0.0, ge=0)
    is_starter_eligible: bool = False
    yearly_investments: float = Field(default=0.0, ge=0)
    representation_costs: float = Field(default=0.0, ge=0)
    use_representation_percentage_method: bool = True
    car: CarInput | None = None
    vat_on_sales: float = Field(default=0.0, ge=0)
    vat_on_expenses: float = Field(default=0.0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _collect_flat_car_fields(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        flat_keys = {
            "car_catalog_value": "catalog_value",
            "carCatalogValue": "catalog_value",
            "car_is_electric": "is_electric",
            "carIsElectric": "is_electric",
            "car_private_km": "private_kilometers",
            "carPrivateKm": "private_kilometers",
        }
        if not any(key in data for key in flat_keys):
            return data

        prepared = dict(data)
        car: dict[str, Any] = {}
        for key, target in flat_keys.items():
            if key in prepared:
                car[target] = prepared.pop(key)

        existing = prepared.get("car")
        if isinstance(existing, Mapping):
            raise ValueError("Provide car details either as 'car' or as flat car_* fields")
        prepared["car"] = car
        return prepared


class KorStatusRequest(RequestModel):
    """Turnover check against the kleineondernemersregeling threshold."""

    yearly_turnover: float = 0.0
    is_opted_in: bool = False
    year: int | None = Field(default=None, ge=1900, le=2100)


class StartersEligibilityRequest(RequestModel):
    """History needed to decide whether startersaftrek may still be claimed."""

    current_year: int = Field(..., ge=1900, le=2100)
    first_year_business: int = Field(..., ge=1900, le=2100)
    years_used_zelfstandigenaftrek: int = Field(default=0, ge=0)
    year: int | None = Field(default=None, ge=1900, le=2100)


class TransactionInput(RequestModel):
    """Single categorised transaction line."""

    amount: float
    category: str = "uncategorized"
    deductible_percentage: float = Field(default=0.0, ge=0, le=100)
    vat_reclaimable: bool = False
    vat_percentage: float = Field(default=0.0, ge=0, le=100)
    is_kia_eligible: bool = False
    confidence: float = Field(default=100.0, ge=0, le=100)
    description: str | None = None
    date: str | None = None
    merchant: str | None = None

    @field_validator("category", mode="after")
    @classmethod
    def _normalise_category(cls, value: str) -> str:
        return value.strip() or "uncategorized"


class TransactionSummaryRequest(RequestModel):
    """Batch of transactions to aggregate."""

    transactions: list[TransactionInput] = Field(default_factory=list)
    year: int | None = Field(default=None, ge=1900, le=2100)


class CalculationResultPayload(BaseModel):
    """Serialised :class:`~zzptax.backend.app.models.TaxCalculationResult`."""

    model_config = ConfigDict(extra="forbid")

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


class CalculationMeta(BaseModel):
    """Metadata returned alongside the calculation output."""

    model_config = ConfigDict(extra="forbid")

    year: int
    currency: str


class CalculationResponse(BaseModel):
    """Envelope produced by the calculation service."""

    model_config = ConfigDict(extra="forbid")

    success: bool = True
    calculation: CalculationResultPayload
    meta: CalculationMeta


class KorStatusResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    eligible: bool
    must_exit: bool
    warning_message: str | None = None


class StartersEligibilityResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    eligible: bool


class TransactionSummaryPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    transaction_count: int
    total_amount: float
    total_deductible: float
    total_vat_reclaimable: float
    kia_eligible_amount: float
    kia_deduction: float
    estimated_tax_savings: float
    categories: dict[str, float]
    warnings: list[str]


class TransactionSummaryResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    success: bool = True
    summary: TransactionSummaryPayload
    meta: CalculationMeta


def format_validation_error(error: ValidationError, *, subject: str = "calculation") -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid {subject} payload: {details}"
