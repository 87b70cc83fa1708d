"""Pydantic models describing the tax year configuration schema."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _require_rate(value: float, label: str) -> None:
    if value < 0 or value > 1:
        raise ConfigurationError(f"{label} must be between 0 and 1")


def _require_amount(value: float, label: str) -> None:
    if value < 0:
        raise ConfigurationError(f"{label} must be non-negative")


class TaxBracket(ImmutableModel):
    """Represents a single progressive tax bracket."""

    upper_bound: float | None = Field(default=None, alias="upper")
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBracket:
        if self.rate < 0:
            raise ConfigurationError("Tax rates must be non-negative")
        if self.upper_bound is not None and self.upper_bound <= 0:
            raise ConfigurationError("Upper bounds must be positive values")
        return self


class IncomeTaxConfig(ImmutableModel):
    """Box 1 progressive schedule applied to taxable business profit."""

    brackets: Sequence[TaxBracket]

    @model_validator(mode="after")
    def _validate_brackets(self) -> Self:
        if not self.brackets:
            raise ConfigurationError("At least one tax bracket must be defined")
        last_upper: float | None = None
        for index, bracket in enumerate(self.brackets):
            upper = bracket.upper_bound
            if upper is None and index != len(self.brackets) - 1:
                raise ConfigurationError("Only the final tax bracket may be open-ended")
            if last_upper is not None and upper is not None and upper <= last_upper:
                raise ConfigurationError("Tax brackets must be in ascending order")
            last_upper = upper if upper is not None else last_upper
        if self.brackets[-1].upper_bound is not None:
            raise ConfigurationError("Final tax bracket must have an open upper bound")
        return self

    def lower_bounds(self) -> tuple[float, ...]:
        """Return the lower bound of every bracket in schedule order."""

        bounds = [0.0]
        for bracket in self.brackets[:-1]:
            bounds.append(float(bracket.upper_bound or 0.0))
        return tuple(bounds)


class VatConfig(ImmutableModel):
    """Named BTW rates."""

    rates: Mapping[str, float]

    @field_validator("rates", mode="before")
    @classmethod
    def _coerce_rates(cls, value: Any) -> Mapping[str, float]:
        if isinstance(value, Mapping):
            return {str(key): float(rate) for key, rate in value.items()}
        raise ConfigurationError("VAT rates must be provided as a mapping")

    @model_validator(mode="after")
    def _validate_rates(self) -> VatConfig:
        for name in ("standard", "reduced", "zero"):
            if name not in self.rates:
                raise ConfigurationError(f"VAT configuration requires a '{name}' rate")
        for name, rate in self.rates.items():
            _require_rate(rate, f"VAT rate '{name}'")
        return self

    @property
    def standard(self) -> float:
        return self.rates["standard"]

    @property
    def reduced(self) -> float:
        return self.rates["reduced"]

    @property
    def zero(self) -> float:
        return self.rates["zero"]


class EntrepreneurConfig(ImmutableModel):
    """Ondernemersaftrek amounts and the eligibility gates guarding them."""

    zelfstandigenaftrek: float
    startersaftrek: float
    hours_criterion: float = 1225
    starter_max_business_years: int = 5
    starter_max_prior_claims: int = 2

    @model_validator(mode="after")
    def _validate_amounts(self) -> EntrepreneurConfig:
        _require_amount(self.zelfstandigenaftrek, "'zelfstandigenaftrek'")
        _require_amount(self.startersaftrek, "'startersaftrek'")
        _require_amount(self.hours_criterion, "'hours_criterion'")
        if self.starter_max_business_years <= 0:
            raise ConfigurationError("'starter_max_business_years' must be a positive integer")
        if self.starter_max_prior_claims < 0:
            raise ConfigurationError("'starter_max_prior_claims' must be non-negative")
        return self


class ProfitExemptionConfig(ImmutableModel):
    """MKB-winstvrijstelling percentage."""

    rate: float

    @model_validator(mode="after")
    def _validate_rate(self) -> ProfitExemptionConfig:
        _require_rate(self.rate, "MKB-winstvrijstelling rate")
        return self


class KiaConfig(ImmutableModel):
    """Kleinschaligheidsinvesteringsaftrek schedule.

    The schedule has four regions: a percentage band up to
    ``percentage_band_upper``, a flat amount up to ``flat_band_upper``, a
    phase-out until ``maximum_investment`` and nothing from the maximum
    onwards.
    """

    minimum_investment: float
    asset_minimum: float
    maximum_investment: float
    percentage_band_upper: float
    percentage_rate: float
    flat_band_upper: float
    flat_amount: float
    phase_out_rate: float

    @model_validator(mode="after")
    def _validate_schedule(self) -> Self:
        for field_name in (
            "minimum_investment",
            "asset_minimum",
            "maximum_investment",
            "percentage_band_upper",
            "flat_band_upper",
            "flat_amount",
        ):
            _require_amount(getattr(self, field_name), f"KIA '{field_name}'")
        _require_rate(self.percentage_rate, "KIA 'percentage_rate'")
        _require_rate(self.phase_out_rate, "KIA 'phase_out_rate'")
        if not (
            self.minimum_investment
            < self.percentage_band_upper
            < self.flat_band_upper
            < self.maximum_investment
        ):
            raise ConfigurationError("KIA bands must be in ascending order")
        return self


class RepresentationConfig(ImmutableModel):
    """Limits for deducting representation (food, drink, hospitality) costs."""

    threshold: float
    percentage: float

    @model_validator(mode="after")
    def _validate_values(self) -> RepresentationConfig:
        _require_amount(self.threshold, "Representation 'threshold'")
        _require_rate(self.percentage, "Representation 'percentage'")
        return self


class CarBenefitConfig(ImmutableModel):
    """Bijtelling rates for private use of a business car."""

    private_use_exemption_km: float = 500
    electric_rate: float
    electric_rate_cap: float
    standard_rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> CarBenefitConfig:
        _require_amount(self.private_use_exemption_km, "'private_use_exemption_km'")
        _require_amount(self.electric_rate_cap, "'electric_rate_cap'")
        _require_rate(self.electric_rate, "Bijtelling 'electric_rate'")
        _require_rate(self.standard_rate, "Bijtelling 'standard_rate'")
        return self


class KorConfig(ImmutableModel):
    """Kleineondernemersregeling turnover threshold."""

    threshold: float
    warning_ratio: float = 0.9

    @model_validator(mode="after")
    def _validate_values(self) -> KorConfig:
        _require_amount(self.threshold, "KOR 'threshold'")
        if self.warning_ratio < 0:
            raise ConfigurationError("KOR 'warning_ratio' must be non-negative")
        return self

    @property
    def warning_threshold(self) -> float:
        return self.threshold * self.warning_ratio


class TransactionSummaryConfig(ImmutableModel):
    """Heuristics used when summarising categorised transactions."""

    low_confidence_threshold: float = 50
    high_value_threshold: float = 1000
    estimated_savings_rate: float = 0.25
    private_category: str = "private_personal"

    @model_validator(mode="after")
    def _validate_values(self) -> TransactionSummaryConfig:
        _require_amount(self.low_confidence_threshold, "'low_confidence_threshold'")
        _require_amount(self.high_value_threshold, "'high_value_threshold'")
        _require_rate(self.estimated_savings_rate, "'estimated_savings_rate'")
        return self


class YearConfiguration(ImmutableModel):
    """Structured representation of a tax year configuration."""

    year: int
    meta: Mapping[str, Any] = Field(default_factory=dict)
    income_tax: IncomeTaxConfig
    vat: VatConfig
    entrepreneur: EntrepreneurConfig
    mkb_winstvrijstelling: ProfitExemptionConfig
    kia: KiaConfig
    representation: RepresentationConfig
    car_benefit: CarBenefitConfig
    kor: KorConfig
    transactions: TransactionSummaryConfig = Field(
        default_factory=TransactionSummaryConfig
    )

    @model_validator(mode="before")
    @classmethod
    def _prepare_sections(cls, data: Any) -> Mapping[str, Any]:
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration file must define a mapping at the top level")

        prepared = dict(data)
        meta = prepared.get("meta")
        if meta is None:
            prepared["meta"] = {}
        elif not isinstance(meta, Mapping):
            raise ConfigurationError("'meta' section must be a mapping if provided")

        if prepared.get("transactions") is None:
            prepared.pop("transactions", None)

        return prepared

    @computed_field
    @property
    def currency(self) -> str:
        return str(self.meta.get("currency", "EUR"))


class TaxYearManifestEntry(ImmutableModel):
    """Entry describing a supported tax year in the manifest."""

    year: int
    filename: str | None = None
    status: str = "active"
    notes_url: str | None = None

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class TaxYearManifest(ImmutableModel):
    """Manifest describing the available tax year configuration files."""

    years: Sequence[TaxYearManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> Self:
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        return self

    def get_entry(self, year: int) -> TaxYearManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))


__all__ = [
    "CarBenefitConfig",
    "ConfigurationError",
    "EntrepreneurConfig",
    "ImmutableModel",
    "IncomeTaxConfig",
    "KiaConfig",
    "KorConfig",
    "ProfitExemptionConfig",
    "RepresentationConfig",
    "TaxBracket",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "TransactionSummaryConfig",
    "ValidationError",
    "VatConfig",
    "YearConfiguration",
]
