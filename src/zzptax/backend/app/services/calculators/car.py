"""Bijtelling for private use of a business car."""

from __future__ import annotations

from zzptax.backend.config.year_config import CarBenefitConfig, default_configuration

from .utils import clamp_non_negative


def compute_car_bijtelling(
    catalog_value: float,
    is_electric: bool,
    is_hydrogen_or_solar: bool,
    private_kilometers: float,
    config: CarBenefitConfig | None = None,
) -> float:
    """Return the yearly bijtelling added to taxable profit.

    Electric cars pay the reduced rate up to the cap and the standard rate on
    the remainder, unless they run on hydrogen or carry solar panels, in which
    case the reduced rate covers the whole catalog value.
    """

    rules = config or default_configuration().car_benefit

    if private_kilometers <= rules.private_use_exemption_km:
        return 0.0

    if is_electric and is_hydrogen_or_solar:
        return catalog_value * rules.electric_rate

    if is_electric:
        reduced_portion = min(catalog_value, rules.electric_rate_cap)
        remainder = clamp_non_negative(catalog_value - rules.electric_rate_cap)
        return reduced_portion * rules.electric_rate + remainder * rules.standard_rate

    return catalog_value * rules.standard_rate


__all__ = ["compute_car_bijtelling"]
