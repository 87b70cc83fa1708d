"""Kleinschaligheidsinvesteringsaftrek (KIA)."""

from __future__ import annotations

from zzptax.backend.config.year_config import KiaConfig, default_configuration

from .utils import clamp_non_negative


def compute_kia(total_investment: float, config: KiaConfig | None = None) -> float:
    """Return the KIA deduction for the year's qualifying investments.

    Band boundaries belong to the lower band. From the maximum investment
    onwards the scheme does not apply at all, so the deduction drops to zero
    instead of being capped.
    """

    kia = config or default_configuration().kia

    if total_investment <= kia.minimum_investment:
        return 0.0

    if total_investment >= kia.maximum_investment:
        return 0.0

    if total_investment <= kia.percentage_band_upper:
        return total_investment * kia.percentage_rate

    if total_investment <= kia.flat_band_upper:
        return float(kia.flat_amount)

    excess = total_investment - kia.flat_band_upper
    return clamp_non_negative(kia.flat_amount - excess * kia.phase_out_rate)


__all__ = ["compute_kia"]
