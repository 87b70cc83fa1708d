"""Deductible part of representation costs."""

from __future__ import annotations

from zzptax.backend.config.year_config import RepresentationConfig, default_configuration

from .utils import clamp_non_negative


def compute_representation_deduction(
    costs: float,
    use_percentage_method: bool = True,
    config: RepresentationConfig | None = None,
) -> float:
    """Return the deductible representation costs.

    The percentage method deducts a fixed share of all costs; the threshold
    method deducts whatever exceeds the fixed threshold. The caller picks the
    method.
    """

    rules = config or default_configuration().representation
    if use_percentage_method:
        return costs * rules.percentage
    return clamp_non_negative(costs - rules.threshold)


__all__ = ["compute_representation_deduction"]
