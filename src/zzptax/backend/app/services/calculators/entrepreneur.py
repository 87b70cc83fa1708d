"""Ondernemersaftrek: zelfstandigenaftrek, startersaftrek and the urencriterium."""

from __future__ import annotations

from zzptax.backend.config.year_config import EntrepreneurConfig, default_configuration


def _resolve(config: EntrepreneurConfig | None) -> EntrepreneurConfig:
    return config or default_configuration().entrepreneur


def meets_hours_criterion(
    hours_worked: float, config: EntrepreneurConfig | None = None
) -> bool:
    """Return ``True`` when ``hours_worked`` satisfies the urencriterium."""

    return hours_worked >= _resolve(config).hours_criterion


def is_eligible_for_startersaftrek(
    current_year: int,
    first_year_business: int,
    years_used_zelfstandigenaftrek: int,
    config: EntrepreneurConfig | None = None,
) -> bool:
    """Return whether startersaftrek may still be claimed in ``current_year``.

    The business must be within its first years and the owner must not have
    claimed zelfstandigenaftrek too often before. The claim history is
    supplied by the caller.
    """

    rules = _resolve(config)
    years_in_business = current_year - first_year_business + 1
    return (
        years_in_business <= rules.starter_max_business_years
        and years_used_zelfstandigenaftrek <= rules.starter_max_prior_claims
    )


def compute_ondernemersaftrek(
    hours_worked: float,
    is_starter_eligible: bool,
    config: EntrepreneurConfig | None = None,
) -> tuple[float, float]:
    """Return ``(zelfstandigenaftrek, startersaftrek)`` for the year."""

    rules = _resolve(config)
    if not meets_hours_criterion(hours_worked, rules):
        return 0.0, 0.0

    zelfstandigenaftrek = float(rules.zelfstandigenaftrek)
    startersaftrek = float(rules.startersaftrek) if is_starter_eligible else 0.0
    return zelfstandigenaftrek, startersaftrek


__all__ = [
    "compute_ondernemersaftrek",
    "is_eligible_for_startersaftrek",
    "meets_hours_criterion",
]
