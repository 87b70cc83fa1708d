"""BTW helpers and the kleineondernemersregeling (KOR) check."""

from __future__ import annotations

from zzptax.backend.app.models import KorStatus
from zzptax.backend.config.year_config import KorConfig, default_configuration

from .utils import format_amount


def vat_on_net_amount(amount: float, rate: float) -> float:
    """Return the VAT charged on a VAT-exclusive ``amount`` at ``rate``."""

    return amount * rate


def vat_in_gross_amount(amount: float, percentage: float) -> float:
    """Return the VAT contained in a VAT-inclusive ``amount``.

    ``percentage`` is expressed in whole percent (21, 9 or 0).
    """

    return amount * percentage / (100 + percentage)


def net_vat_position(vat_on_sales: float, vat_on_expenses: float) -> float:
    """Return VAT payable (positive) or refundable (negative)."""

    return vat_on_sales - vat_on_expenses


def check_kor_status(
    yearly_turnover: float,
    is_opted_in: bool,
    config: KorConfig | None = None,
) -> KorStatus:
    """Compare ``yearly_turnover`` against the KOR threshold.

    ``is_opted_in`` is part of the interface but does not influence the
    outcome.
    """

    kor = config or default_configuration().kor
    threshold_label = format_amount(kor.threshold)
    turnover_label = format_amount(yearly_turnover)

    if yearly_turnover > kor.threshold:
        return KorStatus(
            eligible=False,
            must_exit=True,
            warning_message=(
                f"Turnover of €{turnover_label} exceeds €{threshold_label}. "
                "You must exit KOR immediately."
            ),
        )

    if yearly_turnover > kor.warning_threshold:
        return KorStatus(
            eligible=True,
            must_exit=False,
            warning_message=(
                f"Warning: Approaching KOR limit. Current turnover: €{turnover_label}"
            ),
        )

    return KorStatus(eligible=True, must_exit=False)


__all__ = [
    "check_kor_status",
    "net_vat_position",
    "vat_in_gross_amount",
    "vat_on_net_amount",
]
