"""Domain-specific calculation helpers."""

from .car import compute_car_bijtelling
from .comprehensive import compute_comprehensive_tax
from .entrepreneur import (
    compute_ondernemersaftrek,
    is_eligible_for_startersaftrek,
    meets_hours_criterion,
)
from .income_tax import compute_income_tax, income_tax_breakdown
from .investment import compute_kia
from .representation import compute_representation_deduction
from .transactions import summarise_transactions
from .utils import (
    calculate_progressive_tax,
    clamp_non_negative,
    format_amount,
    format_percentage,
    round_currency,
    round_rate,
)
from .vat import check_kor_status, net_vat_position, vat_in_gross_amount, vat_on_net_amount

__all__ = [
    "calculate_progressive_tax",
    "check_kor_status",
    "clamp_non_negative",
    "compute_car_bijtelling",
    "compute_comprehensive_tax",
    "compute_income_tax",
    "compute_kia",
    "compute_ondernemersaftrek",
    "compute_representation_deduction",
    "format_amount",
    "format_percentage",
    "income_tax_breakdown",
    "is_eligible_for_startersaftrek",
    "meets_hours_criterion",
    "net_vat_position",
    "round_currency",
    "round_rate",
    "summarise_transactions",
    "vat_in_gross_amount",
    "vat_on_net_amount",
]
