"""Unit coverage for representation costs and car bijtelling."""

from __future__ import annotations

import pytest

from zzptax.backend.app.services.calculators import (
    compute_car_bijtelling,
    compute_representation_deduction,
)


def test_representation_percentage_method_is_default() -> None:
    assert compute_representation_deduction(10_000) == pytest.approx(8_000)


def test_representation_threshold_method() -> None:
    assert compute_representation_deduction(10_000, False) == pytest.approx(4_300)
    assert compute_representation_deduction(5_000, False) == 0


def test_bijtelling_split_rate_for_electric_car() -> None:
    assert compute_car_bijtelling(40_000, True, False, 600) == pytest.approx(7_300)


def test_bijtelling_private_use_exemption_is_inclusive() -> None:
    assert compute_car_bijtelling(40_000, True, False, 500) == 0
    assert compute_car_bijtelling(40_000, False, False, 500) == 0


def test_bijtelling_cheap_electric_car_stays_in_reduced_band() -> None:
    assert compute_car_bijtelling(25_000, True, False, 10_000) == pytest.approx(4_250)


def test_bijtelling_hydrogen_or_solar_uses_reduced_rate_throughout() -> None:
    assert compute_car_bijtelling(60_000, True, True, 501) == pytest.approx(10_200)


def test_bijtelling_flag_without_electric_is_ignored() -> None:
    assert compute_car_bijtelling(60_000, False, True, 501) == pytest.approx(13_200)


def test_bijtelling_fossil_car() -> None:
    assert compute_car_bijtelling(35_000, False, False, 5_000) == pytest.approx(7_700)
