"""Utilities for validating year configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from typing import Sequence

from .year_config import (
    IncomeTaxConfig,
    KiaConfig,
    KorConfig,
    TaxYearManifestEntry,
    VatConfig,
    YearConfiguration,
    available_years,
    load_year_configuration,
    manifest_entries,
)

# Published schedules round their band amounts to whole euros.
_CONTINUITY_TOLERANCE = 1.0


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_income_tax(config: IncomeTaxConfig) -> list[str]:
    errors: list[str] = []

    rates = [bracket.rate for bracket in config.brackets]
    if rates != sorted(rates):
        errors.append(
            _format_scope("income_tax.brackets", "bracket rates should not decrease"),
        )

    for bracket in config.brackets:
        if bracket.rate > 1:
            errors.append(
                _format_scope(
                    "income_tax.brackets",
                    f"rate {bracket.rate} must be between 0 and 1",
                )
            )

    return errors


def _validate_vat(config: VatConfig) -> list[str]:
    errors: list[str] = []

    if config.reduced > config.standard:
        errors.append(
            _format_scope("vat.rates", "reduced rate cannot exceed the standard rate"),
        )
    if config.zero != 0:
        errors.append(_format_scope("vat.rates", "zero rate must be 0"))

    return errors


def _validate_kia(config: KiaConfig) -> list[str]:
    errors: list[str] = []

    band_ceiling = config.percentage_band_upper * config.percentage_rate
    if abs(band_ceiling - config.flat_amount) > _CONTINUITY_TOLERANCE:
        errors.append(
            _format_scope(
                "kia",
                (
                    f"flat amount {config.flat_amount} does not continue the "
                    f"percentage band (which ends at {band_ceiling:.2f})"
                ),
            )
        )

    remaining = config.flat_amount - (
        config.maximum_investment - config.flat_band_upper
    ) * config.phase_out_rate
    if abs(remaining) > _CONTINUITY_TOLERANCE:
        errors.append(
            _format_scope(
                "kia",
                (
                    "phase-out should reach zero at the maximum investment "
                    f"(leaves {remaining:.2f})"
                ),
            )
        )

    if config.asset_minimum > config.minimum_investment:
        errors.append(
            _format_scope(
                "kia",
                "asset minimum cannot exceed the minimum total investment",
            )
        )

    return errors


def _validate_kor(config: KorConfig) -> list[str]:
    if config.warning_ratio >= 1:
        return [_format_scope("kor", "warning ratio must be below 1")]
    return []


def _validate_manifest_entry(entry: TaxYearManifestEntry) -> list[str]:
    if entry.notes_url and not entry.notes_url.startswith(("http://", "https://")):
        return [_format_scope(f"manifest.{entry.year}", "notes URL must be absolute")]
    return []


def validate_year_configuration(config: YearConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []

    errors.extend(_validate_income_tax(config.income_tax))
    errors.extend(_validate_vat(config.vat))
    errors.extend(_validate_kia(config.kia))
    errors.extend(_validate_kor(config.kor))

    if config.entrepreneur.startersaftrek > 0 and config.entrepreneur.zelfstandigenaftrek <= 0:
        errors.append(
            _format_scope(
                "entrepreneur",
                "startersaftrek is only granted on top of zelfstandigenaftrek",
            )
        )

    for entry in manifest_entries():
        if entry.year == config.year:
            errors.extend(_validate_manifest_entry(entry))

    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Validate all configured years and return issues keyed by year."""

    targets = years or available_years()
    results: dict[int, list[str]] = {}

    for year in targets:
        config = load_year_configuration(year)
        results[int(year)] = validate_year_configuration(config)

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Validate configured tax years and report issues helpful to contributors."
        )
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    for year in years:
        try:
            config = load_year_configuration(year)
        except FileNotFoundError as error:
            print(f"[{year}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_year_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
