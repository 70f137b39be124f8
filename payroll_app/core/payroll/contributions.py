from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from payroll_app.core.payroll.constants import PayrollConstants

D = Decimal

ZERO = D("0")


class TaxMode(str, Enum):
    """How a single week's earnings are projected onto annual limits.

    ``EARLY_YEAR`` works on the weekly figure directly, which suits the first
    pay periods of a year; ``ANNUALIZED`` projects the week over 52 weeks and
    applies every cap on that annual basis.
    """

    EARLY_YEAR = "early-year"
    ANNUALIZED = "annualized"

    @classmethod
    def parse(cls, value: Any) -> "TaxMode":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for mode in cls:
                if mode.value == normalized:
                    return mode
        return cls.EARLY_YEAR


@dataclass(frozen=True)
class ContributionResult:
    cpp: D
    cpp2: D
    ei: D


def _clamp(value: D, lo: D, hi: D) -> D:
    return max(lo, min(hi, value))


def _cpp2_weekly(annual_earnings: D, constants: PayrollConstants) -> D:
    tier = constants.cpp2
    if annual_earnings <= tier.floor:
        return ZERO
    excess = _clamp(annual_earnings - tier.floor, ZERO, tier.ceiling - tier.floor)
    annual = min(excess * tier.rate, tier.max_employee)
    return annual / constants.weeks_per_year


def _early_year(taxable_weekly: D, constants: PayrollConstants) -> ContributionResult:
    weeks = constants.weeks_per_year
    cpp_tier, ei_params = constants.cpp, constants.ei

    cpp_earnings = max(ZERO, taxable_weekly - cpp_tier.floor / weeks)
    cpp = min(cpp_earnings * cpp_tier.rate, cpp_tier.max_employee / weeks)

    # Tier 2 is only meaningful against the annual YMPE, so it is projected
    # over the year even in early-year mode.
    cpp2 = _cpp2_weekly(taxable_weekly * weeks, constants)

    # Same as min(weekly, MIE/52) * rate, with the rate applied before dividing
    # so a capped week lands exactly on max/52.
    ei = min(
        taxable_weekly * ei_params.rate,
        ei_params.max_insurable * ei_params.rate / weeks,
        ei_params.max_employee / weeks,
    )

    return ContributionResult(cpp=cpp, cpp2=cpp2, ei=ei)


def _annualized(taxable_weekly: D, constants: PayrollConstants) -> ContributionResult:
    weeks = constants.weeks_per_year
    cpp_tier, ei_params = constants.cpp, constants.ei
    annual_earnings = taxable_weekly * weeks

    pensionable = _clamp(
        annual_earnings - cpp_tier.floor, ZERO, cpp_tier.ceiling - cpp_tier.floor
    )
    cpp_annual = min(pensionable * cpp_tier.rate, cpp_tier.max_employee)

    insurable = min(annual_earnings, ei_params.max_insurable)
    ei_annual = min(insurable * ei_params.rate, ei_params.max_employee)

    return ContributionResult(
        cpp=cpp_annual / weeks,
        cpp2=_cpp2_weekly(annual_earnings, constants),
        ei=ei_annual / weeks,
    )


def compute_contributions(
    taxable_weekly: D,
    mode: TaxMode,
    constants: PayrollConstants,
) -> ContributionResult:
    """Weekly CPP, CPP2 and EI on taxable earnings.

    Each result stays at or below its annual employee maximum divided by the
    number of weeks in the year.
    """
    if mode is TaxMode.ANNUALIZED:
        return _annualized(taxable_weekly, constants)
    return _early_year(taxable_weekly, constants)


__all__ = ["ContributionResult", "TaxMode", "compute_contributions"]
