from __future__ import annotations

from types import ModuleType
from typing import Mapping

from payroll_app.core.payroll import limits_2024, limits_2025
from payroll_app.core.payroll.constants import (
    InsuranceParams,
    PayrollConstants,
    PensionTier,
    TaxAuthority,
)
from payroll_app.core.provinces import ab
from payroll_app.core.tax_years.y2024 import federal as federal_2024
from payroll_app.core.tax_years.y2025 import federal as federal_2025

DEFAULT_TAX_YEAR = 2025


class UnsupportedTaxYearError(ValueError):
    pass


def _build_constants(
    year: int,
    limits: ModuleType,
    federal: TaxAuthority,
    provincial: TaxAuthority,
) -> PayrollConstants:
    return PayrollConstants(
        tax_year=year,
        cpp=PensionTier(
            rate=limits.CPP_RATE,
            floor=limits.CPP_BASIC_EXEMPTION,
            ceiling=limits.CPP_YMPE,
            max_employee=limits.CPP_MAX_EMPLOYEE,
        ),
        cpp2=PensionTier(
            rate=limits.CPP2_RATE,
            floor=limits.CPP_YMPE,
            ceiling=limits.CPP_YAMPE,
            max_employee=limits.CPP2_MAX_EMPLOYEE,
        ),
        ei=InsuranceParams(
            rate=limits.EI_RATE_EMP,
            max_insurable=limits.EI_MIE,
            max_employee=limits.EI_MAX_EMPLOYEE,
        ),
        federal=federal,
        provincial=provincial,
        union_dues_rate=limits.UNION_DUES_RATE,
    )


_CONSTANTS_BY_YEAR: Mapping[int, PayrollConstants] = {
    2024: _build_constants(
        2024,
        limits_2024,
        TaxAuthority(
            name="Federal",
            brackets=federal_2024.BRACKETS_2024,
            basic_personal_amount=federal_2024.BPA_FULL_2024,
            credit_rate=federal_2024.NRTC_RATE,
        ),
        TaxAuthority(
            name="Alberta",
            brackets=ab.AB_BRACKETS_2024,
            basic_personal_amount=ab.AB_BPA_2024,
            credit_rate=ab.AB_NRTC_RATE_2024,
        ),
    ),
    2025: _build_constants(
        2025,
        limits_2025,
        TaxAuthority(
            name="Federal",
            brackets=federal_2025.BRACKETS_2025,
            basic_personal_amount=federal_2025.BPA_FULL_2025,
            credit_rate=federal_2025.NRTC_RATE_2025,
        ),
        TaxAuthority(
            name="Alberta",
            brackets=ab.AB_BRACKETS_2025,
            basic_personal_amount=ab.AB_BPA_2025,
            credit_rate=ab.AB_NRTC_RATE_2025,
        ),
    ),
}

SUPPORTED_YEARS: tuple[int, ...] = tuple(sorted(_CONSTANTS_BY_YEAR))


def get_payroll_constants(year: int | str = DEFAULT_TAX_YEAR) -> PayrollConstants:
    try:
        return _CONSTANTS_BY_YEAR[int(year)]
    except (KeyError, TypeError, ValueError) as exc:
        raise UnsupportedTaxYearError(f"Unsupported tax year {year}") from exc


__all__ = [
    "DEFAULT_TAX_YEAR",
    "SUPPORTED_YEARS",
    "UnsupportedTaxYearError",
    "get_payroll_constants",
]
