from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from payroll_app.core.payroll.constants import PayrollConstants, TaxAuthority
from payroll_app.core.provinces._progressive import (
    apply_progressive_tax,
    basic_personal_credit,
)

D = Decimal

ZERO = D("0")


@dataclass(frozen=True)
class AuthorityTax:
    gross: D
    credits: D
    net: D


@dataclass(frozen=True)
class TaxResult:
    federal: D
    provincial: D


def authority_tax_for_year(
    annual_taxable: D,
    contributions_annual: D,
    authority: TaxAuthority,
) -> AuthorityTax:
    """Annual tax for one authority after BPA and CPP/EI credits.

    Both credits are taken at the authority's own credit rate, and the result
    is floored at zero.
    """
    gross = apply_progressive_tax(annual_taxable, authority.brackets)
    credits = basic_personal_credit(
        authority.basic_personal_amount, authority.credit_rate
    ) + contributions_annual * authority.credit_rate
    return AuthorityTax(gross=gross, credits=credits, net=max(ZERO, gross - credits))


def compute_income_tax(
    taxable_weekly: D,
    cpp_weekly: D,
    ei_weekly: D,
    constants: PayrollConstants,
) -> TaxResult:
    # Recomputed from scratch each week, assuming this week's earnings hold
    # for the whole year. Not the CRA marginal withholding method.
    weeks = constants.weeks_per_year
    annual_taxable = taxable_weekly * weeks
    contributions_annual = cpp_weekly * weeks + ei_weekly * weeks

    federal = authority_tax_for_year(annual_taxable, contributions_annual, constants.federal)
    provincial = authority_tax_for_year(
        annual_taxable, contributions_annual, constants.provincial
    )
    return TaxResult(federal=federal.net / weeks, provincial=provincial.net / weeks)


__all__ = ["AuthorityTax", "TaxResult", "authority_tax_for_year", "compute_income_tax"]
