from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping

from payroll_app.core.payroll.constants import PayrollConstants
from payroll_app.core.payroll.contributions import TaxMode, compute_contributions
from payroll_app.core.payroll.income_tax import compute_income_tax
from payroll_app.core.tax_years import get_payroll_constants
from payroll_app.core.validate.earnings import (
    InvalidEarningsError,
    to_decimal,
    validate_weekly_amount,
)

D = Decimal

_CENT = D("0.01")

logger = logging.getLogger("payroll_app")


@dataclass(frozen=True)
class DeductionOptions:
    tax_mode: TaxMode | str | None = TaxMode.EARLY_YEAR
    union_dues_rate: D | float | str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tax_mode", _parse_mode(self.tax_mode))
        if self.union_dues_rate is not None:
            object.__setattr__(self, "union_dues_rate", _validate_dues_rate(self.union_dues_rate))

    @classmethod
    def coerce(cls, options: Any) -> "DeductionOptions":
        """Accept a mode, a mode string, a mapping or ``DeductionOptions``.

        A bare mode is shorthand for ``DeductionOptions(tax_mode=mode)``.
        Mappings may use either ``taxMode``/``unionDuesRate`` or the
        snake_case keys.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, (TaxMode, str)):
            return cls(tax_mode=options)
        if isinstance(options, Mapping):
            return cls(
                tax_mode=options.get("tax_mode", options.get("taxMode")),
                union_dues_rate=options.get("union_dues_rate", options.get("unionDuesRate")),
            )
        raise TypeError(f"Unsupported deduction options: {options!r}")


def _parse_mode(value: Any) -> TaxMode:
    mode = TaxMode.parse(value)
    if value is not None and not isinstance(value, TaxMode) and mode.value != str(value).strip().lower():
        logger.debug("Unrecognized tax mode %r; using %s", value, mode.value)
    return mode


def _validate_dues_rate(value: Any) -> D:
    rate = to_decimal(value, "union_dues_rate")
    if rate < 0:
        raise InvalidEarningsError("union_dues_rate", value, "must not be negative")
    return rate


@dataclass(frozen=True)
class DeductionBreakdown:
    cpp: D
    cpp2: D
    ei: D
    federal_tax: D
    alberta_tax: D
    union_dues: D
    total_deductions: D
    net_taxable_only: D
    net_pay_total: D
    tax_mode: TaxMode = TaxMode.EARLY_YEAR
    tax_year: int | None = None

    _AMOUNT_KEYS = {
        "cpp": "cpp",
        "cpp2": "cpp2",
        "ei": "ei",
        "federal_tax": "federalTax",
        "alberta_tax": "albertaTax",
        "union_dues": "unionDues",
        "total_deductions": "totalDeductions",
        "net_taxable_only": "netTaxableOnly",
        "net_pay_total": "netPayTotal",
    }

    def as_dict(self) -> dict[str, Any]:
        """Amounts keyed the way the pay calculator UI reads them."""
        payload: dict[str, Any] = {
            camel: getattr(self, name) for name, camel in self._AMOUNT_KEYS.items()
        }
        payload["taxMode"] = self.tax_mode.value
        payload["taxYear"] = self.tax_year
        return payload

    def rounded(self) -> "DeductionBreakdown":
        """Copy with every amount rounded half-up to cents, for display."""
        return replace(
            self,
            **{
                f.name: getattr(self, f.name).quantize(_CENT, rounding=ROUND_HALF_UP)
                for f in fields(self)
                if f.name in self._AMOUNT_KEYS
            },
        )


def calculate_deductions_for_week(
    taxable_weekly: float | int | str | D,
    non_taxable_weekly: float | int | str | D | None = 0,
    options: DeductionOptions | TaxMode | str | Mapping[str, Any] | None = None,
    *,
    constants: PayrollConstants | None = None,
) -> DeductionBreakdown:
    """Estimate one week of deductions and net pay.

    ``taxable_weekly`` is subject to income tax, CPP, EI and union dues
    (wages, overtime, premiums, vacation and stat pay, taxable incentives).
    ``non_taxable_weekly`` (LOA, non-taxable incentives) is only added back
    into the total net pay.

    Amounts are validated here: non-numeric, non-finite or negative inputs
    raise :class:`InvalidEarningsError`. Nothing is rounded; use
    :meth:`DeductionBreakdown.rounded` for display.
    """
    taxable = validate_weekly_amount(taxable_weekly, "taxable_weekly")
    non_taxable = validate_weekly_amount(
        non_taxable_weekly, "non_taxable_weekly", required=False
    )
    opts = DeductionOptions.coerce(options)
    constants = constants or get_payroll_constants()
    dues_rate = (
        opts.union_dues_rate
        if opts.union_dues_rate is not None
        else constants.union_dues_rate
    )

    contributions = compute_contributions(taxable, opts.tax_mode, constants)
    # CPP2 is excluded from the credit base.
    taxes = compute_income_tax(taxable, contributions.cpp, contributions.ei, constants)
    union_dues = taxable * dues_rate

    total_deductions = (
        contributions.cpp
        + contributions.cpp2
        + contributions.ei
        + taxes.federal
        + taxes.provincial
        + union_dues
    )
    net_taxable_only = taxable - total_deductions
    net_pay_total = net_taxable_only + non_taxable

    return DeductionBreakdown(
        cpp=contributions.cpp,
        cpp2=contributions.cpp2,
        ei=contributions.ei,
        federal_tax=taxes.federal,
        alberta_tax=taxes.provincial,
        union_dues=union_dues,
        total_deductions=total_deductions,
        net_taxable_only=net_taxable_only,
        net_pay_total=net_pay_total,
        tax_mode=opts.tax_mode,
        tax_year=constants.tax_year,
    )


__all__ = [
    "DeductionBreakdown",
    "DeductionOptions",
    "calculate_deductions_for_week",
]
