"""
Weekly payroll deduction estimator.

Estimates CPP, CPP2, EI, federal and Alberta income tax and union dues for a
single week of earnings. Figures are estimates; CRA payroll tables (T4032 /
PDOC) apply transitional rules and credits that are not modelled here.
"""
from __future__ import annotations

from payroll_app.core.payroll.contributions import TaxMode
from payroll_app.core.payroll.deductions import (
    DeductionBreakdown,
    DeductionOptions,
    calculate_deductions_for_week,
)
from payroll_app.core.validate.earnings import InvalidEarningsError

__all__ = [
    "DeductionBreakdown",
    "DeductionOptions",
    "InvalidEarningsError",
    "TaxMode",
    "calculate_deductions_for_week",
]
