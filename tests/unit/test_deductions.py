import logging
from decimal import Decimal as D

import pytest

from payroll_app.core.payroll.contributions import TaxMode
from payroll_app.core.payroll.deductions import (
    DeductionOptions,
    calculate_deductions_for_week,
)
from payroll_app.core.provinces._progressive import apply_progressive_tax
from payroll_app.core.tax_years import get_payroll_constants
from payroll_app.core.validate.earnings import InvalidEarningsError

_AMOUNT_FIELDS = (
    "cpp",
    "cpp2",
    "ei",
    "federal_tax",
    "alberta_tax",
    "union_dues",
    "total_deductions",
    "net_taxable_only",
    "net_pay_total",
)


def _reference_early_year(taxable: D, non_taxable: D) -> dict[str, D]:
    """Independent walk through the early-year formulas with 2025 figures."""
    weeks = 52
    annual = taxable * weeks
    cpp = min(max(D("0"), taxable - D("3500") / weeks) * D("0.0595"), D("4034.10") / weeks)
    cpp2 = D("0")
    if annual > D("71300"):
        excess = max(D("0"), min(annual - D("71300"), D("81200") - D("71300")))
        cpp2 = min(excess * D("0.04"), D("396.0")) / weeks
    ei = min(min(taxable, D("65700") / weeks) * D("0.0164"), D("1077.48") / weeks)

    constants = get_payroll_constants(2025)
    credit_base = cpp * weeks + ei * weeks
    fed_gross = apply_progressive_tax(annual, constants.federal.brackets)
    fed = max(D("0"), fed_gross - (D("16129") * D("0.145") + credit_base * D("0.145"))) / weeks
    ab_gross = apply_progressive_tax(annual, constants.provincial.brackets)
    ab = max(D("0"), ab_gross - (D("22323") * D("0.08") + credit_base * D("0.08"))) / weeks

    dues = taxable * D("0.0375")
    total = cpp + cpp2 + ei + fed + ab + dues
    return {
        "cpp": cpp,
        "cpp2": cpp2,
        "ei": ei,
        "federal_tax": fed,
        "alberta_tax": ab,
        "union_dues": dues,
        "total_deductions": total,
        "net_taxable_only": taxable - total,
        "net_pay_total": taxable - total + non_taxable,
    }


def test_zero_input_is_all_zero():
    breakdown = calculate_deductions_for_week(0, 0)
    for name in _AMOUNT_FIELDS:
        assert getattr(breakdown, name) == 0, name


def test_reference_week_matches_formulas_to_the_cent():
    breakdown = calculate_deductions_for_week(1500, 100, "early-year")
    reference = _reference_early_year(D("1500"), D("100"))
    for name in _AMOUNT_FIELDS:
        assert round(getattr(breakdown, name), 2) == round(reference[name], 2), name


def test_reference_week_known_values():
    shown = calculate_deductions_for_week(1500, 100, "early-year").rounded()
    assert shown.union_dues == D("56.25")
    assert shown.cpp == D("77.58")
    assert shown.cpp2 == D("5.15")
    assert shown.ei == D("20.72")
    assert shown.federal_tax == D("187.59")
    assert shown.alberta_tax == D("84.72")
    assert shown.total_deductions == D("432.01")
    assert shown.net_taxable_only == D("1067.99")
    assert shown.net_pay_total == D("1167.99")


def test_low_week_pays_no_income_tax():
    breakdown = calculate_deductions_for_week(100)
    assert breakdown.federal_tax == 0
    assert breakdown.alberta_tax == 0
    assert breakdown.union_dues == D("3.75")


def test_net_pay_identity():
    b = calculate_deductions_for_week("1234.56", "78.90", "annualized")
    assert b.net_pay_total == D("1234.56") - (
        b.cpp + b.cpp2 + b.ei + b.federal_tax + b.alberta_tax + b.union_dues
    ) + D("78.90")


@pytest.mark.parametrize("mode", [None, "weekly", "EARLY", ""])
def test_unrecognized_mode_behaves_like_early_year(mode):
    expected = calculate_deductions_for_week(1500, 100, "early-year")
    assert calculate_deductions_for_week(1500, 100, mode) == expected


def test_omitted_mode_defaults_to_early_year():
    assert calculate_deductions_for_week(900) == calculate_deductions_for_week(
        900, 0, TaxMode.EARLY_YEAR
    )


def test_unrecognized_mode_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="payroll_app"):
        calculate_deductions_for_week(900, 0, "biweekly")
    assert "Unrecognized tax mode" in caplog.text


def test_options_mapping_with_dues_override():
    breakdown = calculate_deductions_for_week(
        1500, 0, {"taxMode": "annualized", "unionDuesRate": 0.05}
    )
    assert breakdown.tax_mode is TaxMode.ANNUALIZED
    assert breakdown.union_dues == D("75.00")


def test_options_snake_case_mapping():
    breakdown = calculate_deductions_for_week(
        1000, 0, {"tax_mode": "annualized", "union_dues_rate": "0"}
    )
    assert breakdown.tax_mode is TaxMode.ANNUALIZED
    assert breakdown.union_dues == 0


def test_bare_mode_is_sugar_for_options():
    assert calculate_deductions_for_week(1400, 0, "annualized") == calculate_deductions_for_week(
        1400, 0, DeductionOptions(tax_mode=TaxMode.ANNUALIZED)
    )


def test_unsupported_options_type():
    with pytest.raises(TypeError):
        calculate_deductions_for_week(1000, 0, 42)  # type: ignore[arg-type]


def test_tier2_not_credited_against_income_tax():
    breakdown = calculate_deductions_for_week(1500, 0, "early-year")
    constants = get_payroll_constants(2025)
    credit_base = (breakdown.cpp + breakdown.ei) * 52
    gross = apply_progressive_tax(D("78000"), constants.federal.brackets)
    expected = (gross - (D("16129") + credit_base) * D("0.145")) / 52
    assert abs(breakdown.federal_tax - expected) < D("1e-20")


def test_modes_diverge_only_slightly_near_ympe():
    early = calculate_deductions_for_week(1400, 0, "early-year")
    annual = calculate_deductions_for_week(1400, 0, "annualized")
    assert abs(early.cpp - annual.cpp) < D("0.01")
    assert abs(early.total_deductions - annual.total_deductions) < D("0.01")


def test_missing_non_taxable_counts_as_zero():
    breakdown = calculate_deductions_for_week(800, None)
    assert breakdown.net_pay_total == breakdown.net_taxable_only


def test_other_tax_year_constants():
    b2024 = calculate_deductions_for_week(2000, 0, constants=get_payroll_constants(2024))
    assert b2024.tax_year == 2024
    assert b2024.cpp == D("3867.50") / 52
    assert b2024.cpp2 == D("188.00") / 52


@pytest.mark.parametrize(
    "taxable,non_taxable",
    [
        ("abc", 0),
        (float("nan"), 0),
        ("Infinity", 0),
        (-1, 0),
        (True, 0),
        (None, 0),
        ([1500], 0),
        (1500, -5),
        (1500, "lots"),
    ],
)
def test_invalid_amounts_rejected(taxable, non_taxable):
    with pytest.raises(InvalidEarningsError):
        calculate_deductions_for_week(taxable, non_taxable)


def test_negative_dues_rate_rejected():
    with pytest.raises(InvalidEarningsError) as info:
        calculate_deductions_for_week(1000, 0, DeductionOptions(union_dues_rate=D("-0.01")))
    assert info.value.field == "union_dues_rate"


def test_as_dict_uses_interface_keys():
    payload = calculate_deductions_for_week(1500, 100).as_dict()
    assert set(payload) == {
        "cpp",
        "cpp2",
        "ei",
        "federalTax",
        "albertaTax",
        "unionDues",
        "totalDeductions",
        "netTaxableOnly",
        "netPayTotal",
        "taxMode",
        "taxYear",
    }
    assert payload["taxMode"] == "early-year"
    assert payload["taxYear"] == 2025


def test_rounding_is_display_only():
    breakdown = calculate_deductions_for_week(1500, 100)
    assert breakdown.cpp != breakdown.rounded().cpp
    assert breakdown.rounded().tax_mode is breakdown.tax_mode


def test_options_record_parses_mode_strings():
    options = DeductionOptions(tax_mode="annualized", union_dues_rate="0.05")
    assert options.tax_mode is TaxMode.ANNUALIZED
    assert options.union_dues_rate == D("0.05")

    breakdown = calculate_deductions_for_week(1400, 0, options)
    assert breakdown.tax_mode is TaxMode.ANNUALIZED
    assert breakdown == calculate_deductions_for_week(
        1400, 0, {"taxMode": "annualized", "unionDuesRate": "0.05"}
    )
    assert breakdown.as_dict()["taxMode"] == "annualized"


def test_options_record_unknown_mode_falls_back():
    assert DeductionOptions(tax_mode="fortnightly").tax_mode is TaxMode.EARLY_YEAR
    assert DeductionOptions(tax_mode=None).tax_mode is TaxMode.EARLY_YEAR


def test_options_record_rejects_bad_dues_rate():
    with pytest.raises(InvalidEarningsError):
        DeductionOptions(union_dues_rate="three percent")
