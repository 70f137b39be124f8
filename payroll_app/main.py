import argparse
import json
import os
import sys
from pathlib import Path
from typing import Literal

from rich.console import Console
from rich.table import Table

if __package__ in (None, ""):
    sys.path.append(str(Path(__file__).resolve().parent.parent))

from payroll_app.config import get_settings
from payroll_app.core.payroll.contributions import TaxMode
from payroll_app.core.payroll.deductions import (
    DeductionBreakdown,
    DeductionOptions,
    calculate_deductions_for_week,
)
from payroll_app.core.tax_years import SUPPORTED_YEARS, UnsupportedTaxYearError, get_payroll_constants
from payroll_app.core.validate.earnings import InvalidEarningsError, to_decimal

_ROWS = (
    ("CPP", "cpp"),
    ("CPP2", "cpp2"),
    ("EI", "ei"),
    ("Federal tax", "federal_tax"),
    ("Alberta tax", "alberta_tax"),
    ("Union dues", "union_dues"),
    ("Total deductions", "total_deductions"),
    ("Net (taxable only)", "net_taxable_only"),
    ("Net pay", "net_pay_total"),
)


ColorPreference = Literal["auto", "always", "never"]

_DISCLAIMER = "Unofficial estimator - actual payroll may differ."


def _resolve_color_preference(pref: ColorPreference) -> ColorPreference:
    if pref == "auto" and os.getenv("NO_COLOR"):
        return "never"
    return pref


def _get_console(pref: ColorPreference) -> Console | None:
    resolved = _resolve_color_preference(pref)
    if resolved == "never":
        return None
    return Console(force_terminal=True if resolved == "always" else None, highlight=False)


def _print_breakdown(breakdown: DeductionBreakdown, color: ColorPreference = "auto") -> None:
    shown = breakdown.rounded()
    title = f"Weekly deductions ({shown.tax_year}, {shown.tax_mode.value})"
    console = _get_console(color)
    if console is not None:
        table = Table(expand=False)
        table.add_column("Item")
        table.add_column("Amount", justify="right")
        for label, attr in _ROWS:
            if attr == "total_deductions":
                table.add_section()
            table.add_row(label, str(getattr(shown, attr)))
        console.print(title, style="bold")
        console.print(table)
        console.print(_DISCLAIMER, style="dim")
        return

    print(title)
    print("-" * 36)
    for label, attr in _ROWS:
        if attr == "total_deductions":
            print("-" * 36)
        print(f"{label:<22}{getattr(shown, attr):>14}")
    print(f"\n{_DISCLAIMER}")


def _run_estimate(args: argparse.Namespace) -> int:
    settings = get_settings()
    try:
        constants = get_payroll_constants(args.year or settings.tax_year)
        dues_rate = (
            to_decimal(args.dues_rate, "union_dues_rate")
            if args.dues_rate is not None
            else settings.union_dues_rate
        )
        options = DeductionOptions(
            tax_mode=TaxMode.parse(args.mode) if args.mode else settings.default_tax_mode,
            union_dues_rate=dues_rate,
        )
        breakdown = calculate_deductions_for_week(
            args.taxable, args.non_taxable, options, constants=constants
        )
    except (InvalidEarningsError, UnsupportedTaxYearError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    if args.json:
        print(json.dumps(breakdown.as_dict(), default=str, indent=2))
    else:
        _print_breakdown(breakdown, args.color)
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("payroll_app.api.http:app", host=args.host, port=args.port, log_level=args.log_level)
    return 0


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="payroll-estimator",
        description="Estimate one week of CPP, EI, income tax and union dues.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    estimate = commands.add_parser("estimate", help="Print the deduction breakdown for a week.")
    estimate.add_argument("taxable", help="Taxable earnings for the week.")
    estimate.add_argument(
        "--non-taxable",
        default="0",
        help="Non-taxable earnings (LOA, non-taxable incentive) for the week.",
    )
    estimate.add_argument(
        "--mode",
        choices=[mode.value for mode in TaxMode],
        help="Tax mode (default: PAYROLL_TAX_MODE or early-year).",
    )
    estimate.add_argument("--dues-rate", help="Union dues rate as a fraction, e.g. 0.0375.")
    estimate.add_argument("--year", type=int, choices=SUPPORTED_YEARS, help="Tax year of the rates.")
    estimate.add_argument("--json", action="store_true", help="Print full-precision JSON.")
    estimate.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Table colours; NO_COLOR in the environment disables auto.",
    )
    estimate.set_defaults(handler=_run_estimate)

    serve = commands.add_parser("serve", help="Run the HTTP estimator API.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--log-level", default="info")
    serve.set_defaults(handler=_run_serve)

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
