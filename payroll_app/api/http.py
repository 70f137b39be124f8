import logging
from decimal import Decimal

from fastapi import APIRouter, FastAPI, HTTPException
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from payroll_app.config import get_settings
from payroll_app.core.payroll.deductions import (
    DeductionOptions,
    calculate_deductions_for_week,
)
from payroll_app.core.payroll.contributions import TaxMode
from payroll_app.core.tax_years import (
    SUPPORTED_YEARS,
    UnsupportedTaxYearError,
    get_payroll_constants,
)
from payroll_app.core.validate.earnings import InvalidEarningsError
from payroll_app.lifespan import build_application_lifespan

logger = logging.getLogger("payroll_app")


async def _announce_defaults(_: FastAPI) -> None:
    settings = get_settings()
    logger.info(
        "Payroll estimator ready; tax_year=%s default_mode=%s dues_override=%s",
        settings.tax_year,
        settings.default_tax_mode.value,
        settings.union_dues_rate is not None,
    )


app = FastAPI(
    title="Weekly Payroll Estimator",
    description=(
        "Unofficial estimator for weekly CPP, CPP2, EI, federal and Alberta tax and union dues. "
        "Actual payroll may differ."
    ),
    lifespan=build_application_lifespan("estimator", startup_hook=_announce_defaults),
)
router = APIRouter()


class WeeklyPayRequest(BaseModel):
    taxable_weekly: Decimal = Field(
        ...,
        ge=0,
        description="Earnings subject to tax, CPP, EI and union dues",
        validation_alias=AliasChoices("taxable_weekly", "taxableWeekly"),
    )
    non_taxable_weekly: Decimal | None = Field(
        None,
        ge=0,
        description="LOA and non-taxable incentives, added back into net pay",
        validation_alias=AliasChoices("non_taxable_weekly", "nonTaxableWeekly"),
    )
    tax_mode: str | None = Field(
        None,
        description="early-year or annualized; anything else falls back to early-year",
        validation_alias=AliasChoices("tax_mode", "taxMode"),
    )
    union_dues_rate: Decimal | None = Field(
        None,
        ge=0,
        validation_alias=AliasChoices("union_dues_rate", "unionDuesRate"),
    )
    tax_year: int | None = Field(None, validation_alias=AliasChoices("tax_year", "taxYear"))

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


@app.get("/health")
def health():
    settings = getattr(app.state, "settings", get_settings())
    return {
        "status": "ok",
        "default_tax_year": settings.tax_year,
        "supported_years": list(SUPPORTED_YEARS),
        "default_tax_mode": settings.default_tax_mode.value,
        "build": {
            "version": settings.build_version,
            "sha": settings.build_sha,
        },
    }


@router.post("/payroll/weekly")
def weekly_deductions(req: WeeklyPayRequest):
    settings = getattr(app.state, "settings", get_settings())
    year = req.tax_year if req.tax_year is not None else settings.tax_year
    try:
        constants = get_payroll_constants(year)
    except UnsupportedTaxYearError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    mode = TaxMode.parse(req.tax_mode) if req.tax_mode is not None else settings.default_tax_mode
    dues_rate = req.union_dues_rate if req.union_dues_rate is not None else settings.union_dues_rate
    options = DeductionOptions(tax_mode=mode, union_dues_rate=dues_rate)

    try:
        breakdown = calculate_deductions_for_week(
            req.taxable_weekly,
            req.non_taxable_weekly,
            options,
            constants=constants,
        )
    except InvalidEarningsError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    logger.info(
        "Estimated weekly deductions",
        extra={"estimate": {"tax_year": constants.tax_year, "tax_mode": mode.value}},
    )
    return {
        "breakdown": breakdown.as_dict(),
        "display": breakdown.rounded().as_dict(),
        "disclaimer": "Unofficial estimator - actual payroll may differ.",
    }


@router.get("/payroll/constants/{year}")
def payroll_constants(year: int):
    try:
        constants = get_payroll_constants(year)
    except UnsupportedTaxYearError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return constants.as_dict()


app.include_router(router)
