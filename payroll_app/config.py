from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic import ConfigDict, field_validator

from payroll_app.core.payroll.contributions import TaxMode
from payroll_app.core.tax_years import DEFAULT_TAX_YEAR, SUPPORTED_YEARS

ENV_BOOL_TRUE = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ENV_BOOL_TRUE


def _env_decimal(name: str) -> Decimal | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return Decimal(value.strip())
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


class Settings(BaseModel):
    tax_year: int = Field(default_factory=lambda: int(os.getenv("PAYROLL_TAX_YEAR", str(DEFAULT_TAX_YEAR))))
    default_tax_mode: TaxMode = Field(
        default_factory=lambda: TaxMode.parse(os.getenv("PAYROLL_TAX_MODE"))
    )
    union_dues_rate: Decimal | None = Field(default_factory=lambda: _env_decimal("UNION_DUES_RATE"))
    log_dir: str = Field(default_factory=lambda: os.getenv("PAYROLL_LOG_DIR", "logs"))
    telemetry_log_enabled: bool = Field(default_factory=lambda: _env_bool("PAYROLL_TELEMETRY_LOG", False))
    build_version: str = Field(default_factory=lambda: os.getenv("BUILD_VERSION", "dev"))
    build_sha: str = Field(default_factory=lambda: os.getenv("BUILD_SHA", "local"))

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("default_tax_mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value: object) -> TaxMode:
        return TaxMode.parse(value)

    @field_validator("tax_year")
    @classmethod
    def _validate_year(cls, value: int) -> int:
        if value not in SUPPORTED_YEARS:
            supported = ", ".join(str(year) for year in SUPPORTED_YEARS)
            raise ValueError(f"PAYROLL_TAX_YEAR must be one of {supported}, got {value}")
        return value

    @field_validator("union_dues_rate")
    @classmethod
    def _validate_dues_rate(cls, value: Decimal | None) -> Decimal | None:
        if value is not None and (not value.is_finite() or value < 0):
            raise ValueError("UNION_DUES_RATE must be a non-negative number")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
