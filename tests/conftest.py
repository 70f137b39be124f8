import pathlib
import sys

import pytest

p = str(pathlib.Path(__file__).resolve().parents[1])
sys.path.insert(0, p) if p not in sys.path else None

from payroll_app.config import get_settings  # noqa: E402

_SETTINGS_ENV = (
    "PAYROLL_TAX_YEAR",
    "PAYROLL_TAX_MODE",
    "UNION_DUES_RATE",
    "PAYROLL_LOG_DIR",
    "PAYROLL_TELEMETRY_LOG",
    "BUILD_VERSION",
    "BUILD_SHA",
)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
