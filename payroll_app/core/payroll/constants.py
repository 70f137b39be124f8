from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from payroll_app.core.provinces._progressive import BracketSchedule

D = Decimal

WEEKS_PER_YEAR = 52


@dataclass(frozen=True)
class PensionTier:
    """One CPP tier: earnings between ``floor`` and ``ceiling`` at ``rate``.

    Tier 1 uses the basic exemption as its floor and YMPE as its ceiling;
    tier 2 runs from YMPE to YAMPE.
    """

    rate: D
    floor: D
    ceiling: D
    max_employee: D


@dataclass(frozen=True)
class InsuranceParams:
    rate: D
    max_insurable: D
    max_employee: D


@dataclass(frozen=True)
class TaxAuthority:
    name: str
    brackets: BracketSchedule
    basic_personal_amount: D
    credit_rate: D


@dataclass(frozen=True)
class PayrollConstants:
    tax_year: int
    cpp: PensionTier
    cpp2: PensionTier
    ei: InsuranceParams
    federal: TaxAuthority
    provincial: TaxAuthority
    union_dues_rate: D
    weeks_per_year: int = WEEKS_PER_YEAR

    def as_dict(self) -> dict[str, object]:
        def _authority(auth: TaxAuthority) -> dict[str, object]:
            return {
                "name": auth.name,
                "brackets": [
                    {"up_to": b.up_to, "rate": b.rate} for b in auth.brackets
                ],
                "basic_personal_amount": auth.basic_personal_amount,
                "credit_rate": auth.credit_rate,
            }

        return {
            "tax_year": self.tax_year,
            "weeks_per_year": self.weeks_per_year,
            "cpp": {
                "rate": self.cpp.rate,
                "basic_exemption": self.cpp.floor,
                "ympe": self.cpp.ceiling,
                "max_employee": self.cpp.max_employee,
            },
            "cpp2": {
                "rate": self.cpp2.rate,
                "ympe": self.cpp2.floor,
                "yampe": self.cpp2.ceiling,
                "max_employee": self.cpp2.max_employee,
            },
            "ei": {
                "rate": self.ei.rate,
                "max_insurable": self.ei.max_insurable,
                "max_employee": self.ei.max_employee,
            },
            "federal": _authority(self.federal),
            "provincial": _authority(self.provincial),
            "union_dues_rate": self.union_dues_rate,
        }


__all__ = [
    "WEEKS_PER_YEAR",
    "InsuranceParams",
    "PayrollConstants",
    "PensionTier",
    "TaxAuthority",
]
