from __future__ import annotations

from decimal import Decimal

from payroll_app.core.provinces._progressive import Bracket

D = Decimal


# CRA payroll tables prorate the 2025 rates; these are the effective
# brackets used for a full-year estimate, with the new 8% low bracket.
AB_BRACKETS_2025 = (
    Bracket(D("60000"), D("0.08")),
    Bracket(D("151234"), D("0.10")),
    Bracket(D("181481"), D("0.12")),
    Bracket(D("241974"), D("0.13")),
    Bracket(D("362961"), D("0.14")),
    Bracket(None, D("0.15")),
)

AB_BPA_2025 = D("22323")
# Credits apply at the lowest Alberta rate.
AB_NRTC_RATE_2025 = D("0.08")


AB_BRACKETS_2024 = (
    Bracket(D("148269"), D("0.10")),
    Bracket(D("177922"), D("0.12")),
    Bracket(D("237230"), D("0.13")),
    Bracket(D("355845"), D("0.14")),
    Bracket(None, D("0.15")),
)

AB_BPA_2024 = D("21885")
AB_NRTC_RATE_2024 = D("0.10")

