from __future__ import annotations

from decimal import Decimal

from payroll_app.core.provinces._progressive import Bracket

D = Decimal

BRACKETS_2025 = (
    Bracket(D("57375"), D("0.15")),
    Bracket(D("114750"), D("0.205")),
    Bracket(D("177882"), D("0.26")),
    Bracket(D("253414"), D("0.29")),
    Bracket(None, D("0.33")),
)

# Maximum BPA, as claimed on a standard TD1 below the phase-out threshold.
BPA_FULL_2025 = D("16129")
# Effective lowest rate for 2025 credits after the mid-year rate change.
NRTC_RATE_2025 = D("0.145")

