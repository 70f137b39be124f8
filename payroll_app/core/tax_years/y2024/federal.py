from __future__ import annotations

from decimal import Decimal

from payroll_app.core.provinces._progressive import Bracket

D = Decimal

BRACKETS_2024 = (
    Bracket(D("55867"), D("0.15")),
    Bracket(D("111733"), D("0.205")),
    Bracket(D("173205"), D("0.26")),
    Bracket(D("246752"), D("0.29")),
    Bracket(None, D("0.33")),
)

BPA_FULL_2024 = D("15705")
NRTC_RATE = D("0.15")  # federal non-refundable credit rate

