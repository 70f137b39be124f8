from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

D = Decimal

ZERO = D("0")


@dataclass(frozen=True)
class Bracket:
    """Marginal rate applied to the slice of income up to ``up_to``.

    ``up_to`` is ``None`` for the final, unbounded bracket.
    """

    up_to: D | None
    rate: D


BracketSchedule = tuple[Bracket, ...]


def apply_progressive_tax(annual_income: D, brackets: Iterable[Bracket]) -> D:
    """Tax ``annual_income`` against ``brackets`` sorted by ascending limit.

    Limits are not validated; a schedule that is not strictly ascending or
    lacks a final unbounded bracket gives undefined results.
    """
    remaining = annual_income
    last_limit = ZERO
    tax = ZERO

    for bracket in brackets:
        if remaining <= 0:
            break
        if bracket.up_to is None:
            taxable_at_rate = remaining
        else:
            taxable_at_rate = min(remaining, bracket.up_to - last_limit)
        if taxable_at_rate > 0:
            tax += taxable_at_rate * bracket.rate
            remaining -= taxable_at_rate
            if bracket.up_to is not None:
                last_limit = bracket.up_to

    return tax


def basic_personal_credit(amount: D, rate: D) -> D:
    return amount * rate


__all__ = [
    "Bracket",
    "BracketSchedule",
    "apply_progressive_tax",
    "basic_personal_credit",
]
