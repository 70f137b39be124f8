from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

D = Decimal


class InvalidEarningsError(ValueError):
    """Raised when an amount cannot be used as a weekly earnings figure."""

    def __init__(self, field: str, value: Any, reason: str) -> None:
        super().__init__(f"{field}: {reason} (got {value!r})")
        self.field = field
        self.value = value
        self.reason = reason


def to_decimal(value: float | int | str | D, field: str) -> D:
    if isinstance(value, bool):
        raise InvalidEarningsError(field, value, "expected a number")
    if isinstance(value, D):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = D(str(value).strip())
        except InvalidOperation as exc:
            raise InvalidEarningsError(field, value, "expected a number") from exc
    else:
        raise InvalidEarningsError(field, value, "expected a number")
    if not amount.is_finite():
        raise InvalidEarningsError(field, value, "must be a finite amount")
    return amount


def validate_weekly_amount(value: Any, field: str, *, required: bool = True) -> D:
    """Coerce ``value`` to ``Decimal`` and reject negative amounts.

    An optional amount that is ``None`` counts as zero.
    """
    if value is None:
        if required:
            raise InvalidEarningsError(field, value, "is required")
        return D("0")
    amount = to_decimal(value, field)
    if amount < 0:
        raise InvalidEarningsError(field, value, "must not be negative")
    return amount


__all__ = ["InvalidEarningsError", "to_decimal", "validate_weekly_amount"]
