"""Parsing of free-text form input."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
MIN_DAY = 1
MAX_DAY = 31


def parse_amount(text: str | None, *, label: str = "Amount") -> Decimal:
    """Parse a non-negative money amount, rounded to cents.

    Raises:
        ValueError: empty, non-numeric, non-finite or negative input
    """

    cleaned = (text or "").strip()
    if not cleaned:
        raise ValueError(f"{label} is required")
    try:
        value = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"{label} must be a number") from exc
    if not value.is_finite():
        raise ValueError(f"{label} must be a number")
    if value < 0:
        raise ValueError(f"{label} cannot be negative")
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_day(text: str | None, *, label: str = "Day") -> int:
    """Parse a day-of-month in [1, 31]; the calendar is not consulted."""

    cleaned = (text or "").strip()
    try:
        day = int(cleaned)
    except ValueError as exc:
        raise ValueError(f"{label} must be a whole number") from exc
    if not MIN_DAY <= day <= MAX_DAY:
        raise ValueError(f"{label} must be between {MIN_DAY} and {MAX_DAY}")
    return day


def format_amount_input(amount: Decimal) -> str:
    """Render an amount for editing in a text field (no grouping, no padding)."""

    text = format(amount.normalize(), "f")
    return "0" if text in {"-0", ""} else text
