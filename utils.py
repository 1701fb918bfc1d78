"""
Utility functions for SettleLedger: dates, money formatting, app directory
"""
from __future__ import annotations
import os
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Union


def today_str() -> str:
    """Get today's date as ISO string"""
    return date.today().isoformat()


def parse_date(s: str) -> date:
    """Parse YYYY-MM-DD date string"""
    return datetime.strptime(s.strip(), "%Y-%m-%d").date()


def to_minor_units(value: Union[str, int, Decimal], exponent: int = 2) -> int:
    """
    Convert a decimal amount in major units ("12.34") to integer minor units (1234).
    Raises ValueError if the value is not a number or carries more precision
    than the currency allows.
    """
    if isinstance(value, float):
        raise ValueError("floats are not accepted for money, pass a string or Decimal")
    try:
        d = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"not a monetary amount: {value!r}") from None
    if not d.is_finite():
        raise ValueError(f"not a monetary amount: {value!r}")
    scaled = d.scaleb(exponent)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{value!r} has more than {exponent} decimal places")
    return int(scaled)


def from_minor_units(amount: int, exponent: int = 2) -> Decimal:
    """Integer minor units back to an exact Decimal in major units"""
    return Decimal(amount).scaleb(-exponent)


def format_minor(amount: int, symbol: str = "$", exponent: int = 2) -> str:
    """Render minor units for display, e.g. -1205 -> '-$12.05'"""
    sign = "-" if amount < 0 else ""
    major = from_minor_units(abs(amount), exponent)
    return f"{sign}{symbol}{major:.{exponent}f}"


def app_dir() -> str:
    """
    Get application data directory: $SPLIT_LEDGER_HOME or ~/.split_ledger
    Creates directory if it doesn't exist.
    """
    path = os.environ.get("SPLIT_LEDGER_HOME") or os.path.join(
        os.path.expanduser("~"), ".split_ledger"
    )
    os.makedirs(path, exist_ok=True)
    return path
