"""Display formatting for dashboard values."""

from src.config import settings


def format_currency(value) -> str:
    """$1,234.56 / -$1,234.56"""
    amount = round(float(value), 2)
    sign = "-" if amount < 0 else ""
    return f"{sign}{settings.currency_symbol}{abs(amount):,.2f}"


def format_percent(value) -> str:
    """Percent points to a two-decimal label: 5.5 -> '5.50%'."""
    return f"{float(value):.2f}%"


def format_years(value, places: int = 2) -> str:
    return f"{float(value):.{places}f} years"


def down_payment_prefix(down_payment_type: str) -> str:
    return "%" if down_payment_type == "percent" else settings.currency_symbol
