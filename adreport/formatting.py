"""Display formatting for the single supported locale (vi-VN, đồng)."""

from __future__ import annotations

CURRENCY_SYMBOL = "₫"


def format_integer(n: float) -> str:
    """1234567 -> '1.234.567' (vi-VN groups thousands with '.')."""
    value = int(round(n))
    sign = "-" if value < 0 else ""
    return sign + f"{abs(value):,}".replace(",", ".")


def format_number(n: float) -> str:
    """Compact form used on dashboard cards: 1.2M, 3.4K, else full grouping."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return format_integer(n)


def format_currency(n: float) -> str:
    return f"{format_integer(n)} {CURRENCY_SYMBOL}"


def format_percent(x: float, digits: int = 2) -> str:
    return f"{x:.{digits}f}%"


def truncate_label(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text
