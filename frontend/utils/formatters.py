"""
Centralized formatting utilities for the portal UI.
"""
from datetime import date, datetime
from typing import Optional


def format_brl(value: Optional[float], decimals: int = 2) -> str:
    """Format as Brazilian reais, e.g. ``R$ 1.234,56``."""
    if value is None:
        return "-"
    text = f"{value:,.{decimals}f}"
    # swap separators: 1,234.56 -> 1.234,56
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {text}"


def format_rate(value: Optional[float], decimals: int = 4) -> str:
    """Format an exchange rate with a decimal comma."""
    if value is None:
        return "-"
    return f"{value:.{decimals}f}".replace(".", ",")


def parse_iso(date_str: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp from the API, or None."""
    if not date_str:
        return None
    try:
        return datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_timestamp(date_str: Optional[str]) -> str:
    """Format an API timestamp as ``dd/mm/yyyy HH:MM:SS`` (pt-BR order)."""
    dt = parse_iso(date_str)
    if dt is None:
        return ""
    return dt.strftime("%d/%m/%Y %H:%M:%S")


def format_date(date_str: Optional[str], fmt: str = "%d/%m/%Y") -> str:
    """Format an ISO date or timestamp for display."""
    if not date_str:
        return "-"
    dt = parse_iso(date_str)
    if dt is None:
        return "-"
    return dt.strftime(fmt)


def today_iso() -> str:
    return date.today().isoformat()


def order_pdf_filename(order_number: Optional[str]) -> str:
    """Download name of an order PDF."""
    return f"Pedido-{(order_number or '').strip() or 'Novo'}.pdf"


def price_status_color(status: str) -> str:
    """Hex color for a catalog price status."""
    return {
        "calculated": "#059669",
        "rate_missing": "#d97706",
    }.get(status, "#2563eb")


def comparison_color(status: Optional[str]) -> str:
    """Hex color for the live/reference comparison."""
    return {
        "above": "#059669",
        "below": "#dc2626",
    }.get(status or "", "#6b7280")


def author_name(email: Optional[str]) -> str:
    """Short author label for board messages."""
    if not email:
        return "Anônimo"
    return email.split("@")[0]
