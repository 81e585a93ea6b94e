# catalog_admin/utils/formatters.py
from datetime import datetime
from decimal import Decimal
from typing import Optional

def format_price(amount: Optional[Decimal]) -> str:
    """Price with thousands separators and two decimals"""
    if amount is None:
        return "-"
    return f"{amount:,.2f}"

def format_datetime(dt: Optional[datetime]) -> str:
    if dt is None:
        return "-"
    return dt.strftime("%Y-%m-%d %H:%M")

def truncate(text: Optional[str], limit: int = 40) -> str:
    """Shorten text to fit on an inline button"""
    text = text or ""
    return text if len(text) <= limit else text[:limit - 1] + "…"
