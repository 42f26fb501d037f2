"""Display helpers shared by list screens."""

from datetime import datetime


def format_timestamp(raw: str | None) -> str:
    """Render a server timestamp as ``dd/mm/YYYY HH:MM``.

    Timestamps are opaque server values; anything that does not parse as
    ISO-8601 is shown unchanged.
    """
    if not raw:
        return ""
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        value = datetime.fromisoformat(text)
    except ValueError:
        return raw
    return value.strftime("%d/%m/%Y %H:%M")


def format_fare(amount: float) -> str:
    """Render a fare in Colombian pesos, e.g. ``$ 12.500,00``."""
    grouped = f"{amount:,.2f}"
    # 12,500.00 -> 12.500,00
    return "$ " + grouped.replace(",", "_").replace(".", ",").replace("_", ".")
