"""
Helper utilities
"""
from decimal import Decimal, ROUND_HALF_UP


# Display conventions per supported currency (no conversion, formatting only)
CURRENCY_CONFIG = {
    "CZK": {"locale": "cs-CZ", "symbol": "Kč", "group": "\u00a0", "decimal": ",", "symbol_first": False, "label": "CZK (Kč)"},
    "EUR": {"locale": "de-DE", "symbol": "€", "group": ".", "decimal": ",", "symbol_first": False, "label": "EUR (€)"},
    "USD": {"locale": "en-US", "symbol": "$", "group": ",", "decimal": ".", "symbol_first": True, "label": "USD ($)"},
}


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Safely divide two numbers"""
    try:
        return numerator / denominator if denominator != 0 else default
    except (TypeError, ZeroDivisionError):
        return default


def _round_half_up(value: float, digits: int) -> Decimal:
    quantum = Decimal(1).scaleb(-digits)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def format_number(value: float, digits: int = 0, group: str = ",", decimal: str = ".") -> str:
    """Format a number with explicit grouping and decimal separators."""
    rounded = _round_half_up(value, digits)
    text = f"{abs(rounded):,.{digits}f}"
    text = text.replace(",", "\x00").replace(".", decimal).replace("\x00", group)
    return f"-{text}" if rounded < 0 else text


def format_currency(amount: float, currency: str = "CZK", digits: int = 0) -> str:
    """
    Format amount as currency using the locale conventions of the currency.

    CZK -> "1 234 Kč", EUR -> "1.234 €", USD -> "$1,234"
    """
    config = CURRENCY_CONFIG.get(currency.upper())
    if config is None:
        raise ValueError(f"Unsupported currency: {currency}. Expected one of {', '.join(CURRENCY_CONFIG)}")

    number = format_number(amount, digits, config["group"], config["decimal"])
    if config["symbol_first"]:
        if number.startswith("-"):
            return f"-{config['symbol']}{number[1:]}"
        return f"{config['symbol']}{number}"
    return f"{number}\u00a0{config['symbol']}"

