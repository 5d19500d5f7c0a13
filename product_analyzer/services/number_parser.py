"""
Numeric normalizer for locale-ambiguous export values

Exports mix "1.234,56" (Czech/German) and "1,234.56" (English) formatting,
append currency symbols or percent signs, and report impression share as
bucket labels ("< 10%", "> 90%"). clean_number() turns any of these into a
float and never raises.
"""
import re
from typing import Optional

# Bucket labels emitted instead of a precise impression share
_BELOW_10_PCT = re.compile(r"<\s*10\s*%")
_ABOVE_90_PCT = re.compile(r">\s*90\s*%")
BELOW_10_PCT_VALUE = 5.0
ABOVE_90_PCT_VALUE = 95.0

_NON_NUMERIC = re.compile(r"[^\d.,\-]")
_LEADING_FLOAT = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)")


def _leading_float(text: str) -> float:
    """Longest numeric prefix of text, 0 if there is none."""
    match = _LEADING_FLOAT.match(text)
    if not match:
        return 0.0
    try:
        return float(match.group(0))
    except ValueError:
        return 0.0


def normalize_separators(text: str) -> str:
    """
    Resolve decimal vs thousands separators.

    With both present the last one is the decimal separator. A lone comma is
    always read as a decimal comma, so "12,345" becomes 12.345.
    """
    last_dot = text.rfind(".")
    last_comma = text.rfind(",")

    if last_dot > -1 and last_comma > -1:
        if last_comma > last_dot:
            return text.replace(".", "").replace(",", ".", 1)
        return text.replace(",", "")
    if last_comma > -1:
        return text.replace(",", ".", 1)
    return text


def clean_number(value: Optional[str]) -> float:
    """Parse an export cell into a float (0.0 for empty or unparsable cells)."""
    if not value:
        return 0.0
    if _BELOW_10_PCT.search(value):
        return BELOW_10_PCT_VALUE
    if _ABOVE_90_PCT.search(value):
        return ABOVE_90_PCT_VALUE

    cleaned = _NON_NUMERIC.sub("", value).strip()
    if not cleaned:
        return 0.0

    return _leading_float(normalize_separators(cleaned))
