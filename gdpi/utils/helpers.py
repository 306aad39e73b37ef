"""
Helper utilities and common functions
"""

import math
from typing import Any, Iterable, Optional


def normalize_text(text: Optional[str]) -> str:
    """Lowercase and collapse whitespace"""
    if not text:
        return ""

    return ' '.join(text.lower().split())


def includes_any(haystack: str, needles: Iterable[str]) -> bool:
    """True if any needle is a substring of haystack"""
    return any(needle in haystack for needle in needles)


def safe_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Convert to float, stripping thousands separators; non-finite gives default"""
    if value is None:
        return default

    try:
        if isinstance(value, str):
            value = value.replace(',', '').strip()
        result = float(value)
    except (ValueError, TypeError):
        return default

    return result if math.isfinite(result) else default


def format_usd(amount: float) -> str:
    """Format amount as whole dollars for display"""
    if not isinstance(amount, (int, float)) or not math.isfinite(amount):
        return "$?"
    # half-up, not banker's rounding
    return f"${math.floor(amount + 0.5)}"


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """Truncate text to maximum length"""
    if not text or len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
