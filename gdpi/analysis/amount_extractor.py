"""
Dollar total extraction from free-form quote text
"""

import re
from typing import Optional

import structlog

from ..utils.helpers import safe_float

logger = structlog.get_logger("gdpi.analysis.amount_extractor")

_NUMBER = r"\d{1,3}(?:,\d{3})+(?:\.\d{2})?|\d+(?:\.\d{2})?"

DOLLAR_PATTERN = re.compile(r"\$\s*(" + _NUMBER + r")")
PLAIN_NUMBER_PATTERN = re.compile(r"(" + _NUMBER + r")")


def extract_amount(text: Optional[str]) -> float:
    """
    Extract the likely total from quote text.

    Prefers $ amounts and returns the largest, since line items are usually
    smaller than the total. Falls back to the first number on the first line
    mentioning "total" that has one. Returns 0 when nothing is found.
    """
    if not text:
        return 0.0

    # figures too long to represent are dropped
    parsed = (safe_float(m, None) for m in DOLLAR_PATTERN.findall(text))
    dollar_amounts = [amount for amount in parsed if amount is not None]
    if dollar_amounts:
        amount = max(dollar_amounts)
        logger.debug("Amount from $ figures", amount=amount, candidates=len(dollar_amounts))
        return amount

    for line in text.splitlines():
        if 'total' not in line.lower():
            continue

        match = PLAIN_NUMBER_PATTERN.search(line)
        if not match:
            continue

        amount = safe_float(match.group(1), None)
        if amount is None:
            continue

        logger.debug("Amount from total line", amount=amount)
        return amount

    return 0.0


def extract_first_amount(text: Optional[str]) -> float:
    """First number in the text, $ optional"""
    if not text:
        return 0.0

    match = re.search(r"\$?(\d+(?:,\d{3})*(?:\.\d{2})?)", text)
    return safe_float(match.group(1)) if match else 0.0
