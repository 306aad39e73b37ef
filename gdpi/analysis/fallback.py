"""
Fallback analysis used when the AI provider is unavailable
"""

from typing import Any

import structlog

from .amount_extractor import extract_first_amount
from .models import NONE_SEEN, AnalysisResult, JobTiming, QuoteVerdict

logger = structlog.get_logger("gdpi.analysis.fallback")

AFTER_HOURS_REVIEW_THRESHOLD = 1000
SCHEDULED_REVIEW_THRESHOLD = 2000
SCHEDULED_FAIR_THRESHOLD = 500


def get_mock_analysis(quote_text: Any, timing: Any = JobTiming.SCHEDULED) -> AnalysisResult:
    """Deterministic rough verdict from the first amount in the quote"""
    timing = JobTiming.parse(timing)
    amount = extract_first_amount(quote_text if isinstance(quote_text, str) else "")
    shown = f"{amount:.2f}".rstrip("0").rstrip(".")

    red_flags = []
    vendor_questions = []

    if amount == 0:
        verdict = QuoteVerdict.YELLOW
        price_context = "Unable to extract pricing from quote. Please verify with vendor."
        red_flags.append("Quote format unclear")
        vendor_questions.append("Can you provide a detailed breakdown of all charges?")
    elif timing == JobTiming.AFTER_HOURS:
        if amount > AFTER_HOURS_REVIEW_THRESHOLD:
            verdict = QuoteVerdict.YELLOW
            price_context = (
                f"Quote is ${shown}. For after-hours service, typical markup is 1.4-2.0x. "
                f"Verify this is justified."
            )
            vendor_questions.append("Why is after-hours pricing necessary?")
        else:
            verdict = QuoteVerdict.GREEN
            price_context = f"Quote is ${shown}. Reasonable for after-hours emergency service."
    elif amount > SCHEDULED_REVIEW_THRESHOLD:
        verdict = QuoteVerdict.YELLOW
        price_context = f"Quote is ${shown}. This is on the higher end. Compare with Arizona baseline pricing."
        red_flags.append("Price is above typical range")
        vendor_questions.append("Can you justify the pricing relative to Arizona market rates?")
    elif amount > SCHEDULED_FAIR_THRESHOLD:
        verdict = QuoteVerdict.GREEN
        price_context = f"Quote is ${shown}. Within reasonable range for scheduled service in Arizona."
    else:
        verdict = QuoteVerdict.GREEN
        price_context = f"Quote is ${shown}. Good price for scheduled service."

    vendor_questions.append("What warranty do you provide on parts and labor?")
    vendor_questions.append("Are all parts new or refurbished?")

    logger.info("Using fallback analysis", amount=amount, verdict=verdict.value)

    return AnalysisResult(
        verdict=verdict,
        price_context=price_context,
        red_flags=red_flags or [NONE_SEEN],
        vendor_questions=vendor_questions[:3],
        next_step=(
            "Price appears fair. Proceed if vendor is licensed."
            if verdict == QuoteVerdict.GREEN
            else "Ask the vendor questions listed above before proceeding."
        ),
    )
