"""
Verdict reconciliation between the AI result and the torsion heuristic
"""

from typing import Any, List, Optional, Tuple

import structlog

from ..config import get_settings
from .amount_extractor import extract_amount
from .models import (
    NONE_SEEN,
    AnalysisResult,
    DoorContext,
    JobTiming,
    QuoteVerdict,
    TorsionPricingSignal,
)
from .torsion_heuristics import Benchmarks, evaluate_torsion_spring_pricing

logger = structlog.get_logger("gdpi.analysis.merger")

BENCHMARK_TRAILER = "A torsion spring benchmark check was applied to this quote."
NOTE_PREFIX = "Note: "


def _strings(items: Any) -> List[str]:
    if not isinstance(items, (list, tuple)):
        return []
    return [item for item in items if isinstance(item, str) and item.strip()]


def merge_results(ai_result: AnalysisResult, signal: TorsionPricingSignal) -> AnalysisResult:
    """
    Combine the AI result with the heuristic signal.

    The more severe verdict wins, the heuristic's red flag and vendor
    question go first, notes are appended as "Note: ..." flags. The input
    result is returned unchanged when the heuristic has no opinion.
    """
    if not signal.applied or getattr(signal, "verdict", None) is None:
        return ai_result

    red_flags = [flag for flag in _strings(ai_result.red_flags) if flag.lower() != NONE_SEEN.lower()]

    already_flagged = any(
        'springs' in flag.lower() and 'red flag' in flag.lower() for flag in red_flags
    )
    if signal.red_flag and not already_flagged:
        red_flags.insert(0, signal.red_flag)

    existing = {flag.lower() for flag in red_flags}
    for note in signal.notes:
        note_flag = f"{NOTE_PREFIX}{note}"
        if note_flag.lower() not in existing:
            red_flags.append(note_flag)
            existing.add(note_flag.lower())

    vendor_questions = _strings(ai_result.vendor_questions)
    already_asked = any(
        'itemized' in question.lower() or 'center bearing' in question.lower()
        for question in vendor_questions
    )
    if signal.vendor_question and not already_asked:
        vendor_questions.insert(0, signal.vendor_question)

    base_verdict = QuoteVerdict.parse(ai_result.verdict)
    verdict = QuoteVerdict.most_severe(base_verdict, signal.verdict)

    price_context = ai_result.price_context if isinstance(ai_result.price_context, str) else ""
    price_context = f"{price_context} {BENCHMARK_TRAILER}".strip()

    max_questions = get_settings().max_vendor_questions

    logger.info(
        "Heuristic merged into AI result",
        ai_verdict=base_verdict.value,
        heuristic_verdict=signal.verdict.value,
        final_verdict=verdict.value,
    )

    return AnalysisResult(
        verdict=verdict,
        price_context=price_context,
        red_flags=red_flags or [NONE_SEEN],
        vendor_questions=vendor_questions[:max_questions],
        next_step=ai_result.next_step,
    )


def evaluate_input(
    input_text: Optional[str],
    timing: Any = JobTiming.SCHEDULED,
    door_setup: Optional[str] = None,
    benchmarks: Optional[Benchmarks] = None
) -> Tuple[float, TorsionPricingSignal]:
    """Extract the amount and evaluate the torsion heuristic on one input blob"""
    amount = extract_amount(input_text)
    context = DoorContext(timing=JobTiming.parse(timing), door_setup=door_setup)
    return amount, evaluate_torsion_spring_pricing(input_text, amount, context, benchmarks)


def apply_heuristics(
    base: AnalysisResult,
    input_text: Optional[str],
    timing: Any = JobTiming.SCHEDULED,
    door_setup: Optional[str] = None,
    benchmarks: Optional[Benchmarks] = None
) -> AnalysisResult:
    """Run amount extraction and the torsion heuristic, then merge into base"""
    _, signal = evaluate_input(input_text, timing, door_setup, benchmarks)
    return merge_results(base, signal)
