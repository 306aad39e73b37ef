"""
Quote analysis pipeline
Assembles the input blob, runs the AI reply (or fallback) through the parser
and reconciles it with the torsion heuristic.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import structlog

from ..utils.helpers import truncate_text
from .fallback import get_mock_analysis
from .job_classifier import extract_job_type
from .merger import evaluate_input, merge_results
from .models import AnalysisResult, JobTiming, TorsionPricingSignal
from .response_parser import parse_ai_response
from .torsion_heuristics import Benchmarks

logger = structlog.get_logger("gdpi.analysis.pipeline")

PART_LABELS = (
    ('torsion_springs', "Torsion springs"),
    ('rollers', "Rollers"),
    ('hinges', "Hinges"),
    ('cables', "Cables"),
    ('opener', "Opener"),
    ('panels', "Panels"),
    ('full_door', "Full door"),
)


@dataclass
class ManualQuoteEntry:
    """Parts and labor typed in by a resident without a written quote"""
    torsion_springs: bool = False
    rollers: bool = False
    hinges: bool = False
    cables: bool = False
    opener: bool = False
    panels: bool = False
    full_door: bool = False
    other: str = ""
    labor_cost: str = ""
    timing: JobTiming = JobTiming.SCHEDULED
    door_setup: str = ""
    notes: str = ""

    def selected_parts(self) -> List[str]:
        parts = [label for attr, label in PART_LABELS if getattr(self, attr)]
        if self.other.strip():
            parts.append(self.other.strip())
        return parts

    def to_text(self) -> str:
        lines = []
        parts = self.selected_parts()
        if parts:
            lines.append(f"Parts: {', '.join(parts)}")
        if self.labor_cost.strip():
            lines.append(f"Labor: {self.labor_cost.strip()}")
        if self.door_setup.strip():
            lines.append(f"Door setup: {self.door_setup.strip()}")
        if self.notes.strip():
            lines.append(f"Notes: {self.notes.strip()}")
        return "\n".join(lines)


@dataclass
class QuoteAnalysis:
    """Pipeline output"""
    result: AnalysisResult
    signal: TorsionPricingSignal
    amount: float
    job_type: str
    input_text: str
    used_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.to_dict(),
            "signal": self.signal.to_dict(),
            "amount": self.amount,
            "jobType": self.job_type,
            "usedFallback": self.used_fallback,
        }


def build_input_text(quote_text: Optional[str], manual_entry: Optional[ManualQuoteEntry] = None) -> str:
    """Concatenate quote text and manual form fields into one blob"""
    chunks = []
    if quote_text and quote_text.strip():
        chunks.append(quote_text.strip())
    if manual_entry is not None:
        manual_text = manual_entry.to_text()
        if manual_text:
            chunks.append(manual_text)
    return "\n".join(chunks)


class QuoteAnalysisPipeline:
    """Runs the pure analysis steps for one quote"""

    def __init__(self, benchmarks: Optional[Benchmarks] = None):
        self.benchmarks = benchmarks or Benchmarks.from_settings()

    def analyze(
        self,
        quote_text: Optional[str],
        timing: Any = None,
        door_setup: Optional[str] = None,
        ai_response: Optional[str] = None,
        manual_entry: Optional[ManualQuoteEntry] = None
    ) -> QuoteAnalysis:
        """
        Analyze a quote.

        Args:
            quote_text: Pasted or OCR'd quote text
            timing: scheduled / after-hours; None takes the manual entry's timing
            door_setup: Free-text door description, e.g. "Double, insulated, 7ft"
            ai_response: Raw reply from the AI provider; None means the call
                failed or was skipped and the fallback analysis is used
            manual_entry: Optional manual parts/labor entry

        Returns:
            QuoteAnalysis with the merged result and the heuristic signal
        """
        if manual_entry is not None:
            if timing is None:
                timing = manual_entry.timing
            if not door_setup:
                door_setup = manual_entry.door_setup
        timing = JobTiming.parse(timing)

        input_text = build_input_text(quote_text, manual_entry)
        logger.info(
            "Analyzing quote",
            timing=timing.value,
            input_length=len(input_text),
            preview=truncate_text(input_text, 60),
        )

        used_fallback = ai_response is None
        if used_fallback:
            base = get_mock_analysis(input_text, timing)
        else:
            base = parse_ai_response(ai_response, timing)

        amount, signal = evaluate_input(input_text, timing, door_setup, self.benchmarks)
        result = merge_results(base, signal)

        return QuoteAnalysis(
            result=result,
            signal=signal,
            amount=amount,
            job_type=extract_job_type(input_text),
            input_text=input_text,
            used_fallback=used_fallback,
        )
