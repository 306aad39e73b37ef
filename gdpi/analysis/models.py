"""
Core analysis types
Verdicts, job context, analysis results and torsion pricing signals
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

NONE_SEEN = "None seen"

DEFAULT_PRICE_CONTEXT = "Analysis completed."
DEFAULT_NEXT_STEP = "Review the analysis and decide how to proceed."
DEFAULT_VENDOR_QUESTIONS = (
    "Could you share an itemized breakdown of parts, labor, and any fees?",
    "What warranty do you provide on parts and labor?",
)


class QuoteVerdict(str, Enum):
    """Price verdict, ordered by severity"""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def rank(self) -> int:
        return _VERDICT_RANK[self]

    @classmethod
    def most_severe(cls, first: "QuoteVerdict", second: "QuoteVerdict") -> "QuoteVerdict":
        """Keep whichever verdict is more severe; ties keep the first"""
        return second if second.rank > first.rank else first

    @classmethod
    def parse(cls, value: Any, default: "QuoteVerdict" = None) -> "QuoteVerdict":
        """Lenient conversion from loose strings"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default if default is not None else cls.YELLOW


_VERDICT_RANK = {
    QuoteVerdict.GREEN: 0,
    QuoteVerdict.YELLOW: 1,
    QuoteVerdict.RED: 2,
}


class JobTiming(str, Enum):
    SCHEDULED = "scheduled"
    AFTER_HOURS = "after-hours"

    @classmethod
    def parse(cls, value: Any) -> "JobTiming":
        """Accepts 'after-hours', 'after_hours', 'After Hours'; anything else is scheduled"""
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower().replace("_", "-").replace(" ", "-")
        if key == cls.AFTER_HOURS.value:
            return cls.AFTER_HOURS
        return cls.SCHEDULED


@dataclass(frozen=True)
class DoorContext:
    """Job context the torsion heuristic conditions on"""
    timing: JobTiming = JobTiming.SCHEDULED
    door_setup: Optional[str] = None


@dataclass
class AnalysisResult:
    """Structured analysis result"""
    verdict: QuoteVerdict
    price_context: str
    red_flags: List[str]
    vendor_questions: List[str]
    next_step: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase shape the app layer stores"""
        data = asdict(self)
        return {
            "verdict": self.verdict.value,
            "priceContext": data["price_context"],
            "redFlags": data["red_flags"],
            "vendorQuestions": data["vendor_questions"],
            "nextStep": data["next_step"],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "AnalysisResult":
        """Create from a loose dictionary; malformed fields fall back to defaults"""
        from ..llm.validators import AnalysisPayload

        payload = AnalysisPayload.from_loose(data)
        return cls(
            verdict=QuoteVerdict.parse(payload.verdict),
            price_context=payload.price_context or DEFAULT_PRICE_CONTEXT,
            red_flags=list(payload.red_flags) or [NONE_SEEN],
            vendor_questions=list(payload.vendor_questions),
            next_step=payload.next_step or DEFAULT_NEXT_STEP,
        )


@dataclass(frozen=True)
class NotApplicable:
    """The torsion heuristic has no opinion; callers ignore it"""
    reason: str = ""

    applied = False

    def to_dict(self) -> Dict[str, Any]:
        return {"applied": False}


@dataclass(frozen=True)
class PricingSignal:
    """The torsion heuristic fired"""
    verdict: QuoteVerdict
    red_flag: str
    vendor_question: str
    notes: Tuple[str, ...] = field(default_factory=tuple)

    applied = True

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "applied": True,
            "verdict": self.verdict.value,
            "redFlag": self.red_flag,
            "vendorQuestion": self.vendor_question,
        }
        if self.notes:
            data["notes"] = list(self.notes)
        return data


TorsionPricingSignal = Union[NotApplicable, PricingSignal]
