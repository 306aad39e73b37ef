"""
Parser for the AI provider's line-oriented reply

Expected (not guaranteed) format:
    VERDICT: green|yellow|red
    PRICE_CONTEXT: ...
    RED_FLAGS:
    - ...
    VENDOR_QUESTIONS:
    - ...
    NEXT_STEP: ...
"""

import re
from enum import Enum
from typing import Any, List, Optional, Tuple

import structlog

from ..config import get_settings
from .models import (
    DEFAULT_NEXT_STEP,
    DEFAULT_PRICE_CONTEXT,
    DEFAULT_VENDOR_QUESTIONS,
    NONE_SEEN,
    AnalysisResult,
    JobTiming,
    QuoteVerdict,
)

logger = structlog.get_logger("gdpi.analysis.response_parser")

VERDICT_PATTERN = re.compile(r"(green|yellow|red)", re.IGNORECASE)
BULLET_PATTERN = re.compile(r"^[-•]\s*")


class Section(str, Enum):
    NONE = "none"
    VERDICT = "verdict"
    PRICE_CONTEXT = "price_context"
    RED_FLAGS = "red_flags"
    VENDOR_QUESTIONS = "vendor_questions"
    NEXT_STEP = "next_step"


# Checked in order; first key found in the line opens its section
SECTION_KEYS: Tuple[Tuple[Section, Tuple[str, ...]], ...] = (
    (Section.VERDICT, ('verdict:',)),
    (Section.PRICE_CONTEXT, ('price_context:', 'price context:')),
    (Section.RED_FLAGS, ('red_flags:', 'red flags:')),
    (Section.VENDOR_QUESTIONS, ('vendor_questions:', 'vendor questions:')),
    (Section.NEXT_STEP, ('next_step:', 'next step:')),
)


def _detect_section(lower_line: str) -> Optional[Section]:
    for section, keys in SECTION_KEYS:
        if any(key in lower_line for key in keys):
            return section
    return None


def _after_colon(line: str) -> str:
    return line.split(':', 1)[1].strip() if ':' in line else ''


def _is_no_flag(item: str) -> bool:
    return item.strip().lower().rstrip('.') in ('none', NONE_SEEN.lower())


def parse_ai_response(raw_text: Any, timing: JobTiming = JobTiming.SCHEDULED) -> AnalysisResult:
    """
    Parse the AI reply into an AnalysisResult.

    Never raises: anything unrecognized is ignored and missing fields get
    conservative defaults (yellow verdict, generic questions).
    """
    timing = JobTiming.parse(timing)
    text = raw_text if isinstance(raw_text, str) else ""
    lines = [line.strip() for line in text.splitlines() if line.strip()]

    verdict: Optional[QuoteVerdict] = None
    price_context = ""
    red_flags: List[str] = []
    vendor_questions: List[str] = []
    next_step = ""

    current = Section.NONE

    for line in lines:
        section = _detect_section(line.lower())

        if section == Section.VERDICT:
            match = VERDICT_PATTERN.search(_after_colon(line))
            if match:
                verdict = QuoteVerdict(match.group(1).lower())
        elif section == Section.PRICE_CONTEXT:
            price_context = _after_colon(line)
        elif section == Section.RED_FLAGS:
            item = _after_colon(line)
            if item and not _is_no_flag(item):
                red_flags.append(item)
        elif section == Section.VENDOR_QUESTIONS:
            item = _after_colon(line)
            if item:
                vendor_questions.append(item)
        elif section == Section.NEXT_STEP:
            next_step = _after_colon(line)
        elif line.startswith(('-', '•')):
            item = BULLET_PATTERN.sub('', line).strip()
            if not item:
                continue
            if current == Section.RED_FLAGS and not _is_no_flag(item):
                red_flags.append(item)
            elif current == Section.VENDOR_QUESTIONS:
                vendor_questions.append(item)
        elif current == Section.PRICE_CONTEXT:
            price_context = f"{price_context} {line}".strip()

        if section is not None:
            current = section

    if verdict is None:
        logger.info("No verdict in AI reply, defaulting to yellow", timing=timing.value)
        verdict = QuoteVerdict.YELLOW

    max_questions = get_settings().max_vendor_questions

    return AnalysisResult(
        verdict=verdict,
        price_context=price_context or DEFAULT_PRICE_CONTEXT,
        red_flags=red_flags or [NONE_SEEN],
        vendor_questions=(vendor_questions or list(DEFAULT_VENDOR_QUESTIONS))[:max_questions],
        next_step=next_step or DEFAULT_NEXT_STEP,
    )
