"""
Torsion spring pricing heuristic
Benchmarks for a standard 16x7 door:
- Springs-only (oil-tempered): red flag if over $675
- Springs + any other torsion-system part: red flag if over $700

Exceptions soften red to yellow:
- after-hours/emergency timing
- multiple doors bundled
- oversized/special door, high-lift
- door setup not confirmed as standard
"""

import math
from dataclasses import dataclass
from typing import List, Optional

import structlog

from ..config import get_settings
from ..utils.helpers import format_usd, includes_any, normalize_text
from .models import (
    DoorContext,
    JobTiming,
    NotApplicable,
    PricingSignal,
    QuoteVerdict,
    TorsionPricingSignal,
)

logger = structlog.get_logger("gdpi.analysis.torsion_heuristics")


SPRING_KEYWORDS = (
    'spring',
    'springs',
    'torsion spring',
    'torsion springs',
    'spring set',
    'spring pair',
)

OIL_TEMPERED_KEYWORDS = (
    'oil tempered',
    'oil-tempered',
    'ot spring',
    'ot springs',
    'oil tempered springs',
)

TORSION_OTHER_PART_KEYWORDS = (
    # cables
    'cable',
    'cables',
    'lift cable',
    'lift cables',
    # bearings / plates
    'bearing',
    'bearings',
    'end bearing',
    'end bearings',
    'center bearing',
    'bearing plate',
    'bearing plates',
    'end plate',
    'end plates',
    'center plate',
    'center bracket',
    # hardware
    'drum',
    'drums',
    'torsion tube',
    'torsion shaft',
    'shaft',
    'tube',
    'spring anchor',
    'anchor bracket',
)

# "double doors" also reads as one double-wide door; kept as-is
MULTI_DOOR_KEYWORDS = (
    'two doors',
    '2 doors',
    'both doors',
    'double doors',
    'pair of doors',
)

OVERSIZE_OR_SPECIAL_KEYWORDS = (
    'high lift',
    'high-lift',
    'vertical lift',
    'rv',
    'commercial',
    'custom',
    'carriage',
    'wood',
    'oversize',
    'over-sized',
    'heavy',
    '18x',
    '20x',
    '8ft',
    '10ft',
)

SPRINGS_ONLY_QUESTION = (
    "Can you help me understand what is included beyond springs (service call, "
    "tune-up, bearings/cables, disposal/fees) and why the price is above a typical "
    "springs-only benchmark?"
)
SPRINGS_PLUS_PARTS_QUESTION = (
    "Would you mind walking me through an itemized breakdown (springs, parts like "
    "cables/bearings, labor, service call, and any fees) and confirming exactly which "
    "torsion-system parts are being replaced?"
)
CENTER_BEARING_QUESTION = (
    "Can you help me understand why the center bearing is charged separately? Many "
    "companies include the center bearing with a spring job unless it is damaged."
)

AFTER_HOURS_NOTE = "After-hours/emergency timing can legitimately increase pricing."
MULTI_DOOR_NOTE = "Quote may cover multiple doors."
OVERSIZE_NOTE = (
    "Door may be oversized/special (e.g., high-lift/custom/heavy), which can "
    "increase parts and labor."
)
NON_STANDARD_NOTE = "Door setup may not match a standard 16×7 benchmark."


@dataclass(frozen=True)
class Benchmarks:
    """Dollar ceilings for scheduled work on a standard 16x7 door"""
    springs_only_ceiling: float = 675.0
    springs_plus_parts_ceiling: float = 700.0

    @classmethod
    def from_settings(cls) -> "Benchmarks":
        settings = get_settings()
        return cls(
            springs_only_ceiling=settings.springs_only_ceiling,
            springs_plus_parts_ceiling=settings.springs_plus_parts_ceiling,
        )


def is_standard_door(door_setup: Optional[str]) -> bool:
    """Standard 16x7 is approximated as 'double' + '7ft' in the setup text"""
    setup = normalize_text(door_setup)
    return 'double' in setup and '7ft' in setup


def downgrade_notes(text: str, context: DoorContext) -> List[str]:
    """Notes for each condition that softens a red verdict"""
    notes = []
    if context.timing == JobTiming.AFTER_HOURS:
        notes.append(AFTER_HOURS_NOTE)
    if includes_any(text, MULTI_DOOR_KEYWORDS):
        notes.append(MULTI_DOOR_NOTE)
    if includes_any(text, OVERSIZE_OR_SPECIAL_KEYWORDS):
        notes.append(OVERSIZE_NOTE)
    if not is_standard_door(context.door_setup):
        notes.append(NON_STANDARD_NOTE)
    return notes


def evaluate_torsion_spring_pricing(
    quote_text: Optional[str],
    amount: float,
    context: Optional[DoorContext] = None,
    benchmarks: Optional[Benchmarks] = None
) -> TorsionPricingSignal:
    """
    Evaluate a quote against the torsion spring benchmarks.

    Returns NotApplicable when the rule has no opinion: no amount, no spring
    work, springs-only without an explicit oil-tempered mention, or a price
    within the benchmark. Otherwise returns a PricingSignal that is red, or
    yellow when any exception condition applies.
    """
    context = context or DoorContext()
    benchmarks = benchmarks or Benchmarks.from_settings()
    text = normalize_text(quote_text)

    if not isinstance(amount, (int, float)) or not math.isfinite(amount) or amount <= 0:
        return NotApplicable("no amount")

    if not includes_any(text, SPRING_KEYWORDS):
        return NotApplicable("no spring work")

    springs_plus_torsion_parts = includes_any(text, TORSION_OTHER_PART_KEYWORDS)

    if not springs_plus_torsion_parts:
        # Springs-only ceiling is calibrated to oil-tempered pricing
        if not includes_any(text, OIL_TEMPERED_KEYWORDS):
            return NotApplicable("spring type unknown")

        if amount <= benchmarks.springs_only_ceiling:
            return NotApplicable("within springs-only benchmark")

        red_flag = (
            f"Oil-tempered springs-only on a standard 16×7 door is a red flag when over "
            f"{format_usd(benchmarks.springs_only_ceiling)} (quoted {format_usd(amount)})."
        )
        vendor_question = SPRINGS_ONLY_QUESTION
    else:
        if amount <= benchmarks.springs_plus_parts_ceiling:
            return NotApplicable("within springs-plus-parts benchmark")

        red_flag = (
            f"Springs plus any other torsion-system part on a standard 16×7 door is a red "
            f"flag when over {format_usd(benchmarks.springs_plus_parts_ceiling)} "
            f"(quoted {format_usd(amount)})."
        )
        vendor_question = SPRINGS_PLUS_PARTS_QUESTION
        if 'center bearing' in text:
            vendor_question = CENTER_BEARING_QUESTION

    notes = downgrade_notes(text, context)
    verdict = QuoteVerdict.YELLOW if notes else QuoteVerdict.RED

    logger.info(
        "Torsion benchmark exceeded",
        amount=amount,
        springs_plus_parts=springs_plus_torsion_parts,
        verdict=verdict.value,
        downgrades=len(notes),
    )

    return PricingSignal(
        verdict=verdict,
        red_flag=red_flag,
        vendor_question=vendor_question,
        notes=tuple(notes),
    )
