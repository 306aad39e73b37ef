"""
Prompt construction for the external AI quote reviewer
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..config import get_settings
from .models import JobTiming

PriceRange = Tuple[float, float]


@dataclass(frozen=True)
class BaselinePricing:
    """Arizona baseline ranges, parts and labor included"""
    service_call: PriceRange = (75, 150)
    torsion_springs: PriceRange = (320, 520)
    rollers: PriceRange = (180, 320)
    opener: PriceRange = (650, 900)
    panel_swap: PriceRange = (950, 1350)
    single_door: PriceRange = (1600, 2200)
    double_door: PriceRange = (2400, 3600)
    torsion_conversion: PriceRange = (420, 650)
    after_hours_multiplier: PriceRange = (1.4, 2.0)


ARIZONA_BASELINE = BaselinePricing()

BASELINE_LABELS = (
    ('service_call', "Service Call"),
    ('torsion_springs', "Torsion Springs (pair, 2-car insulated)"),
    ('rollers', "Rollers + Tune-up (single door)"),
    ('opener', "Opener Replacement (belt drive, 2-car)"),
    ('panel_swap', "Panel Swap (2 panels, double insulated)"),
    ('single_door', "Single Insulated Door"),
    ('double_door', "Double Insulated Door"),
    ('torsion_conversion', "Torsion Conversion"),
)

SYSTEM_INSTRUCTIONS = {
    "general": (
        "You are the GDPI Assistant, an expert in Arizona garage door pricing analysis. "
        "Provide concise, accurate assessments based on Arizona baseline pricing."
    ),
}

RESPONSE_FORMAT = """VERDICT: [green/yellow/red]
PRICE_CONTEXT: [1-2 sentences explaining if price is fair, within baseline, or has multiplier]
RED_FLAGS: [list each concern on new line, or "None seen"]
VENDOR_QUESTIONS: [2-3 specific questions to ask the vendor]
NEXT_STEP: [clear recommendation: negotiate/compare/proceed/walk away]"""


def _fmt(value: float) -> str:
    return f"{value:g}"


def format_baseline_pricing(baseline: BaselinePricing = ARIZONA_BASELINE) -> str:
    lines = []
    for attr, label in BASELINE_LABELS:
        low, high = getattr(baseline, attr)
        lines.append(f"{label}: ${_fmt(low)}-${_fmt(high)}")

    low, high = baseline.after_hours_multiplier
    lines.append(f"After-Hours: {_fmt(low)}x-{_fmt(high)}x scheduled rate")
    return "\n".join(lines)


def build_analysis_prompt(
    quote_text: str,
    timing: Any,
    door_setup: Optional[str],
    baseline: Optional[BaselinePricing] = None
) -> str:
    """User prompt asking for the VERDICT / PRICE_CONTEXT / ... reply format"""
    settings = get_settings()
    timing = JobTiming.parse(timing)

    if baseline is None:
        baseline = BaselinePricing(after_hours_multiplier=(
            settings.after_hours_multiplier_low,
            settings.after_hours_multiplier_high,
        ))

    low, high = baseline.after_hours_multiplier
    rate_rule = (
        f"{_fmt(low)}-{_fmt(high)}x multiplier"
        if timing == JobTiming.AFTER_HOURS
        else "scheduled rates"
    )

    return f"""Analyze this Arizona garage door service quote:

QUOTE:
{quote_text}

TIMING: {timing.value}
DOOR SETUP: {door_setup or "not specified"}

ARIZONA BASELINE PRICING:
{format_baseline_pricing(baseline)}

Provide analysis in this format:

{RESPONSE_FORMAT}

Rules:
- GREEN: Within baseline or reasonable after-hours markup
- YELLOW: Slightly high or needs clarification
- RED: Significantly overpriced or risky
- Apply {rate_rule}
- Torsion springs with wire size 0.250 or smaller: flag as RED above ${_fmt(settings.small_wire_springs_cap)}
- Flag duplicate charges, vague warranties, unnecessary upsells
- Be concise and use plain English"""


def build_messages(quote_text: str, timing: Any, door_setup: Optional[str]) -> List[Dict[str, str]]:
    """Chat messages for an OpenAI-compatible completions endpoint"""
    return [
        {"role": "system", "content": SYSTEM_INSTRUCTIONS["general"]},
        {"role": "user", "content": build_analysis_prompt(quote_text, timing, door_setup)},
    ]
