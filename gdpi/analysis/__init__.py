"""
Quote analysis module
Amount extraction, torsion spring heuristics, AI reply parsing and merging
"""

from .amount_extractor import extract_amount
from .merger import apply_heuristics, merge_results
from .models import (
    AnalysisResult,
    DoorContext,
    JobTiming,
    NotApplicable,
    PricingSignal,
    QuoteVerdict,
    TorsionPricingSignal,
)
from .response_parser import parse_ai_response
from .torsion_heuristics import Benchmarks, evaluate_torsion_spring_pricing
