"""
Shared test fixtures
"""

import pytest

from gdpi.analysis.models import AnalysisResult, DoorContext, JobTiming, QuoteVerdict
from gdpi.analysis.torsion_heuristics import Benchmarks


@pytest.fixture
def standard_scheduled():
    """Standard 16x7 door, scheduled work"""
    return DoorContext(timing=JobTiming.SCHEDULED, door_setup="double 7ft")


@pytest.fixture
def standard_after_hours():
    return DoorContext(timing=JobTiming.AFTER_HOURS, door_setup="double 7ft")


@pytest.fixture
def benchmarks():
    return Benchmarks(springs_only_ceiling=675.0, springs_plus_parts_ceiling=700.0)


@pytest.fixture
def make_result():
    """Factory for AI-side results"""
    def _make(verdict=QuoteVerdict.GREEN, red_flags=None, vendor_questions=None,
              price_context="Price is within baseline.", next_step="Proceed."):
        return AnalysisResult(
            verdict=verdict,
            price_context=price_context,
            red_flags=["None seen"] if red_flags is None else red_flags,
            vendor_questions=[] if vendor_questions is None else vendor_questions,
            next_step=next_step,
        )
    return _make
