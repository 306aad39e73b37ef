"""
Tests for the quote analysis pipeline and its supporting pieces
"""

import pytest

from gdpi.analysis.fallback import get_mock_analysis
from gdpi.analysis.job_classifier import extract_job_type
from gdpi.analysis.models import JobTiming, NotApplicable, PricingSignal, QuoteVerdict
from gdpi.analysis.pipeline import ManualQuoteEntry, QuoteAnalysisPipeline, build_input_text
from gdpi.analysis.prompts import (
    ARIZONA_BASELINE,
    SYSTEM_INSTRUCTIONS,
    build_analysis_prompt,
    build_messages,
    format_baseline_pricing,
)


@pytest.fixture
def pipeline(benchmarks):
    return QuoteAnalysisPipeline(benchmarks)


class TestEndToEnd:
    """Scenarios from quote text to merged result"""

    def test_oil_tempered_springs_only_red(self, pipeline):
        analysis = pipeline.analyze(
            "Replace oil tempered torsion springs (springs only). Total $725.",
            JobTiming.SCHEDULED,
            "double 7ft",
            ai_response="VERDICT: green\nPRICE_CONTEXT: Looks fair.",
        )

        assert isinstance(analysis.signal, PricingSignal)
        assert analysis.signal.verdict == QuoteVerdict.RED
        assert analysis.result.verdict == QuoteVerdict.RED
        assert analysis.amount == 725
        assert analysis.job_type == "Torsion springs"
        assert analysis.used_fallback is False

    def test_unknown_door_setup_yellow(self, pipeline):
        analysis = pipeline.analyze(
            "Replace oil tempered torsion springs (springs only). Total $725.",
            "scheduled",
            "",
            ai_response="VERDICT: green",
        )
        assert analysis.signal.applied is True
        assert analysis.signal.verdict == QuoteVerdict.YELLOW
        assert analysis.result.verdict == QuoteVerdict.YELLOW

    def test_no_oil_tempered_not_applied(self, pipeline):
        analysis = pipeline.analyze(
            "Replace torsion springs (springs only). Total $800.",
            "scheduled",
            "double 7ft",
            ai_response="VERDICT: green",
        )
        assert isinstance(analysis.signal, NotApplicable)
        assert analysis.result.verdict == QuoteVerdict.GREEN

    def test_fallback_when_no_ai_reply(self, pipeline):
        analysis = pipeline.analyze(
            "Replace torsion springs and cables. Total $795.", "after-hours", "double 7ft"
        )

        assert analysis.used_fallback is True
        # fallback says green for after-hours under $1000, heuristic says yellow
        assert analysis.result.verdict == QuoteVerdict.YELLOW
        assert len(analysis.result.vendor_questions) <= 3

    def test_manual_entry(self, pipeline):
        entry = ManualQuoteEntry(
            torsion_springs=True,
            cables=True,
            labor_cost="$850",
            door_setup="Double 7ft insulated",
        )
        analysis = pipeline.analyze("", "scheduled", ai_response="VERDICT: yellow", manual_entry=entry)

        assert analysis.amount == 850
        assert analysis.signal.verdict == QuoteVerdict.RED
        assert analysis.result.verdict == QuoteVerdict.RED

    def test_to_dict(self, pipeline):
        data = pipeline.analyze("Opener swap $700", "scheduled", "double 7ft", "VERDICT: green").to_dict()

        assert data["result"]["verdict"] == "green"
        assert data["signal"] == {"applied": False}
        assert data["jobType"] == "Opener replacement"


class TestBuildInputText:

    def test_joins_quote_and_manual(self):
        entry = ManualQuoteEntry(rollers=True, other="Weather seal", labor_cost="200", notes="asap")
        text = build_input_text("  Quote #12  ", entry)
        assert text == "Quote #12\nParts: Rollers, Weather seal\nLabor: 200\nNotes: asap"

    def test_empty_inputs(self):
        assert build_input_text(None) == ""
        assert build_input_text("", ManualQuoteEntry()) == ""


class TestFallbackAnalysis:
    """Tests for get_mock_analysis"""

    def test_no_amount(self):
        result = get_mock_analysis("Call for pricing", "scheduled")
        assert result.verdict == QuoteVerdict.YELLOW
        assert result.red_flags == ["Quote format unclear"]
        assert result.vendor_questions[0] == "Can you provide a detailed breakdown of all charges?"
        assert len(result.vendor_questions) == 3

    def test_after_hours_high(self):
        result = get_mock_analysis("$1,500", JobTiming.AFTER_HOURS)
        assert result.verdict == QuoteVerdict.YELLOW
        assert "Quote is $1500." in result.price_context
        assert result.next_step == "Ask the vendor questions listed above before proceeding."

    def test_after_hours_reasonable(self):
        result = get_mock_analysis("$900", "after-hours")
        assert result.verdict == QuoteVerdict.GREEN
        assert result.red_flags == ["None seen"]

    def test_scheduled_high(self):
        result = get_mock_analysis("$2,400.50", "scheduled")
        assert result.verdict == QuoteVerdict.YELLOW
        assert result.red_flags == ["Price is above typical range"]
        assert "Quote is $2400.5." in result.price_context

    @pytest.mark.parametrize("text", ["$650", "$300"])
    def test_scheduled_green(self, text):
        result = get_mock_analysis(text, "scheduled")
        assert result.verdict == QuoteVerdict.GREEN
        assert result.next_step == "Price appears fair. Proceed if vendor is licensed."


class TestJobClassifier:

    @pytest.mark.parametrize("text,expected", [
        ("Broken spring replacement", "Torsion springs"),
        ("New nylon rollers", "Rollers"),
        ("Belt drive opener", "Opener replacement"),
        ("Replace bottom panel", "Panel swap"),
        ("New insulated door", "Door replacement"),
        ("Lubrication visit", "General service"),
        ("", "General service"),
    ])
    def test_extract_job_type(self, text, expected):
        assert extract_job_type(text) == expected


class TestPrompts:

    def test_baseline_formatting(self):
        text = format_baseline_pricing(ARIZONA_BASELINE)
        assert "Service Call: $75-$150" in text
        assert "Torsion Springs (pair, 2-car insulated): $320-$520" in text
        assert "After-Hours: 1.4x-2x scheduled rate" in text

    def test_scheduled_prompt(self):
        prompt = build_analysis_prompt("Springs $450", "scheduled", "double 7ft")
        assert "QUOTE:\nSprings $450" in prompt
        assert "TIMING: scheduled" in prompt
        assert "- Apply scheduled rates" in prompt
        assert "above $600" in prompt
        for key in ("VERDICT:", "PRICE_CONTEXT:", "RED_FLAGS:", "VENDOR_QUESTIONS:", "NEXT_STEP:"):
            assert key in prompt

    def test_after_hours_prompt(self):
        prompt = build_analysis_prompt("Springs $450", JobTiming.AFTER_HOURS, None)
        assert "TIMING: after-hours" in prompt
        assert "DOOR SETUP: not specified" in prompt
        assert "- Apply 1.4-2x multiplier" in prompt

    def test_messages(self):
        messages = build_messages("Springs $450", "scheduled", "double 7ft")
        assert messages[0] == {"role": "system", "content": SYSTEM_INSTRUCTIONS["general"]}
        assert messages[1]["role"] == "user"


class TestPipelineMatchesApplyHeuristics:

    @pytest.mark.parametrize("text,timing", [
        ("Replace torsion springs and cables. Total $795.", "scheduled"),
        ("Replace torsion springs and cables. Total $795.", "after-hours"),
        ("Oil tempered springs only. Total $" + "9" * 400, "scheduled"),
    ])
    def test_same_result_as_apply_heuristics(self, pipeline, benchmarks, text, timing):
        from gdpi.analysis.merger import apply_heuristics
        from gdpi.analysis.response_parser import parse_ai_response

        reply = "VERDICT: green"
        analysis = pipeline.analyze(text, timing, "double 7ft", ai_response=reply)
        direct = apply_heuristics(parse_ai_response(reply, timing), text, timing, "double 7ft", benchmarks)
        assert analysis.result == direct
