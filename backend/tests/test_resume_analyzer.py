"""Tests for the analysis orchestrator and external score blending."""

import asyncio

import pytest

from models.responses import AnalysisResult
from services.exceptions import ExternalScoringUnavailable
from services.resume_analyzer import (
    analyze,
    analyze_local,
    compute_overall_score,
    score_from_model_output,
)
from services.score_utils import round_half_up


SCENARIO_RESUME = (
    "Managed a team of 5 engineers, achieved 30% increase in deployment "
    "speed using Python and React."
)
SCENARIO_JD = "Looking for a Python developer with React experience and team leadership skills."


def _all_scores(result: AnalysisResult) -> list[int]:
    return [
        result.overall_score,
        result.keyword_analysis.keyword_density,
        result.keyword_analysis.relevance_score,
        result.content_analysis.readability_score,
        result.content_analysis.professional_tone_score,
        result.structure_analysis.format_score,
        result.structure_analysis.sections_completeness,
        result.structure_analysis.length_appropriateness,
        result.industry_alignment.score,
    ]


class TestAnalyzeLocal:
    def test_returns_full_result(self, sample_resume, sample_jd):
        result = analyze_local(sample_resume, sample_jd)
        assert isinstance(result, AnalysisResult)
        assert result.scoring_method == "local_only"
        assert result.degraded is False
        assert result.model_score is None
        assert result.detailed_feedback.startswith("ATS ANALYSIS (rule-based)")

    def test_deterministic(self, sample_resume, sample_jd):
        first = analyze_local(sample_resume, sample_jd)
        second = analyze_local(sample_resume, sample_jd)
        assert first.model_dump() == second.model_dump()

    def test_overall_matches_weighted_formula(self, sample_resume, sample_jd):
        result = analyze_local(sample_resume, sample_jd)
        expected = round_half_up(
            0.3 * result.keyword_analysis.relevance_score
            + 0.2 * result.content_analysis.readability_score
            + 0.2 * result.structure_analysis.format_score
            + 0.3 * result.industry_alignment.score
        )
        assert result.overall_score == expected

    @pytest.mark.parametrize(
        "resume, jd",
        [
            ("", ""),
            ("", SCENARIO_JD),
            (SCENARIO_RESUME, ""),
            ("   \n\t", "   "),
            ("!!! ??? ...", "- - - * * *"),
            ("stuff things lots really very " * 50, "very " * 100),
            ("word " * 5000, "python " * 2000),
        ],
    )
    def test_scores_within_bounds(self, resume, jd):
        result = analyze_local(resume, jd)
        for score in _all_scores(result):
            assert 0 <= score <= 100

    def test_scenario_keywords_and_content(self):
        result = analyze_local(SCENARIO_RESUME, SCENARIO_JD)
        assert "python" in result.keyword_analysis.matching_keywords
        assert "react" in result.keyword_analysis.matching_keywords
        assert result.content_analysis.quantified_achievements >= 1
        assert result.content_analysis.action_verbs_count >= 1

    def test_empty_job_description(self, sample_resume):
        result = analyze_local(sample_resume, "")
        assert result.keyword_analysis.keyword_density == 0
        assert result.keyword_analysis.matching_keywords == []

    def test_empty_resume_scores_near_zero(self, sample_jd):
        result = analyze_local("", sample_jd)
        assert result.structure_analysis.sections_completeness == 0
        assert result.content_analysis.readability_score == 0
        # Only the length step (60 * 0.3 = 18 format points) contributes: 0.2 * 18
        assert result.structure_analysis.format_score == 18
        assert result.overall_score == 4

    def test_caps(self, sample_resume):
        jd = " ".join(f"requirement{i}" for i in range(60))
        result = analyze_local(sample_resume, jd)
        assert len(result.keyword_analysis.missing_keywords) <= 15
        assert len(result.suggestions.high_priority) <= 3
        assert len(result.suggestions.medium_priority) <= 3
        assert len(result.suggestions.low_priority) <= 2
        assert len(result.industry_alignment.relevant_skills) <= 10

    def test_result_is_json_serializable(self, sample_resume, sample_jd):
        data = analyze_local(sample_resume, sample_jd).model_dump(mode="json")
        assert set(data) >= {
            "overall_score", "keyword_analysis", "content_analysis",
            "structure_analysis", "industry_alignment", "suggestions",
            "detailed_feedback",
        }


def test_compute_overall_score_clamped(sample_resume, sample_jd):
    result = analyze_local(sample_resume, sample_jd)
    maxed = compute_overall_score(
        result.keyword_analysis.model_copy(update={"relevance_score": 500}),
        result.content_analysis.model_copy(update={"readability_score": 500}),
        result.structure_analysis.model_copy(update={"format_score": 500}),
        result.industry_alignment.model_copy(update={"score": 500}),
    )
    assert maxed == 100


class TestScoreFromModelOutput:
    def test_fraction_score_in_list(self):
        assert score_from_model_output([{"score": 0.87}]) == 87

    def test_overall_score_dict(self):
        assert score_from_model_output({"overall_score": 72, "matching_keywords": []}) == 72

    def test_generated_text(self):
        assert score_from_model_output([{"generated_text": "ATS Score: 64 / 100"}]) == 64

    def test_plain_number_and_string(self):
        assert score_from_model_output(0.5) == 50
        assert score_from_model_output(81) == 81
        assert score_from_model_output("score 90") == 90

    def test_clamped(self):
        assert score_from_model_output({"overall_score": 250}) == 100
        assert score_from_model_output({"overall_score": -4}) == 0

    def test_unusable_output(self):
        assert score_from_model_output(None) is None
        assert score_from_model_output([]) is None
        assert score_from_model_output({"label": "good"}) is None
        assert score_from_model_output([{"generated_text": "Looks fine"}]) is None
        assert score_from_model_output(True) is None


class TestAnalyzeWithExternalScorer:
    @pytest.mark.asyncio
    async def test_without_scorer_matches_local(self, sample_resume, sample_jd):
        result = await analyze(sample_resume, sample_jd)
        assert result.model_dump() == analyze_local(sample_resume, sample_jd).model_dump()

    @pytest.mark.asyncio
    async def test_model_score_raises_overall(self, sample_resume, sample_jd):
        async def scorer(resume_text, job_description):
            return [{"score": 0.99, "generated_text": "Excellent fit."}]

        local = analyze_local(sample_resume, sample_jd)
        result = await analyze(sample_resume, sample_jd, external_scorer=scorer)
        assert result.model_score == 99
        assert result.overall_score == max(99, local.overall_score)
        assert result.scoring_method == "model_blended"
        assert result.degraded is False
        assert result.detailed_feedback.startswith("ATS ANALYSIS (model-assisted)")
        assert "Excellent fit." in result.detailed_feedback

    @pytest.mark.asyncio
    async def test_lower_model_score_does_not_lower_overall(self, sample_resume, sample_jd):
        async def scorer(resume_text, job_description):
            return {"overall_score": 1}

        local = analyze_local(sample_resume, sample_jd)
        result = await analyze(sample_resume, sample_jd, external_scorer=scorer)
        assert result.model_score == 1
        assert result.overall_score == local.overall_score

    @pytest.mark.asyncio
    async def test_failing_scorer_falls_back(self, sample_resume, sample_jd):
        async def scorer(resume_text, job_description):
            raise ExternalScoringUnavailable("Rate limit exceeded")

        local = analyze_local(sample_resume, sample_jd)
        result = await analyze(sample_resume, sample_jd, external_scorer=scorer)
        assert result.degraded is True
        assert result.scoring_method == "local_only"
        assert result.overall_score == local.overall_score
        assert result.keyword_analysis == local.keyword_analysis
        assert result.detailed_feedback.startswith(
            "Note: Using rule-based analysis (Rate limit exceeded)"
        )

    @pytest.mark.asyncio
    async def test_unexpected_error_falls_back(self, sample_resume, sample_jd):
        async def scorer(resume_text, job_description):
            raise ConnectionError("connection refused")

        result = await analyze(sample_resume, sample_jd, external_scorer=scorer)
        assert result.degraded is True
        assert "connection refused" in result.detailed_feedback

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self, sample_resume, sample_jd):
        async def scorer(resume_text, job_description):
            await asyncio.sleep(5)
            return {"overall_score": 100}

        result = await analyze(sample_resume, sample_jd, external_scorer=scorer, timeout=0.05)
        assert result.degraded is True
        assert "timed out" in result.detailed_feedback

    @pytest.mark.asyncio
    async def test_unusable_model_output_falls_back(self, sample_resume, sample_jd):
        async def scorer(resume_text, job_description):
            return [{"label": "LABEL_1"}]

        result = await analyze(sample_resume, sample_jd, external_scorer=scorer)
        assert result.degraded is True
        assert result.model_score is None
        assert "model returned no usable score" in result.detailed_feedback

    @pytest.mark.asyncio
    async def test_fallback_result_is_deterministic(self, sample_resume, sample_jd):
        async def scorer(resume_text, job_description):
            raise ExternalScoringUnavailable("offline")

        first = await analyze(sample_resume, sample_jd, external_scorer=scorer)
        second = await analyze(sample_resume, sample_jd, external_scorer=scorer)
        assert first.model_dump() == second.model_dump()
