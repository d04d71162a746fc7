"""Orchestrator: rule-based ATS scoring with optional external model blending.

Pipeline:
1. Keyword extraction and matching (JD vs resume)
2. Content heuristics (readability, tone, action verbs, metrics)
3. Structure analysis (sections, length, bullets)
4. Industry alignment
5. Weighted local score
6. External model score (optional, injected), blended as max(model, local)
7. Suggestions and detailed feedback
"""

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any

from config import settings
from models.responses import (
    AnalysisResult,
    ContentAnalysis,
    IndustryAlignment,
    KeywordAnalysis,
    StructureAnalysis,
)
from services.content_analyzer import analyze_content
from services.exceptions import ExternalScoringUnavailable
from services.feedback import (
    generate_detailed_feedback,
    generate_suggestions,
    with_fallback_notice,
)
from services.industry_alignment import analyze_industry_alignment
from services.keyword_extractor import analyze_keywords
from services.score_utils import round_half_up
from services.section_parser import analyze_structure

logger = logging.getLogger(__name__)

# async (resume_text, job_description) -> raw model output
ExternalScorer = Callable[[str, str], Awaitable[Any]]

# Weights for computing the local score
W_RELEVANCE = 0.3
W_READABILITY = 0.2
W_FORMAT = 0.2
W_INDUSTRY = 0.3

_SCORE_IN_TEXT_RE = re.compile(r"score[:\s]*(\d+)", re.IGNORECASE)


def _clamp(score: float) -> int:
    return min(100, max(0, round_half_up(score)))


def compute_overall_score(
    keyword_analysis: KeywordAnalysis,
    content_analysis: ContentAnalysis,
    structure_analysis: StructureAnalysis,
    industry_alignment: IndustryAlignment,
) -> int:
    """Weighted local score, 0-100."""
    raw = (
        W_RELEVANCE * keyword_analysis.relevance_score
        + W_READABILITY * content_analysis.readability_score
        + W_FORMAT * structure_analysis.format_score
        + W_INDUSTRY * industry_alignment.score
    )
    return _clamp(raw)


def _score_from_number(value: float) -> int:
    # Fractions in [0, 1] are confidence scores; anything larger is already 0-100
    if 0 <= value <= 1:
        return _clamp(value * 100)
    return _clamp(value)


def score_from_model_output(output: Any) -> int | None:
    """Derive a 0-100 score from a model response, or None if there is none.

    Accepts a bare number, a string containing "score: NN", a dict with
    "overall_score", "score" or "generated_text", or a list whose first
    item is any of those.
    """
    if isinstance(output, bool):
        return None
    if isinstance(output, (int, float)):
        return _score_from_number(output)
    if isinstance(output, str):
        match = _SCORE_IN_TEXT_RE.search(output)
        return _clamp(int(match.group(1))) if match else None
    if isinstance(output, list):
        return score_from_model_output(output[0]) if output else None
    if isinstance(output, dict):
        if isinstance(output.get("overall_score"), (int, float)):
            return _clamp(output["overall_score"])
        if isinstance(output.get("score"), (int, float)):
            return _score_from_number(output["score"])
        if isinstance(output.get("generated_text"), str):
            return score_from_model_output(output["generated_text"])
    return None


def model_insight(output: Any) -> str | None:
    """Free-text explanation returned by the model, if any."""
    if isinstance(output, list) and output:
        output = output[0]
    if isinstance(output, dict) and isinstance(output.get("generated_text"), str):
        return output["generated_text"] or None
    return None


def _build_result(
    resume_text: str,
    job_description: str,
    model_output: Any = None,
    model_score: int | None = None,
) -> AnalysisResult:
    keyword_analysis = analyze_keywords(resume_text, job_description)
    content_analysis = analyze_content(resume_text)
    structure_analysis = analyze_structure(resume_text)
    industry_alignment = analyze_industry_alignment(resume_text, job_description)

    local_score = compute_overall_score(
        keyword_analysis, content_analysis, structure_analysis, industry_alignment
    )

    if model_score is not None:
        overall_score = _clamp(max(model_score, local_score))
        scoring_method = "model_blended"
    else:
        overall_score = local_score
        scoring_method = "local_only"

    suggestions = generate_suggestions(
        resume_text, keyword_analysis, content_analysis, overall_score
    )
    detailed_feedback = generate_detailed_feedback(
        overall_score,
        keyword_analysis,
        content_analysis,
        model_assisted=model_score is not None,
        model_insight=model_insight(model_output),
    )

    return AnalysisResult(
        overall_score=overall_score,
        keyword_analysis=keyword_analysis,
        content_analysis=content_analysis,
        structure_analysis=structure_analysis,
        industry_alignment=industry_alignment,
        suggestions=suggestions,
        detailed_feedback=detailed_feedback,
        scoring_method=scoring_method,
        model_score=model_score,
    )


def analyze_local(resume_text: str, job_description: str) -> AnalysisResult:
    """Run the deterministic rule-based analysis only."""
    return _build_result(resume_text, job_description)


def _describe_failure(error: BaseException) -> str:
    if isinstance(error, ExternalScoringUnavailable):
        return str(error) or "external scoring unavailable"
    if isinstance(error, asyncio.TimeoutError):
        return "external scoring service timed out"
    return f"external scoring failed: {error}" if str(error) else type(error).__name__


async def analyze(
    resume_text: str,
    job_description: str,
    external_scorer: ExternalScorer | None = None,
    timeout: float | None = None,
) -> AnalysisResult:
    """Score a resume, consulting the external scorer first when one is given.

    Any failure of the external scorer falls back to the rule-based score
    and is reported in detailed_feedback, never raised.
    """
    if external_scorer is None:
        return analyze_local(resume_text, job_description)

    timeout = settings.external_scorer_timeout if timeout is None else timeout
    try:
        model_output = await asyncio.wait_for(
            external_scorer(resume_text, job_description), timeout=timeout
        )
        model_score = score_from_model_output(model_output)
        if model_score is None:
            raise ExternalScoringUnavailable("model returned no usable score")
    except Exception as e:
        reason = _describe_failure(e)
        logger.warning("External scoring unavailable, using rule-based analysis: %s", reason)
        result = analyze_local(resume_text, job_description)
        return result.model_copy(
            update={
                "degraded": True,
                "detailed_feedback": with_fallback_notice(result.detailed_feedback, reason),
            }
        )

    logger.info("External model score %d blended with rule-based score", model_score)
    return _build_result(resume_text, job_description, model_output, model_score)
