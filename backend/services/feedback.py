"""Prioritized suggestions and human-readable feedback for an analysis."""

from models.responses import ContentAnalysis, KeywordAnalysis, Suggestions

MAX_HIGH_PRIORITY = 3
MAX_MEDIUM_PRIORITY = 3
MAX_LOW_PRIORITY = 2

# Rule thresholds
LOW_OVERALL_SCORE = 60
LOW_KEYWORD_DENSITY = 30
MIN_QUANTIFIED_ACHIEVEMENTS = 3
MIN_ACTION_VERBS = 5
MIN_READABILITY = 70

GENERAL_TIPS: tuple[str, ...] = (
    "Ensure consistent formatting throughout",
    "Consider adding relevant certifications",
)


def generate_suggestions(
    resume_text: str,
    keyword_analysis: KeywordAnalysis,
    content_analysis: ContentAnalysis,
    overall_score: int,
) -> Suggestions:
    """Apply threshold rules in a fixed order, then truncate each list.

    Rule order decides which items survive truncation.
    """
    high_priority: list[str] = []
    medium_priority: list[str] = []
    low_priority: list[str] = []

    if overall_score < LOW_OVERALL_SCORE:
        high_priority.append("Your resume needs significant optimization for ATS compatibility")
    if keyword_analysis.keyword_density < LOW_KEYWORD_DENSITY:
        high_priority.append("Add more relevant keywords from the job description")
    if content_analysis.quantified_achievements < MIN_QUANTIFIED_ACHIEVEMENTS:
        high_priority.append("Include more quantified achievements with specific numbers")

    if content_analysis.action_verbs_count < MIN_ACTION_VERBS:
        medium_priority.append("Use stronger action verbs to start bullet points")
    if "summary" not in resume_text.lower():
        medium_priority.append("Add a professional summary section")
    if content_analysis.readability_score < MIN_READABILITY:
        medium_priority.append("Improve readability with shorter, clearer sentences")

    low_priority.extend(GENERAL_TIPS)

    return Suggestions(
        high_priority=high_priority[:MAX_HIGH_PRIORITY],
        medium_priority=medium_priority[:MAX_MEDIUM_PRIORITY],
        low_priority=low_priority[:MAX_LOW_PRIORITY],
    )


def _verdict(overall_score: int) -> str:
    if overall_score >= 80:
        return "Excellent! Your resume is well-optimized for ATS systems."
    if overall_score >= 60:
        return "Good foundation with room for improvement."
    return "Significant optimization needed for better ATS compatibility."


def generate_detailed_feedback(
    overall_score: int,
    keyword_analysis: KeywordAnalysis,
    content_analysis: ContentAnalysis,
    model_assisted: bool = False,
    model_insight: str | None = None,
) -> str:
    method = "model-assisted" if model_assisted else "rule-based"
    lines = [
        f"ATS ANALYSIS ({method})",
        "",
        f"Your resume scored {overall_score}/100. {_verdict(overall_score)}",
        "",
        "DETAILED BREAKDOWN:",
        f"- Keyword Relevance: {keyword_analysis.relevance_score}%",
        f"- Readability: {content_analysis.readability_score}%",
        f"- Professional Tone: {content_analysis.professional_tone_score}%",
        f"- Action Verbs: {content_analysis.action_verbs_count} found",
        f"- Quantified Results: {content_analysis.quantified_achievements} found",
    ]
    if model_insight:
        lines += ["", "MODEL INSIGHTS:", model_insight.strip()]
    return "\n".join(lines)


def with_fallback_notice(feedback: str, reason: str) -> str:
    """Prefix feedback with the reason the external model was not used."""
    return f"Note: Using rule-based analysis ({reason})\n\n{feedback}"
