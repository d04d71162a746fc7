"""Keyword extraction and matching for resume-JD analysis.

Keywords are plain lower-cased tokens in first-occurrence order. Matching
is a symmetric, non-transitive similarity relation: exact, substring, or
a pair from the synonym table below.
"""

import logging
import re

from models.responses import KeywordAnalysis
from services.score_utils import round_half_up

logger = logging.getLogger(__name__)

_TOKEN_SPLIT_RE = re.compile(r"\W+")

# ---------------------------------------------------------------------------
# Filler words dropped before keyword extraction
# ---------------------------------------------------------------------------
STOP_WORDS: frozenset[str] = frozenset({
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "by", "from", "up", "about", "into", "through", "during", "before", "after",
})

# ---------------------------------------------------------------------------
# Keyword synonyms: canonical term -> aliases
# Only (canonical, alias) pairs match; aliases of the same term do not
# match each other.
# ---------------------------------------------------------------------------
KEYWORD_SYNONYMS: dict[str, frozenset[str]] = {
    "javascript": frozenset({"js", "ecmascript", "node"}),
    "python": frozenset({"py", "django", "flask"}),
    "management": frozenset({"managing", "manager", "lead", "leadership"}),
    "development": frozenset({"developing", "developer", "dev", "coding"}),
    "analysis": frozenset({"analyzing", "analyst", "analyze", "analytics"}),
}

MAX_KEYWORDS = 50
MAX_MATCHING_KEYWORDS = 20
MAX_MISSING_KEYWORDS = 15
SEMANTIC_BONUS_MAX = 20


def _words(text: str) -> set[str]:
    """Lower-cased word set of text, without empty fragments."""
    return {w for w in _TOKEN_SPLIT_RE.split(text.lower()) if w}


def extract_keywords(text: str) -> list[str]:
    """Extract up to 50 distinct keywords in first-occurrence order."""
    keywords: list[str] = []
    seen: set[str] = set()
    for word in _TOKEN_SPLIT_RE.split(text.lower()):
        if len(word) <= 2 or word in STOP_WORDS or word in seen:
            continue
        seen.add(word)
        keywords.append(word)
        if len(keywords) == MAX_KEYWORDS:
            break
    return keywords


def are_keywords_similar(keyword_a: str, keyword_b: str) -> bool:
    """Check whether two keywords refer to the same concept."""
    a = keyword_a.lower()
    b = keyword_b.lower()

    if a == b:
        return True
    if a in b or b in a:
        return True

    for canonical, aliases in KEYWORD_SYNONYMS.items():
        if (a == canonical and b in aliases) or (b == canonical and a in aliases):
            return True

    return False


def calculate_semantic_bonus(resume_text: str, job_description: str) -> int:
    """Jaccard similarity of the two word sets, scaled to 0-20."""
    resume_words = _words(resume_text)
    job_words = _words(job_description)
    union = resume_words | job_words
    if not union:
        return 0
    intersection = resume_words & job_words
    return round_half_up(len(intersection) / len(union) * SEMANTIC_BONUS_MAX)


def match_keywords(
    resume_keywords: list[str], job_keywords: list[str]
) -> tuple[list[str], list[str]]:
    """Split job keywords into (matching, missing), both in JD order."""
    matching = [
        kw for kw in job_keywords
        if any(are_keywords_similar(kw, rk) for rk in resume_keywords)
    ]
    missing = [
        kw for kw in job_keywords
        if not any(are_keywords_similar(kw, m) for m in matching)
    ]
    return matching, missing


def compute_keyword_density(matching_count: int, job_keyword_count: int) -> int:
    """Share of job keywords found in the resume, as 0-100."""
    return round_half_up(matching_count / max(job_keyword_count, 1) * 100)


def analyze_keywords(resume_text: str, job_description: str) -> KeywordAnalysis:
    """Compare resume keywords against job description keywords."""
    job_keywords = extract_keywords(job_description)
    resume_keywords = extract_keywords(resume_text)

    matching, missing = match_keywords(resume_keywords, job_keywords)
    keyword_density = compute_keyword_density(len(matching), len(job_keywords))
    semantic_bonus = calculate_semantic_bonus(resume_text, job_description)
    relevance_score = min(100, keyword_density + semantic_bonus)

    logger.debug(
        "Keyword analysis: %d/%d job keywords matched, semantic bonus %d",
        len(matching), len(job_keywords), semantic_bonus,
    )

    return KeywordAnalysis(
        matching_keywords=matching[:MAX_MATCHING_KEYWORDS],
        missing_keywords=missing[:MAX_MISSING_KEYWORDS],
        keyword_density=keyword_density,
        relevance_score=relevance_score,
    )
