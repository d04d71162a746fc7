"""Content quality heuristics: readability, tone, action verbs, metrics."""

import re

from models.responses import ContentAnalysis

# Bullet markers counted for readability and structure
_BULLET_RE = re.compile(r"[•\-*]")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

# Words that signal a professional register
PROFESSIONAL_WORDS: tuple[str, ...] = (
    "achieved", "managed", "led", "developed", "implemented", "improved",
)
PROFESSIONAL_BONUS_PER_WORD = 3
PROFESSIONAL_BONUS_CAP = 20

# Words that signal a casual register
CASUAL_WORDS: tuple[str, ...] = ("stuff", "things", "lots", "really", "very")
CASUAL_PENALTY_PER_WORD = 5

# Strong action verbs expected at the start of resume bullets
ACTION_VERBS: tuple[str, ...] = (
    "achieved", "managed", "led", "developed", "created", "implemented",
    "designed", "improved", "increased", "reduced", "delivered", "executed",
    "coordinated", "supervised", "analyzed", "optimized", "streamlined",
    "facilitated",
)

# Regexes for quantified results. Overlapping matches are all counted, so
# "$50k" scores once for the dollar pattern and once for the "k" pattern.
QUANTIFIED_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\d+%"),
    re.compile(r"\$\d+"),
    re.compile(r"\d+k", re.IGNORECASE),
    re.compile(r"\d+\s*(?:million|billion)", re.IGNORECASE),
    re.compile(r"\d+\s*(?:hours|days|weeks|months|years)", re.IGNORECASE),
    re.compile(r"\d+\s*(?:people|employees|team)", re.IGNORECASE),
)


def count_bullets(text: str) -> int:
    """Count bullet marker characters anywhere in text."""
    return len(_BULLET_RE.findall(text))


def calculate_readability(text: str) -> int:
    """Score 0-100 from average sentence length and bullet usage.

    Text without any words has nothing to read and scores 0. An empty
    resume therefore only earns the length step of its format score
    (18), which puts its overall score at 4 rather than 0.
    """
    words = text.split()
    if not words:
        return 0

    sentences = [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]
    avg_words_per_sentence = len(words) / max(len(sentences), 1)

    score = 100
    if avg_words_per_sentence > 25:
        score -= 30
    elif avg_words_per_sentence > 20:
        score -= 15
    elif avg_words_per_sentence < 8:
        score -= 10

    if count_bullets(text) > 5:
        score += 10

    return max(0, min(100, score))


def analyze_professional_tone(text: str) -> int:
    """Score 0-100 starting from a neutral 70."""
    lower = text.lower()
    score = 70

    professional_count = sum(1 for word in PROFESSIONAL_WORDS if word in lower)
    score += min(PROFESSIONAL_BONUS_CAP, professional_count * PROFESSIONAL_BONUS_PER_WORD)

    casual_count = sum(1 for word in CASUAL_WORDS if word in lower)
    score -= casual_count * CASUAL_PENALTY_PER_WORD

    return max(0, min(100, score))


def count_action_verbs(text: str) -> int:
    """Number of distinct action verbs that appear in text."""
    lower = text.lower()
    return sum(1 for verb in ACTION_VERBS if verb in lower)


def count_quantified_achievements(text: str) -> int:
    """Total matches across all quantified-result patterns."""
    return sum(len(pattern.findall(text)) for pattern in QUANTIFIED_PATTERNS)


def analyze_content(resume_text: str) -> ContentAnalysis:
    return ContentAnalysis(
        readability_score=calculate_readability(resume_text),
        professional_tone_score=analyze_professional_tone(resume_text),
        action_verbs_count=count_action_verbs(resume_text),
        quantified_achievements=count_quantified_achievements(resume_text),
    )
