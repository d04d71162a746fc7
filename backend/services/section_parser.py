"""Resume section detection and structure scoring."""

import re

from models.responses import StructureAnalysis
from services.content_analyzer import count_bullets
from services.score_utils import round_half_up

# Section markers and the terms that signal each one. Presence anywhere in
# the text counts; no header layout is required.
SECTION_PATTERNS: dict[str, str] = {
    "contact": r"email|phone|linkedin|github",
    "summary": r"summary|objective|profile",
    "experience": r"experience|work|employment",
    "education": r"education|degree|university",
    "skills": r"skills|technologies|tools",
}

_COMPILED: dict[str, re.Pattern] = {
    section: re.compile(pattern, re.IGNORECASE)
    for section, pattern in SECTION_PATTERNS.items()
}

POINTS_PER_SECTION = 20

# Headings that end a skills block when they start a line
_NEXT_SECTION_HEADER = (
    r"(?:(?:work|professional)[^\S\n]+)?"
    r"(?:experience|education|summary|objective|profile|projects|certifications?"
    r"|employment|achievements|awards|languages|interests|references|contact)"
)

# Skills block: everything after the first "skills" word up to a blank line
# or the next section heading
_SKILLS_BLOCK_RE = re.compile(
    r"\bskills\b[^\S\n]*:?(.*?)"
    rf"(?=\n[^\S\n]*\n|\n[^\S\n]*{_NEXT_SECTION_HEADER}[^\S\n]*(?::|\n|\Z)|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_SKILL_SPLIT_RE = re.compile(r"[,\n•\-]")
MAX_SKILLS = 20


def identify_sections(text: str) -> dict[str, bool]:
    """Map each known section name to whether its marker appears in text."""
    return {section: bool(pattern.search(text)) for section, pattern in _COMPILED.items()}


def compute_section_completeness(sections: dict[str, bool]) -> int:
    """20 points per detected section, 0-100."""
    return sum(1 for present in sections.values() if present) * POINTS_PER_SECTION


def word_count_score(word_count: int) -> int:
    """Step score for resume length: ideal is 300-600 words."""
    if 300 <= word_count <= 600:
        return 100
    if 200 <= word_count <= 800:
        return 85
    return 60


def analyze_structure(resume_text: str) -> StructureAnalysis:
    sections = identify_sections(resume_text)
    completeness = compute_section_completeness(sections)
    bullet_points = count_bullets(resume_text)
    length_score = word_count_score(len(resume_text.split()))

    format_score = min(
        100,
        completeness * 0.4
        + min(bullet_points / 10, 1) * 30
        + length_score * 0.3,
    )

    return StructureAnalysis(
        format_score=round_half_up(format_score),
        sections_completeness=completeness,
        length_appropriateness=length_score,
        bullet_point_usage=min(bullet_points, 20),
    )


def extract_skills(resume_text: str) -> list[str]:
    """Extract skill entries from the skills block, or the whole resume.

    Entries are split on commas, newlines, bullets and dashes, and only
    those between 3 and 29 characters long are kept.
    """
    match = _SKILLS_BLOCK_RE.search(resume_text)
    skills_text = match.group(1) if match else resume_text

    skills = []
    for part in _SKILL_SPLIT_RE.split(skills_text):
        skill = part.strip()
        if 2 < len(skill) < 30:
            skills.append(skill)
    return skills[:MAX_SKILLS]
