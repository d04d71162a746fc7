"""Industry alignment: how many in-demand JD terms the resume's skills cover."""

from models.responses import IndustryAlignment
from services.score_utils import round_half_up
from services.section_parser import extract_skills

# In-demand terms looked for in the job description
INDUSTRY_KEYWORDS: tuple[str, ...] = (
    "javascript", "python", "react", "node", "aws", "docker", "sql", "api",
    "management", "leadership", "analysis", "communication", "project", "team",
)

MAX_RELEVANT_SKILLS = 10
MAX_TRENDING_KEYWORDS = 15


def extract_industry_keywords(job_description: str) -> list[str]:
    """Industry keywords that appear anywhere in the job description."""
    jd_lower = job_description.lower()
    return [kw for kw in INDUSTRY_KEYWORDS if kw in jd_lower]


def _covers(keyword: str, skill: str) -> bool:
    kw = keyword.lower()
    sk = skill.lower()
    return kw in sk or sk in kw


def analyze_industry_alignment(resume_text: str, job_description: str) -> IndustryAlignment:
    industry_keywords = extract_industry_keywords(job_description)
    resume_skills = extract_skills(resume_text)

    aligned = [
        kw for kw in industry_keywords
        if any(_covers(kw, skill) for skill in resume_skills)
    ]

    return IndustryAlignment(
        score=round_half_up(len(aligned) / max(len(industry_keywords), 1) * 100),
        relevant_skills=aligned[:MAX_RELEVANT_SKILLS],
        trending_keywords=industry_keywords[:MAX_TRENDING_KEYWORDS],
    )
