"""Prompt templates for Gemini API calls."""

# Characters of each document sent to the model
MAX_PROMPT_RESUME_CHARS = 2000
MAX_PROMPT_JD_CHARS = 2000


def build_scoring_prompt(resume_text: str, job_description: str) -> str:
    """Ask the model for an ATS score and a short insight as JSON."""
    resume = resume_text[:MAX_PROMPT_RESUME_CHARS]
    job = job_description[:MAX_PROMPT_JD_CHARS]

    return f"""You are an ATS (Applicant Tracking System) analyzer. Analyze this resume against the job description.

SCORING RUBRIC (follow strictly):
- 0-20:  No relevant match. Resume is for a completely different field.
- 20-40: Weak match. Some transferable skills but major gaps in core requirements.
- 40-60: Moderate match. Meets some key requirements but missing several important ones.
- 60-80: Strong match. Meets most requirements with minor gaps.
- 80-100: Exceptional match. Meets or exceeds nearly all requirements.

RESUME:
---
{resume}
---

JOB DESCRIPTION:
---
{job}
---

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "overall_score": <integer 0-100>,
  "matching_keywords": [<keywords found in BOTH resume and job description>],
  "missing_keywords": [<important job description keywords NOT found in resume>],
  "generated_text": "<2-3 sentence explanation of the score and brief improvement suggestions>"
}}"""
