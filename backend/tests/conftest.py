"""Shared test configuration and fixtures."""

import pytest

from api.router import limiter
from config import settings


SAMPLE_RESUME = """John Doe
john.doe@email.com | (555) 123-4567
linkedin.com/in/johndoe | github.com/johndoe

Summary
Software developer with 6 years building Python and React applications.

Experience
Senior Software Engineer | TechCorp | 2021 - Present
• Led a team of 5 engineers delivering a payments platform
• Reduced API latency by 40% through caching and query optimization
• Managed $2 million annual cloud budget on AWS

Software Engineer | StartupXYZ | 2019 - 2021
• Developed React frontend components used by 50k customers
• Implemented CI/CD pipelines, cutting release time from 3 days to 4 hours
• Analyzed usage data to guide product decisions

Education
B.S. Computer Science | State University | 2019

Skills
Python, JavaScript, React, Docker, AWS, SQL, REST API design
"""

SAMPLE_JD = """Senior Python Developer

We are looking for a Python developer with React experience to join our team.
You will design REST API services, deploy with Docker on AWS and work with SQL databases.
Strong communication and leadership skills are expected.
"""


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def sample_jd() -> str:
    return SAMPLE_JD


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Keep API tests independent of the per-minute rate limit."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def scorer_settings(monkeypatch):
    """Yield the shared settings object with external scoring enabled."""
    monkeypatch.setattr(settings, "gemini_api_key", "test-gemini-key")
    monkeypatch.setattr(settings, "huggingface_api_key", "test-hf-key")
    monkeypatch.setattr(settings, "huggingface_model_url", "https://hf.test/models/ResumeATS")
    return settings
