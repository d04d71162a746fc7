"""Shared dependencies for API routes."""

from config import settings
from services import gemini_client, huggingface_client
from services.resume_analyzer import ExternalScorer

_SCORERS = {
    "gemini": gemini_client,
    "huggingface": huggingface_client,
}


def get_scorer_module():
    """Client module for the configured external scorer, or None."""
    return _SCORERS.get(settings.external_scorer.lower())


def get_external_scorer() -> ExternalScorer | None:
    module = get_scorer_module()
    return module.score_resume if module is not None else None
