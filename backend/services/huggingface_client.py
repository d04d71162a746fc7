"""Hugging Face Inference API client for the ResumeATS model."""

import logging

import httpx

from config import settings
from services.exceptions import ExternalScoringUnavailable

logger = logging.getLogger(__name__)

# Text limits accepted by the hosted model
MAX_RESUME_CHARS = 2000
MAX_JD_CHARS = 1500

_STATUS_MESSAGES: dict[int, str] = {
    401: "Invalid Hugging Face API key",
    429: "Rate limit exceeded",
    503: "ResumeATS model is starting up (this can take 30-60 seconds)",
}


def _headers() -> dict[str, str]:
    return {
        "Authorization": f"Bearer {settings.huggingface_api_key}",
        "Content-Type": "application/json",
        "User-Agent": "ResumeATS-Client/1.0",
    }


def build_payload(resume_text: str, job_description: str) -> dict:
    return {
        "inputs": {
            "resume": resume_text[:MAX_RESUME_CHARS],
            "job_description": job_description[:MAX_JD_CHARS],
        },
        "parameters": {
            "return_full_text": False,
            "max_length": 512,
            "temperature": 0.7,
        },
    }


async def score_resume(
    resume_text: str,
    job_description: str,
    transport: httpx.AsyncBaseTransport | None = None,
):
    """POST the resume and JD to the ResumeATS model and return its raw JSON."""
    if not settings.huggingface_api_key:
        raise ExternalScoringUnavailable("Hugging Face API key not configured")

    logger.info(
        "Calling ResumeATS model (resume %d chars, JD %d chars)",
        len(resume_text), len(job_description),
    )
    try:
        async with httpx.AsyncClient(
            timeout=settings.external_scorer_timeout, transport=transport
        ) as client:
            response = await client.post(
                settings.huggingface_model_url,
                headers=_headers(),
                json=build_payload(resume_text, job_description),
            )
    except httpx.HTTPError as e:
        logger.error("Hugging Face request failed: %s", e)
        raise ExternalScoringUnavailable(
            "Network connection issue with Hugging Face API"
        ) from e

    if response.status_code in _STATUS_MESSAGES:
        raise ExternalScoringUnavailable(_STATUS_MESSAGES[response.status_code])
    if response.is_error:
        raise ExternalScoringUnavailable(
            f"ResumeATS model failed: {response.status_code} - {response.text or response.reason_phrase}"
        )

    try:
        return response.json()
    except ValueError as e:
        raise ExternalScoringUnavailable("ResumeATS model returned invalid JSON") from e


async def test_connection(transport: httpx.AsyncBaseTransport | None = None) -> dict:
    """Send a tiny request to the model endpoint. Never raises."""
    if not settings.huggingface_api_key:
        return {"success": False, "message": "Hugging Face API key not configured", "details": {}}

    try:
        async with httpx.AsyncClient(
            timeout=settings.external_scorer_timeout, transport=transport
        ) as client:
            response = await client.post(
                settings.huggingface_model_url,
                headers=_headers(),
                json={"inputs": {"resume": "Test resume content", "job_description": "Test job description"}},
            )
    except httpx.HTTPError as e:
        return {"success": False, "message": f"Connection test failed: {e}", "details": {"error": str(e)}}

    if response.is_success:
        return {
            "success": True,
            "message": "API connection successful",
            "details": {"status": response.status_code},
        }
    return {
        "success": False,
        "message": f"API connection failed: {response.status_code}",
        "details": {"status": response.status_code, "error": response.text},
    }
