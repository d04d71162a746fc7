"""Google Gemini API wrapper used as an external ATS scorer."""

import json
import logging

from google import genai
from google.genai import types

from config import settings
from services import prompt_builder
from services.exceptions import ExternalScoringUnavailable

logger = logging.getLogger(__name__)

# Tried in order until one returns parseable JSON
GEMINI_MODELS: tuple[str, ...] = ("gemini-2.5-flash", "gemini-1.5-pro-latest", "gemini-pro")

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def parse_json_response(text: str) -> dict:
    """Parse a model reply as JSON, stripping markdown code fences if present."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return json.loads(text)


async def generate_json(prompt: str, model: str) -> dict:
    """Send a prompt to one Gemini model and parse the JSON response."""
    client = get_client()
    if client is None:
        raise ExternalScoringUnavailable("Gemini API key not configured")

    response = await client.aio.models.generate_content(
        model=model,
        contents=prompt,
        config=types.GenerateContentConfig(
            temperature=0.3,
            max_output_tokens=1024,
        ),
    )
    if not response.text:
        raise ExternalScoringUnavailable(f"Gemini model {model} returned an empty response")
    return parse_json_response(response.text)


async def score_resume(resume_text: str, job_description: str) -> dict:
    """Score a resume with the first Gemini model that answers with valid JSON."""
    if not settings.gemini_api_key:
        raise ExternalScoringUnavailable("Gemini API key not configured")

    prompt = prompt_builder.build_scoring_prompt(resume_text, job_description)
    last_error = "no models tried"

    for model in GEMINI_MODELS:
        try:
            logger.info("Scoring with Gemini model %s", model)
            return await generate_json(prompt, model)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse Gemini response as JSON: %s", e)
            last_error = f"unparseable response from {model}"
        except ExternalScoringUnavailable as e:
            logger.error("Gemini API error: %s", e)
            last_error = str(e)
        except Exception as e:
            logger.error("Gemini API error with model %s: %s", model, e)
            last_error = f"{model} failed: {e}"

    raise ExternalScoringUnavailable(f"Gemini scoring failed ({last_error})")


async def test_connection() -> dict:
    """Check that Gemini answers a trivial request. Never raises."""
    if not settings.gemini_api_key:
        return {"success": False, "message": "Gemini API key not configured", "details": {}}

    client = get_client()
    try:
        await client.aio.models.generate_content(
            model=GEMINI_MODELS[0],
            contents="Reply with the word ok.",
        )
    except Exception as e:
        return {
            "success": False,
            "message": f"Connection test failed: {e}",
            "details": {"model": GEMINI_MODELS[0]},
        }
    return {"success": True, "message": "API connection successful", "details": {"model": GEMINI_MODELS[0]}}
