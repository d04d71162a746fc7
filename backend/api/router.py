from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_external_scorer, get_scorer_module
from config import settings
from models.requests import AnalyzeRequest
from models.responses import AnalysisResult, ScorerConnectionStatus
from services import resume_analyzer
from services.resume_analyzer import ExternalScorer

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "external_scorer": settings.external_scorer,
        "external_scorer_configured": get_scorer_module() is not None,
    }


@router.get("/health/scorer", response_model=ScorerConnectionStatus)
async def scorer_health():
    module = get_scorer_module()
    if module is None:
        return ScorerConnectionStatus(
            success=False,
            message="No external scorer configured; using rule-based analysis",
        )
    return ScorerConnectionStatus(**await module.test_connection())


@router.post("/analyze", response_model=AnalysisResult)
@limiter.limit("10/minute")
async def analyze(
    request: Request,
    body: AnalyzeRequest,
    external_scorer: ExternalScorer | None = Depends(get_external_scorer),
):
    return await resume_analyzer.analyze(
        body.resume_text, body.job_description, external_scorer=external_scorer
    )
