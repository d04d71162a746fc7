from pydantic import BaseModel


class KeywordAnalysis(BaseModel):
    matching_keywords: list[str] = []
    missing_keywords: list[str] = []
    keyword_density: int = 0
    relevance_score: int = 0


class ContentAnalysis(BaseModel):
    readability_score: int = 0
    professional_tone_score: int = 0
    action_verbs_count: int = 0
    quantified_achievements: int = 0


class StructureAnalysis(BaseModel):
    format_score: int = 0
    sections_completeness: int = 0
    length_appropriateness: int = 0
    bullet_point_usage: int = 0


class IndustryAlignment(BaseModel):
    score: int = 0
    relevant_skills: list[str] = []
    trending_keywords: list[str] = []


class Suggestions(BaseModel):
    high_priority: list[str] = []
    medium_priority: list[str] = []
    low_priority: list[str] = []


class AnalysisResult(BaseModel):
    overall_score: int = 0
    keyword_analysis: KeywordAnalysis = KeywordAnalysis()
    content_analysis: ContentAnalysis = ContentAnalysis()
    structure_analysis: StructureAnalysis = StructureAnalysis()
    industry_alignment: IndustryAlignment = IndustryAlignment()
    suggestions: Suggestions = Suggestions()
    detailed_feedback: str = ""
    # Scoring transparency fields
    scoring_method: str = "local_only"  # "local_only" | "model_blended"
    degraded: bool = False
    model_score: int | None = None

    model_config = {"protected_namespaces": ()}


class ScorerConnectionStatus(BaseModel):
    success: bool
    message: str
    details: dict = {}
