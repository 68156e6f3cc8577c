from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from models.prediction import Prediction

ImpactAreaName = Literal["Financial", "Operational", "Market", "Reputation"]
Period = Literal["short-term", "medium-term", "long-term"]
Priority = Literal["low", "medium", "high"]


class ImpactArea(BaseModel):
    name: ImpactAreaName
    score: float  # base impact + jitter, clamped to [-100, 100], not rounded
    description: str


class Timeframe(BaseModel):
    period: Period
    impact: float
    description: str


class Recommendation(BaseModel):
    title: str
    description: str
    priority: Priority


class PredictionAnalysis(BaseModel):
    overall_impact: int
    impact_areas: List[ImpactArea] = Field(..., min_length=4, max_length=4)
    timeframes: List[Timeframe] = Field(..., min_length=3, max_length=3)
    recommendations: List[Recommendation] = Field(..., min_length=2)
    confidence_level: int = Field(..., ge=30, le=90)


class ArticleSummary(BaseModel):
    id: int
    title: str = ""


class PredictionOut(PredictionAnalysis):
    id: int
    news_article_id: int
    news_article: Optional[ArticleSummary] = None
    user_id: int
    industry: str
    location: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def to_prediction_out(p: Prediction) -> PredictionOut:
    article = p.news_article
    return PredictionOut(
        id=p.id,
        news_article_id=p.news_article_id,
        news_article=ArticleSummary(id=article.id, title=article.title or "") if article is not None else None,
        user_id=p.user_id,
        industry=p.industry,
        location=p.location,
        overall_impact=p.overall_impact,
        impact_areas=p.impact_areas,
        timeframes=p.timeframes,
        recommendations=p.recommendations,
        confidence_level=p.confidence_level,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )


class PredictionResponse(BaseModel):
    success: bool = True
    data: PredictionOut
    cached: bool = False


class PredictionHistoryResponse(BaseModel):
    success: bool = True
    count: int
    page: int
    limit: int
    data: List[PredictionOut] = Field(default_factory=list)
