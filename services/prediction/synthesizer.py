# services/prediction/synthesizer.py
"""
Per-(article, user) business impact prediction.

The analysis is synthesized from the article's stored impact score: four
impact areas and three timeframes jittered around it, band-selected
descriptions, two recommendations and a heuristic confidence level.
Results are persisted once per pair and cached for CACHE_TTL_SEC.
"""
from __future__ import annotations

import logging
import random
from typing import Any, Optional, Tuple

from sqlalchemy.orm import Session

from models.news_article import NewsArticle
from schemas.prediction import (
    ImpactArea,
    PredictionAnalysis,
    PredictionOut,
    Recommendation,
    Timeframe,
    to_prediction_out,
)
from services.cache.cache_backend import CacheBackend, build_cache
from services.errors import AppError, NotFoundError, ValidationError
from services.industry import BusinessProfile
from services.news.impact_scorer import clamp_score
from services.news.news_service import require_profile
from services.news_article_service import MAX_ARTICLE_ID, MIN_ARTICLE_ID, get_article
from services.prediction import templates
from services.prediction_service import create_prediction, get_prediction_for

logger = logging.getLogger(__name__)

# (name, min jitter, max jitter)
IMPACT_AREAS = (
    ("Financial", -10, 10),
    ("Operational", -15, 15),
    ("Market", -5, 20),
    ("Reputation", -20, 5),
)

TIMEFRAMES = (
    ("short-term", 0, 10),
    ("medium-term", -10, 0),
    ("long-term", -20, -5),
)

BASE_CONFIDENCE = 60
INDUSTRY_MATCH_BONUS = 15
RELIABLE_SOURCE_BONUS = 10
LONG_CONTENT_BONUS = 5
LONG_CONTENT_CHARS = 500
MIN_CONFIDENCE = 30
MAX_CONFIDENCE = 90

RELIABLE_SOURCES = frozenset({"Reuters", "Bloomberg", "AP", "BBC"})


def _parse_article_id(article_id: Any) -> int:
    if article_id is None or str(article_id).strip() == "":
        raise ValidationError("Article ID is required")
    try:
        parsed = int(str(article_id).strip())
    except ValueError:
        raise ValidationError("Invalid article ID")
    if not MIN_ARTICLE_ID <= parsed <= MAX_ARTICLE_ID:
        raise ValidationError("Invalid article ID")
    return parsed


def calculate_confidence(article: NewsArticle, industry: str) -> int:
    confidence = BASE_CONFIDENCE
    if industry in (article.relevance_categories or []):
        confidence += INDUSTRY_MATCH_BONUS
    if article.source_name in RELIABLE_SOURCES:
        confidence += RELIABLE_SOURCE_BONUS
    if article.content and len(article.content) > LONG_CONTENT_CHARS:
        confidence += LONG_CONTENT_BONUS
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))


class PredictionSynthesizer:
    def __init__(self, cache: Optional[CacheBackend] = None, rng: Optional[random.Random] = None):
        self.cache: CacheBackend = cache if cache is not None else build_cache("prediction")
        self.rng = rng or random.Random()

    @staticmethod
    def _cache_key(article_id: int, user_id: int) -> str:
        return f"prediction-{article_id}-{user_id}"

    def adjust_impact_score(self, base: float, lo: float, hi: float) -> float:
        return clamp_score(base + lo + self.rng.random() * (hi - lo))

    def _recommendations(self, base: int, profile: BusinessProfile) -> list[Recommendation]:
        title, description, priority = templates.DIRECTIONAL_RECOMMENDATIONS[templates.impact_band(base)]
        return [
            Recommendation(title=title, description=description, priority=priority),
            Recommendation(
                title=templates.INDUSTRY_RECOMMENDATION_TITLE.format(industry=profile.industry),
                description=templates.industry_recommendation_text(profile.category, base, profile.industry),
                priority=templates.industry_priority(base),
            ),
        ]

    def analyze_prediction(self, article: NewsArticle, profile: BusinessProfile) -> PredictionAnalysis:
        base = int(article.impact_score or 0)

        areas = [
            ImpactArea(
                name=name,
                score=self.adjust_impact_score(base, lo, hi),
                description=templates.area_description(name, base, profile.industry),
            )
            for name, lo, hi in IMPACT_AREAS
        ]

        timeframes = []
        for period, lo, hi in TIMEFRAMES:
            impact = self.adjust_impact_score(base, lo, hi)
            timeframes.append(
                Timeframe(period=period, impact=impact, description=templates.timeframe_description(period, impact))
            )

        return PredictionAnalysis(
            overall_impact=base,
            impact_areas=areas,
            timeframes=timeframes,
            recommendations=self._recommendations(base, profile),
            confidence_level=calculate_confidence(article, profile.industry),
        )

    async def generate_prediction(self, db: Session, article_id: Any, user: Any) -> Tuple[PredictionOut, bool]:
        """
        Return (prediction, served_from_cache_or_store).
        All preconditions are checked before any cache or store access that could write.
        """
        try:
            article_pk = _parse_article_id(article_id)
            user_id = getattr(user, "id", None)
            if not user_id:
                raise ValidationError("Valid user is required")

            article = get_article(db, article_pk)
            if article is None:
                raise NotFoundError("News article not found")
            profile = require_profile(getattr(user, "business_profile", None))

            key = self._cache_key(article_pk, user_id)
            cached = self.cache.get(key)
            if isinstance(cached, dict):
                logger.info("prediction_cache_hit article_id=%s user_id=%s", article_pk, user_id)
                return PredictionOut.model_validate(cached), True

            existing = get_prediction_for(db, article_pk, user_id)
            if existing is not None:
                out = to_prediction_out(existing)
                self.cache.set(key, out.model_dump(mode="json"))
                return out, True

            analysis = self.analyze_prediction(article, profile)
            saved = create_prediction(db, article_pk, user_id, profile, analysis)
            out = to_prediction_out(saved)
            self.cache.set(key, out.model_dump(mode="json"))
        except AppError as exc:
            logger.warning("prediction_generate_failed article_id=%s error=%s", article_id, exc.message)
            raise exc.with_prefix("Failed to generate prediction") from exc

        logger.info(
            "prediction_generated article_id=%s user_id=%s overall_impact=%d confidence=%d",
            article_pk,
            user_id,
            out.overall_impact,
            out.confidence_level,
        )
        return out, False


_synthesizer: Optional[PredictionSynthesizer] = None


def get_prediction_synthesizer() -> PredictionSynthesizer:
    global _synthesizer
    if _synthesizer is None:
        _synthesizer = PredictionSynthesizer()
    return _synthesizer
