# services/news/impact_scorer.py
"""
Impact score for a raw news item against a business profile.

    impact = clamp(round(sentiment * 100 * relevance), -100, 100)

relevance starts at 1.0, gains +0.3 when the industry is mentioned in the
title/description and +0.2 for the location, and never drops below 0.1.
A sentiment failure never escapes: the article is scored neutral (0).
"""
from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional

from services.cache.cache_backend import CacheBackend, MemoryTTLCache
from services.industry import BusinessProfile
from services.sentiment.client import SentimentClient

logger = logging.getLogger(__name__)

BASE_RELEVANCE = 1.0
INDUSTRY_MENTION_BOOST = 0.3
LOCATION_MENTION_BOOST = 0.2
MIN_RELEVANCE = 0.1

SENTIMENT_CACHE_KEY_CHARS = 100
SCORE_MIN, SCORE_MAX = -100, 100


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def clamp_score(x: float) -> float:
    return min(max(x, SCORE_MIN), SCORE_MAX)


def article_text(article: Mapping[str, Any]) -> str:
    parts = (
        _text(article.get("title")),
        _text(article.get("description")),
        _text(article.get("content")),
    )
    return " ".join(parts).strip()


def calculate_relevance(article: Mapping[str, Any], profile: BusinessProfile) -> float:
    title = _text(article.get("title")).lower()
    description = _text(article.get("description")).lower()
    industry = profile.industry.lower()
    location = profile.location.lower()

    relevance = BASE_RELEVANCE
    if industry in title or industry in description:
        relevance += INDUSTRY_MENTION_BOOST
    if location in title or location in description:
        relevance += LOCATION_MENTION_BOOST

    return max(relevance, MIN_RELEVANCE)


class ImpactScorer:
    def __init__(
        self,
        sentiment_client: Optional[SentimentClient] = None,
        cache: Optional[CacheBackend] = None,
    ):
        self.sentiment_client = sentiment_client or SentimentClient()
        self.cache: CacheBackend = cache if cache is not None else MemoryTTLCache()

    @staticmethod
    def _cache_key(text: str) -> str:
        return f"sentiment-{text[:SENTIMENT_CACHE_KEY_CHARS]}"

    async def calculate_impact_score(self, article: Mapping[str, Any], profile: BusinessProfile) -> int:
        text = article_text(article)
        if not text:
            logger.warning("impact_score_skipped reason=empty_text")
            return 0

        key = self._cache_key(text)
        cached = self.cache.get(key)
        if isinstance(cached, int):
            return cached

        try:
            polarity = await self.sentiment_client.score(text, lang="en")
        except Exception as exc:
            # Articles are never dropped because scoring failed; they read as neutral.
            logger.warning("impact_score_sentiment_failed error=%s", exc)
            return 0

        base_score = polarity * 100
        relevance = calculate_relevance(article, profile)
        score = int(clamp_score(round_half_up(base_score * relevance)))

        self.cache.set(key, score)
        return score
