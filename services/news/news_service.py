# services/news/news_service.py
from __future__ import annotations

import asyncio
import logging
import os
from typing import List, Optional

from sqlalchemy.orm import Session

from schemas.news import NewsArticleOut, to_article_out
from services.cache.cache_backend import CacheBackend, build_cache
from services.errors import AppError, ValidationError
from services.industry import BusinessProfile
from services.news.impact_scorer import ImpactScorer
from services.news.newsapi_client import NewsApiClient, RawArticle
from services.news_article_service import upsert_article

logger = logging.getLogger(__name__)

NEWS_SCORING_CONCURRENCY = int(os.getenv("NEWS_SCORING_CONCURRENCY", "5"))

PROFILE_INCOMPLETE_MSG = "Business details incomplete. Industry and location are required."


def require_profile(profile: Optional[BusinessProfile]) -> BusinessProfile:
    if profile is None:
        raise ValidationError(PROFILE_INCOMPLETE_MSG)
    return profile


def _news_query(profile: BusinessProfile) -> str:
    return f"{profile.industry} {profile.location}"


class NewsService:
    """Fetch news for a business profile, score each item and upsert it on url."""

    def __init__(
        self,
        news_client: Optional[NewsApiClient] = None,
        scorer: Optional[ImpactScorer] = None,
        cache: Optional[CacheBackend] = None,
        scoring_concurrency: int = NEWS_SCORING_CONCURRENCY,
    ):
        self.news_client = news_client or NewsApiClient()
        self.scorer = scorer or ImpactScorer(cache=build_cache("sentiment"))
        self.cache: CacheBackend = cache if cache is not None else build_cache("news")
        self.scoring_concurrency = max(1, scoring_concurrency)

    async def _score_all(self, items: List[RawArticle], profile: BusinessProfile) -> List[int]:
        sem = asyncio.Semaphore(self.scoring_concurrency)

        async def _one(item: RawArticle) -> int:
            async with sem:
                return await self.scorer.calculate_impact_score(item, profile)

        return list(await asyncio.gather(*[_one(it) for it in items]))

    async def get_news(self, db: Session, profile: Optional[BusinessProfile]) -> List[NewsArticleOut]:
        profile = require_profile(profile)
        query = _news_query(profile)

        cached = self.cache.get(query)
        if isinstance(cached, list):
            logger.info("news_cache_hit query_len=%d count=%d", len(query), len(cached))
            return [NewsArticleOut.model_validate(a) for a in cached]

        try:
            raw_items = await self.news_client.search_everything(query)
            items = [it for it in raw_items if (it.get("url") or "").strip()]
            skipped = len(raw_items) - len(items)
            if skipped:
                logger.info("news_items_skipped reason=missing_url count=%d", skipped)

            scores = await self._score_all(items, profile)

            # Session is not safe for concurrent use: upserts run one at a time.
            saved = [upsert_article(db, item, score, profile) for item, score in zip(items, scores)]
        except AppError as exc:
            logger.error("news_fetch_failed error=%s", exc.message)
            raise exc.with_prefix("Failed to fetch news articles") from exc

        articles = [to_article_out(a) for a in saved]
        self.cache.set(query, [a.model_dump(mode="json") for a in articles])

        logger.info("news_fetch_completed received=%d saved=%d", len(raw_items), len(articles))
        return articles


_news_service: Optional[NewsService] = None


def get_news_service() -> NewsService:
    global _news_service
    if _news_service is None:
        _news_service = NewsService()
    return _news_service
