from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from models.news_article import NewsArticle


class NewsSource(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None


class NewsArticleOut(BaseModel):
    id: int
    title: str = ""
    description: str = ""
    content: str = ""
    source: NewsSource = Field(default_factory=NewsSource)
    author: Optional[str] = None
    url: str
    url_to_image: Optional[str] = None
    published_at: Optional[datetime] = None
    relevance_categories: List[str] = Field(default_factory=list)
    impact_score: int = Field(0, ge=-100, le=100)
    sentiment_analysis: Optional[dict[str, Any]] = None
    keywords: Optional[List[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def to_article_out(a: NewsArticle) -> NewsArticleOut:
    # ORM keeps source flat (source_id/source_name); the API nests it
    return NewsArticleOut(
        id=a.id,
        title=a.title or "",
        description=a.description or "",
        content=a.content or "",
        source=NewsSource(id=a.source_id, name=a.source_name),
        author=a.author,
        url=a.url,
        url_to_image=a.url_to_image,
        published_at=a.published_at,
        relevance_categories=list(a.relevance_categories or []),
        impact_score=a.impact_score,
        sentiment_analysis=a.sentiment_analysis,
        keywords=a.keywords,
        created_at=a.created_at,
        updated_at=a.updated_at,
    )


class NewsArticleResponse(BaseModel):
    success: bool = True
    data: NewsArticleOut


class NewsListResponse(BaseModel):
    success: bool = True
    total: int
    count: int
    page: int
    limit: int
    has_more: bool
    data: List[NewsArticleOut] = Field(default_factory=list)
