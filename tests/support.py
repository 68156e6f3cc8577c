"""Shared fixtures for the unittest suites: in-memory database, fakes for upstream clients."""
import os
from typing import Any, Dict, List, Optional

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base
import models  # noqa: F401  registers every table on Base.metadata
from models.news_article import NewsArticle
from models.user import User
from services.industry import resolve_industry_category


def make_session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine), engine


def add_user(
    db,
    *,
    email: str = "owner@example.com",
    industry: Optional[str] = "Energy",
    location: Optional[str] = "Texas",
    setup_completed: bool = True,
) -> User:
    user = User(
        email=email,
        hashed_password="not-a-real-hash",
        first_name="Dana",
        last_name="Owner",
        business_industry=industry,
        business_location=location,
        industry_category=resolve_industry_category(industry).value if industry else None,
        setup_completed=setup_completed,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_article(
    db,
    *,
    url: str = "https://example.com/a",
    impact_score: int = 0,
    relevance_categories: Optional[List[str]] = None,
    source_name: Optional[str] = "Local Wire",
    content: str = "short body",
    title: str = "Grid upgrade announced",
) -> NewsArticle:
    article = NewsArticle(
        title=title,
        description="",
        content=content,
        url=url,
        source_name=source_name,
        impact_score=impact_score,
        relevance_categories=relevance_categories if relevance_categories is not None else [],
    )
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


def raw_item(url: Optional[str] = "https://example.com/a", **overrides: Any) -> Dict[str, Any]:
    item = {
        "title": "Texas Energy firms expand",
        "description": "Producers add capacity",
        "content": "Full article body",
        "source": {"id": "reuters", "name": "Reuters"},
        "author": "Staff",
        "url": url,
        "urlToImage": None,
        "publishedAt": "2024-05-01T12:00:00Z",
    }
    item.update(overrides)
    return item


class FakeSentimentClient:
    def __init__(self, score: float = 0.5, error: Optional[Exception] = None):
        self.score_value = score
        self.error = error
        self.calls: List[str] = []

    async def score(self, text: str, *, lang: str = "en") -> float:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.score_value


class FakeNewsClient:
    def __init__(self, items: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.items = items or []
        self.error = error
        self.queries: List[str] = []

    async def search_everything(self, query: str):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.items)
