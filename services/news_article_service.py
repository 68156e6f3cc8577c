# services/news_article_service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from dateutil import parser
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.news_article import NewsArticle
from services.errors import StoreError
from services.industry import BusinessProfile

logger = logging.getLogger(__name__)

# Integer primary key range; ids outside it can never match a row
MIN_ARTICLE_ID = 1
MAX_ARTICLE_ID = 2**31 - 1


def _parse_datetime(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = parser.parse(str(value))
        except (ValueError, OverflowError):
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _merge_categories(existing: Optional[Iterable[str]], new: str) -> List[str]:
    out: List[str] = []
    for cat in list(existing or []) + [new]:
        if isinstance(cat, str) and cat and cat not in out:
            out.append(cat)
    return out


def get_article(db: Session, article_id: int) -> Optional[NewsArticle]:
    try:
        return db.query(NewsArticle).filter(NewsArticle.id == article_id).first()
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to load news article: {exc}") from exc


def get_article_by_url(db: Session, url: str) -> Optional[NewsArticle]:
    return db.query(NewsArticle).filter(NewsArticle.url == url).first()


def upsert_article(
    db: Session,
    raw: Mapping[str, Any],
    impact_score: int,
    profile: BusinessProfile,
) -> NewsArticle:
    """
    Insert a news item keyed on url, or update the existing row in place.
    The profile's industry is added to relevance_categories; impact_score is overwritten.
    """
    url = (raw.get("url") or "").strip()
    if not url:
        raise ValueError("news item has no url")

    source = raw.get("source")
    if not isinstance(source, Mapping):
        source = {}
    fields = {
        "title": raw.get("title") or "",
        "description": raw.get("description") or "",
        "content": raw.get("content") or "",
        "source_id": source.get("id"),
        "source_name": source.get("name"),
        "author": raw.get("author"),
        "url_to_image": raw.get("urlToImage"),
        "published_at": _parse_datetime(raw.get("publishedAt")),
        "impact_score": int(impact_score),
    }

    def _apply(article: NewsArticle) -> None:
        for key, value in fields.items():
            setattr(article, key, value)
        article.relevance_categories = _merge_categories(article.relevance_categories, profile.industry)

    try:
        article = get_article_by_url(db, url)
        if article is None:
            article = NewsArticle(url=url, relevance_categories=[profile.industry], **fields)
            db.add(article)
            try:
                db.commit()
            except IntegrityError:
                # Another request inserted the same url first; update that row instead.
                db.rollback()
                article = get_article_by_url(db, url)
                if article is None:
                    raise
                _apply(article)
                db.commit()
        else:
            _apply(article)
            db.commit()
        db.refresh(article)
        return article
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("news_article_upsert_failed")
        raise StoreError(f"Failed to save news article: {exc}") from exc
