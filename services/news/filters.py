from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Sequence, TypeVar

from schemas.news import NewsArticleOut
from services.errors import ValidationError

T = TypeVar("T")

MAX_PAGE_LIMIT = 50
DEFAULT_PAGE_LIMIT = 10

# Impact bands for the feed filter (score thresholds)
HIGH_IMPACT_MIN = 80
MEDIUM_IMPACT_MIN = 60

ALL = "all"


def _parse_int(value: Any, default: int) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def parse_pagination(limit: Any, offset: Any) -> tuple[int, int]:
    """Validate limit (1-50) and offset (>= 0); raises ValidationError."""
    parsed_limit = _parse_int(limit, DEFAULT_PAGE_LIMIT)
    parsed_offset = _parse_int(offset, 0)

    if parsed_limit is None or parsed_limit < 1 or parsed_limit > MAX_PAGE_LIMIT:
        raise ValidationError(f"Invalid limit parameter. Must be between 1 and {MAX_PAGE_LIMIT}")
    if parsed_offset is None or parsed_offset < 0:
        raise ValidationError("Invalid offset parameter. Must be a non-negative integer")

    return parsed_limit, parsed_offset


def matches_impact(score: int, impact: str) -> bool:
    if impact == "high":
        return score >= HIGH_IMPACT_MIN
    if impact == "medium":
        return MEDIUM_IMPACT_MIN <= score < HIGH_IMPACT_MIN
    if impact == "low":
        return score < MEDIUM_IMPACT_MIN
    return True


def filter_articles(
    articles: Sequence[NewsArticleOut],
    *,
    category: Optional[str] = None,
    impact: Optional[str] = None,
    source: Optional[str] = None,
    search: Optional[str] = None,
) -> List[NewsArticleOut]:
    out = list(articles)

    if category and category != ALL:
        out = [a for a in out if category in a.relevance_categories]

    if impact and impact != ALL:
        out = [a for a in out if matches_impact(a.impact_score, impact)]

    if source and source != ALL:
        out = [a for a in out if a.source.name == source]

    if search:
        needle = search.lower()
        out = [
            a for a in out
            if needle in (a.title or "").lower() or needle in (a.description or "").lower()
        ]

    return out


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    total: int
    page: int
    limit: int
    has_more: bool


def paginate(items: Sequence[T], limit: int, offset: int) -> Page[T]:
    total = len(items)
    return Page(
        items=list(items[offset: offset + limit]),
        total=total,
        page=offset // limit + 1,
        limit=limit,
        has_more=offset + limit < total,
    )
