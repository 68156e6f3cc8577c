from typing import Optional

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from schemas.news import NewsArticleResponse, NewsListResponse, to_article_out
from services.auth import get_current_user, get_setup_user
from services.errors import NotFoundError
from services.news.filters import filter_articles, paginate, parse_pagination
from services.news.news_service import NewsService, get_news_service
from services.news_article_service import MAX_ARTICLE_ID, MIN_ARTICLE_ID, get_article

router = APIRouter(tags=["news"])


@router.get("", response_model=NewsListResponse)
async def list_news(
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    category: Optional[str] = None,
    impact: Optional[str] = None,
    source: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_setup_user),
    news_service: NewsService = Depends(get_news_service),
):
    page_limit, page_offset = parse_pagination(limit, offset)

    articles = await news_service.get_news(db, user.business_profile)
    filtered = filter_articles(articles, category=category, impact=impact, source=source, search=search)
    page = paginate(filtered, page_limit, page_offset)

    return NewsListResponse(
        total=page.total,
        count=len(page.items),
        page=page.page,
        limit=page.limit,
        has_more=page.has_more,
        data=page.items,
    )


@router.get("/{article_id}", response_model=NewsArticleResponse)
def get_news_article(
    article_id: int = Path(..., ge=MIN_ARTICLE_ID, le=MAX_ARTICLE_ID),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    article = get_article(db, article_id)
    if article is None:
        raise NotFoundError("News article not found")
    return NewsArticleResponse(data=to_article_out(article))
