# services/news/newsapi_client.py
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, TypedDict

import httpx

from services.errors import UpstreamServiceError

logger = logging.getLogger(__name__)

NEWS_API_URL = os.getenv("NEWS_API_URL", "https://newsapi.org/v2").rstrip("/")
NEWS_API_KEY = os.getenv("NEWS_API_KEY", "")
NEWS_API_TIMEOUT_SEC = float(os.getenv("NEWS_API_TIMEOUT_SEC", "10"))
NEWS_PAGE_SIZE = int(os.getenv("NEWS_PAGE_SIZE", "20"))


class NewsApiError(UpstreamServiceError):
    """Raised when the news search API fails or returns an unusable body."""


class RawSource(TypedDict, total=False):
    id: Optional[str]
    name: Optional[str]


# -------- Upstream item shape (/everything) --------
class RawArticle(TypedDict, total=False):
    title: Optional[str]
    description: Optional[str]
    content: Optional[str]
    source: RawSource
    author: Optional[str]
    url: Optional[str]
    urlToImage: Optional[str]
    publishedAt: Optional[str]


class NewsApiClient:
    def __init__(
        self,
        *,
        base_url: str = NEWS_API_URL,
        api_key: str = NEWS_API_KEY,
        timeout_s: float = NEWS_API_TIMEOUT_SEC,
        page_size: int = NEWS_PAGE_SIZE,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            logger.error("NEWS_API_KEY is not set; news searches will be rejected upstream")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_s = timeout_s
        self.page_size = page_size
        self._client = client

    def _params(self, query: str) -> Dict[str, Any]:
        return {
            "q": query,
            "sortBy": "publishedAt",
            "language": "en",
            "pageSize": self.page_size,
        }

    async def _get(self, client: httpx.AsyncClient, query: str) -> httpx.Response:
        return await client.get(
            f"{self.base_url}/everything",
            params=self._params(query),
            headers={"X-Api-Key": self.api_key},
        )

    async def search_everything(self, query: str) -> List[RawArticle]:
        try:
            if self._client is not None:
                response = await self._get(self._client, query)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_s)) as client:
                    response = await self._get(client, query)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as exc:
            raise NewsApiError(f"News API request timed out: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "news_api_error_status status=%s body=%s",
                exc.response.status_code,
                exc.response.text[:300],
            )
            raise NewsApiError(f"News API returned {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise NewsApiError(f"News API request failed: {exc}") from exc
        except ValueError as exc:
            raise NewsApiError("News API returned a non-JSON body") from exc

        articles = body.get("articles") if isinstance(body, dict) else None
        if not isinstance(articles, list):
            raise NewsApiError("Invalid response from news API")

        return [a for a in articles if isinstance(a, dict)]
