# services/sentiment/client.py
from __future__ import annotations

import logging
import math
import os
from typing import Any, Dict, Optional

import httpx

from services.errors import UpstreamServiceError

logger = logging.getLogger(__name__)

SENTIMENT_API_URL = os.getenv("SENTIMENT_API_URL", "https://api.repustate.com/v4").rstrip("/")
SENTIMENT_API_KEY = os.getenv("SENTIMENT_API_KEY", os.getenv("REPUSTATE_API_KEY", ""))
SENTIMENT_TIMEOUT_SEC = float(os.getenv("SENTIMENT_TIMEOUT_SEC", "10"))


class SentimentClientError(UpstreamServiceError):
    """Raised when the sentiment API fails, times out or returns an unusable body."""


def _parse_score(body: Any) -> float:
    if not isinstance(body, dict) or "score" not in body:
        raise SentimentClientError("Invalid sentiment analysis response")
    raw = body["score"]
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise SentimentClientError("Invalid sentiment analysis response")
    score = float(raw)
    if math.isnan(score):
        raise SentimentClientError("Invalid sentiment analysis response")
    return max(-1.0, min(1.0, score))


class SentimentClient:
    """POST {base_url}/sentiment {text, lang} -> {score in [-1, 1]}."""

    def __init__(
        self,
        *,
        base_url: str = SENTIMENT_API_URL,
        api_key: str = SENTIMENT_API_KEY,
        timeout_s: float = SENTIMENT_TIMEOUT_SEC,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            logger.error("SENTIMENT_API_KEY is not set; sentiment calls will be rejected upstream")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_s = timeout_s
        self._client = client

    def _headers(self) -> Dict[str, str]:
        return {"X-API-KEY": self.api_key}

    async def _post(self, client: httpx.AsyncClient, payload: Dict[str, Any]) -> httpx.Response:
        return await client.post(f"{self.base_url}/sentiment", json=payload, headers=self._headers())

    async def score(self, text: str, *, lang: str = "en") -> float:
        payload = {"text": text, "lang": lang}
        try:
            if self._client is not None:
                response = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout_s)) as client:
                    response = await self._post(client, payload)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as exc:
            raise SentimentClientError(f"Sentiment request timed out: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            raise SentimentClientError(
                f"Sentiment API returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SentimentClientError(f"Sentiment request failed: {exc}") from exc
        except ValueError as exc:
            raise SentimentClientError("Sentiment API returned a non-JSON body") from exc

        return _parse_score(body)
