import asyncio
import unittest

from tests.support import FakeNewsClient, FakeSentimentClient, make_session_factory, raw_item

from models.news_article import NewsArticle
from services.cache.cache_backend import MemoryTTLCache
from services.errors import StoreError, UpstreamServiceError, ValidationError
from services.industry import BusinessProfile
from services.news.impact_scorer import ImpactScorer
from services.news.news_service import NewsService

PROFILE = BusinessProfile.from_fields("Energy", "Texas")


class NewsServiceTests(unittest.TestCase):
    def setUp(self):
        SessionLocal, self.engine = make_session_factory()
        self.db = SessionLocal()
        self.sentiment = FakeSentimentClient(score=0.5)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _service(self, news_client, cache=None):
        scorer = ImpactScorer(sentiment_client=self.sentiment, cache=MemoryTTLCache())
        return NewsService(news_client=news_client, scorer=scorer, cache=cache or MemoryTTLCache())

    def test_incomplete_profile_is_rejected_before_fetching(self):
        news = FakeNewsClient([raw_item()])
        with self.assertRaises(ValidationError):
            asyncio.run(self._service(news).get_news(self.db, None))
        self.assertEqual(news.queries, [])

    def test_fetch_scores_and_persists(self):
        news = FakeNewsClient([
            raw_item("https://example.com/1"),
            raw_item("https://example.com/2", title="Unrelated", description="Nothing"),
            raw_item(None),
        ])
        articles = asyncio.run(self._service(news).get_news(self.db, PROFILE))

        self.assertEqual(news.queries, ["Energy Texas"])
        self.assertEqual([a.url for a in articles], ["https://example.com/1", "https://example.com/2"])
        self.assertEqual([a.impact_score for a in articles], [75, 50])
        self.assertEqual(self.db.query(NewsArticle).count(), 2)
        self.assertEqual(articles[0].source.name, "Reuters")

    def test_repeat_fetch_does_not_duplicate_rows(self):
        items = [raw_item("https://example.com/1")]
        asyncio.run(self._service(FakeNewsClient(items)).get_news(self.db, PROFILE))
        asyncio.run(self._service(FakeNewsClient(items)).get_news(self.db, PROFILE))
        self.assertEqual(self.db.query(NewsArticle).count(), 1)

    def test_second_call_served_from_cache(self):
        news = FakeNewsClient([raw_item()])
        service = self._service(news)

        async def _run():
            first = await service.get_news(self.db, PROFILE)
            second = await service.get_news(self.db, PROFILE)
            return first, second

        first, second = asyncio.run(_run())
        self.assertEqual(len(news.queries), 1)
        self.assertEqual([a.id for a in first], [a.id for a in second])

    def test_upstream_failure_is_prefixed_and_nothing_saved(self):
        news = FakeNewsClient(error=UpstreamServiceError("Invalid response from news API"))
        with self.assertRaises(UpstreamServiceError) as ctx:
            asyncio.run(self._service(news).get_news(self.db, PROFILE))
        self.assertEqual(ctx.exception.message, "Failed to fetch news articles: Invalid response from news API")
        self.assertEqual(self.db.query(NewsArticle).count(), 0)

    def test_store_failure_aborts(self):
        self.db.close()
        self.engine.dispose()

        class _BrokenSession:
            def query(self, *args, **kwargs):
                from sqlalchemy.exc import OperationalError

                raise OperationalError("SELECT", {}, Exception("db down"))

            def rollback(self):
                pass

        news = FakeNewsClient([raw_item()])
        with self.assertRaises(StoreError) as ctx:
            asyncio.run(self._service(news).get_news(_BrokenSession(), PROFILE))
        self.assertTrue(ctx.exception.message.startswith("Failed to fetch news articles: "))

    def test_sentiment_failure_keeps_article_with_zero_score(self):
        self.sentiment.error = RuntimeError("sentiment down")
        articles = asyncio.run(self._service(FakeNewsClient([raw_item()])).get_news(self.db, PROFILE))
        self.assertEqual([a.impact_score for a in articles], [0])


if __name__ == "__main__":
    unittest.main()
