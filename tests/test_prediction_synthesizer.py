import asyncio
import random
import unittest
from unittest.mock import patch

from sqlalchemy.exc import IntegrityError

from tests.support import add_article, add_user, make_session_factory

from models.prediction import Prediction
from services.cache.cache_backend import MemoryTTLCache
from services.errors import NotFoundError, ValidationError
from services.industry import BusinessProfile, IndustryCategory
from services.prediction import templates
from services.prediction.synthesizer import PredictionSynthesizer, calculate_confidence


class AnalyzePredictionTests(unittest.TestCase):
    def setUp(self):
        SessionLocal, self.engine = make_session_factory()
        self.db = SessionLocal()
        self.profile = BusinessProfile.from_fields("Energy", "Texas")

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _synth(self, seed=7):
        return PredictionSynthesizer(cache=MemoryTTLCache(), rng=random.Random(seed))

    def test_structure_and_bounds(self):
        for base in (-100, -60, -30, 0, 30, 60, 100):
            with self.subTest(base=base):
                article = add_article(self.db, url=f"https://example.com/{base}", impact_score=base)
                analysis = self._synth().analyze_prediction(article, self.profile)

                self.assertEqual(analysis.overall_impact, base)
                self.assertEqual(
                    [a.name for a in analysis.impact_areas],
                    ["Financial", "Operational", "Market", "Reputation"],
                )
                self.assertEqual(
                    [t.period for t in analysis.timeframes],
                    ["short-term", "medium-term", "long-term"],
                )
                self.assertGreaterEqual(len(analysis.recommendations), 2)
                for value in [a.score for a in analysis.impact_areas] + [t.impact for t in analysis.timeframes]:
                    self.assertGreaterEqual(value, -100)
                    self.assertLessEqual(value, 100)
                self.assertGreaterEqual(analysis.confidence_level, 30)
                self.assertLessEqual(analysis.confidence_level, 90)

    def test_area_jitter_ranges(self):
        article = add_article(self.db, impact_score=0)
        synth = self._synth(seed=1)
        ranges = {"Financial": (-10, 10), "Operational": (-15, 15), "Market": (-5, 20), "Reputation": (-20, 5)}
        for _ in range(50):
            for area in synth.analyze_prediction(article, self.profile).impact_areas:
                lo, hi = ranges[area.name]
                self.assertGreaterEqual(area.score, lo)
                self.assertLessEqual(area.score, hi)

    def test_timeframe_jitter_ranges(self):
        article = add_article(self.db, impact_score=0)
        synth = self._synth(seed=2)
        ranges = {"short-term": (0, 10), "medium-term": (-10, 0), "long-term": (-20, -5)}
        for _ in range(50):
            for timeframe in synth.analyze_prediction(article, self.profile).timeframes:
                lo, hi = ranges[timeframe.period]
                self.assertGreaterEqual(timeframe.impact, lo)
                self.assertLessEqual(timeframe.impact, hi)

    def test_timeframes_clamped_at_extremes(self):
        top = add_article(self.db, url="https://example.com/top", impact_score=100)
        bottom = add_article(self.db, url="https://example.com/bottom", impact_score=-100)
        synth = self._synth(seed=4)
        for _ in range(20):
            short, medium, long_term = synth.analyze_prediction(top, self.profile).timeframes
            self.assertEqual(short.impact, 100)
            self.assertLessEqual(medium.impact, 100)
            self.assertGreaterEqual(medium.impact, 90)
            self.assertLessEqual(long_term.impact, 95)

            short, medium, long_term = synth.analyze_prediction(bottom, self.profile).timeframes
            self.assertLessEqual(short.impact, -90)
            self.assertEqual(medium.impact, -100)
            self.assertEqual(long_term.impact, -100)

    def test_same_seed_gives_same_analysis(self):
        article = add_article(self.db, impact_score=42)
        first = self._synth(seed=3).analyze_prediction(article, self.profile)
        second = self._synth(seed=3).analyze_prediction(article, self.profile)
        self.assertEqual(first, second)

    def test_descriptions_and_recommendations_for_strong_positive(self):
        article = add_article(self.db, impact_score=75)
        analysis = self._synth().analyze_prediction(article, self.profile)

        self.assertIn("significant positive financial impact on Energy businesses", analysis.impact_areas[0].description)
        directional, industry = analysis.recommendations
        self.assertEqual((directional.title, directional.priority), ("Capitalize on positive trend", "high"))
        self.assertEqual(industry.title, "Industry-specific strategy for Energy")
        self.assertEqual(industry.priority, "high")
        self.assertIn("positive development in the Energy sector", industry.description)

    def test_industry_template_follows_category(self):
        article = add_article(self.db, impact_score=-30)
        profile = BusinessProfile("Neighborhood store", "Ohio", IndustryCategory.RETAIL)
        _, industry = self._synth().analyze_prediction(article, profile).recommendations
        self.assertEqual(industry.description, templates.INDUSTRY_RECOMMENDATIONS[IndustryCategory.RETAIL][1])
        self.assertEqual(industry.priority, "medium")

    def test_timeframe_description_uses_its_own_impact(self):
        text = templates.timeframe_description("long-term", -70)
        self.assertIn("negative impact will likely create lasting changes", text)
        self.assertIn("resilience building", text)
        self.assertIn("begin to stabilize", templates.timeframe_description("medium-term", 10))

    def test_confidence_levels(self):
        plain = add_article(self.db, url="https://example.com/plain", relevance_categories=["Retail"])
        self.assertEqual(calculate_confidence(plain, "Energy"), 60)

        best = add_article(
            self.db,
            url="https://example.com/best",
            relevance_categories=["Energy"],
            source_name="Reuters",
            content="x" * 501,
        )
        self.assertEqual(calculate_confidence(best, "Energy"), 90)


class GeneratePredictionTests(unittest.TestCase):
    def setUp(self):
        SessionLocal, self.engine = make_session_factory()
        self.db = SessionLocal()
        self.user = add_user(self.db)
        self.article = add_article(self.db, impact_score=30)
        self.cache = MemoryTTLCache()
        self.synth = PredictionSynthesizer(cache=self.cache, rng=random.Random(11))

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _generate(self, article_id, user, synth=None):
        return asyncio.run((synth or self.synth).generate_prediction(self.db, article_id, user))

    def test_first_call_creates_then_reuses(self):
        first, first_cached = self._generate(self.article.id, self.user)
        self.assertFalse(first_cached)
        self.assertEqual(first.news_article_id, self.article.id)
        self.assertEqual(first.news_article.title, "Grid upgrade announced")
        self.assertEqual((first.industry, first.location), ("Energy", "Texas"))

        # A fresh synthesizer (empty cache, different rng) still returns the stored row.
        other = PredictionSynthesizer(cache=MemoryTTLCache(), rng=random.Random(99))
        second, second_cached = self._generate(str(self.article.id), self.user, synth=other)
        self.assertTrue(second_cached)
        self.assertEqual(second.id, first.id)
        self.assertEqual(second.impact_areas, first.impact_areas)
        self.assertEqual(self.db.query(Prediction).count(), 1)

    def test_cache_hit(self):
        first, _ = self._generate(self.article.id, self.user)
        again, cached = self._generate(self.article.id, self.user)
        self.assertTrue(cached)
        self.assertEqual(again, first)
        self.assertIsNotNone(self.cache.get(f"prediction-{self.article.id}-{self.user.id}"))

    def test_missing_article_id(self):
        with self.assertRaises(ValidationError) as ctx:
            self._generate("", self.user)
        self.assertIn("Article ID is required", ctx.exception.message)

    def test_out_of_range_article_id(self):
        for bad in ("99999999999999999999999", "0", "-3", str(2**31)):
            with self.subTest(article_id=bad), self.assertRaises(ValidationError) as ctx:
                self._generate(bad, self.user)
            self.assertEqual(ctx.exception.message, "Failed to generate prediction: Invalid article ID")

    def test_missing_user(self):
        with self.assertRaises(ValidationError):
            self._generate(self.article.id, None)

    def test_unknown_article(self):
        with self.assertRaises(NotFoundError) as ctx:
            self._generate(self.article.id + 500, self.user)
        self.assertEqual(ctx.exception.message, "Failed to generate prediction: News article not found")

    def test_incomplete_profile_writes_nothing(self):
        user = add_user(self.db, email="noind@example.com", industry=None, setup_completed=False)
        with self.assertRaises(ValidationError):
            self._generate(self.article.id, user)
        self.assertEqual(self.db.query(Prediction).count(), 0)
        self.assertEqual(len(self.cache), 0)

    def test_concurrent_insert_returns_winning_row(self):
        winner, _ = self._generate(self.article.id, self.user)
        self.db.expire_all()

        # Simulate losing the race: the pre-insert lookup misses, the insert collides.
        with patch("services.prediction.synthesizer.get_prediction_for", return_value=None):
            synth = PredictionSynthesizer(cache=MemoryTTLCache(), rng=random.Random(5))
            loser, cached = self._generate(self.article.id, self.user, synth=synth)

        self.assertEqual(loser.id, winner.id)
        self.assertEqual(self.db.query(Prediction).count(), 1)

    def test_unique_constraint_enforced(self):
        self._generate(self.article.id, self.user)
        self.db.add(
            Prediction(
                news_article_id=self.article.id,
                user_id=self.user.id,
                industry="Energy",
                location="Texas",
                overall_impact=0,
                impact_areas=[],
                timeframes=[],
                recommendations=[],
                confidence_level=60,
            )
        )
        with self.assertRaises(IntegrityError):
            self.db.commit()
        self.db.rollback()


if __name__ == "__main__":
    unittest.main()
