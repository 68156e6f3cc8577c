# models/prediction.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database import Base
from models.news_article import JsonColumn


class Prediction(Base):
    __tablename__ = "predictions"
    __table_args__ = (
        # One prediction per (article, user); concurrent first requests collide here.
        UniqueConstraint("news_article_id", "user_id", name="uq_predictions_article_user"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    news_article_id: Mapped[int] = mapped_column(ForeignKey("news_articles.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    # Profile snapshot at synthesis time
    industry: Mapped[str] = mapped_column(String(120))
    location: Mapped[str] = mapped_column(String(120))

    overall_impact: Mapped[int] = mapped_column(Integer)
    impact_areas: Mapped[list] = mapped_column(JsonColumn)
    timeframes: Mapped[list] = mapped_column(JsonColumn)
    confidence_level: Mapped[int] = mapped_column(Integer)
    recommendations: Mapped[list] = mapped_column(JsonColumn)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    news_article = relationship("NewsArticle", back_populates="predictions")
    user = relationship("User", back_populates="predictions")
