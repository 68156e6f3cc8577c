"""initial news impact schema

Revision ID: 5a1c2e9b7d30
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "5a1c2e9b7d30"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("business_industry", sa.String(length=120), nullable=True),
        sa.Column("business_location", sa.String(length=120), nullable=True),
        sa.Column("industry_category", sa.String(length=32), nullable=True),
        sa.Column("setup_completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "news_articles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("source_id", sa.String(length=120), nullable=True),
        sa.Column("source_name", sa.String(length=255), nullable=True),
        sa.Column("author", sa.String(length=255), nullable=True),
        sa.Column("url", sa.String(length=2048), nullable=False),
        sa.Column("url_to_image", sa.String(length=2048), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("relevance_categories", JSON_TYPE, nullable=False),
        sa.Column("impact_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("sentiment_analysis", JSON_TYPE, nullable=True),
        sa.Column("keywords", JSON_TYPE, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_news_articles_id", "news_articles", ["id"], unique=False)
    op.create_index("ix_news_articles_url", "news_articles", ["url"], unique=True)

    op.create_table(
        "predictions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "news_article_id",
            sa.Integer(),
            sa.ForeignKey("news_articles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("industry", sa.String(length=120), nullable=False),
        sa.Column("location", sa.String(length=120), nullable=False),
        sa.Column("overall_impact", sa.Integer(), nullable=False),
        sa.Column("impact_areas", JSON_TYPE, nullable=False),
        sa.Column("timeframes", JSON_TYPE, nullable=False),
        sa.Column("confidence_level", sa.Integer(), nullable=False),
        sa.Column("recommendations", JSON_TYPE, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("news_article_id", "user_id", name="uq_predictions_article_user"),
    )
    op.create_index("ix_predictions_id", "predictions", ["id"], unique=False)
    op.create_index("ix_predictions_news_article_id", "predictions", ["news_article_id"], unique=False)
    op.create_index("ix_predictions_user_id", "predictions", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_predictions_user_id", table_name="predictions")
    op.drop_index("ix_predictions_news_article_id", table_name="predictions")
    op.drop_index("ix_predictions_id", table_name="predictions")
    op.drop_table("predictions")

    op.drop_index("ix_news_articles_url", table_name="news_articles")
    op.drop_index("ix_news_articles_id", table_name="news_articles")
    op.drop_table("news_articles")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
