from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from models.prediction import Prediction
from schemas.prediction import PredictionAnalysis
from services.errors import StoreError
from services.industry import BusinessProfile

logger = logging.getLogger(__name__)


def get_prediction_for(db: Session, article_id: int, user_id: int) -> Optional[Prediction]:
    try:
        return (
            db.query(Prediction)
            .options(selectinload(Prediction.news_article))
            .filter(Prediction.news_article_id == article_id, Prediction.user_id == user_id)
            .first()
        )
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to load prediction: {exc}") from exc


def create_prediction(
    db: Session,
    article_id: int,
    user_id: int,
    profile: BusinessProfile,
    analysis: PredictionAnalysis,
) -> Prediction:
    """
    Insert the prediction for (article, user).
    When a concurrent request inserted it first, the stored row wins and is returned.
    """
    data = analysis.model_dump(mode="json")
    prediction = Prediction(
        news_article_id=article_id,
        user_id=user_id,
        industry=profile.industry,
        location=profile.location,
        **data,
    )
    try:
        db.add(prediction)
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = get_prediction_for(db, article_id, user_id)
        if existing is None:
            raise StoreError("Failed to save prediction: integrity error")
        logger.info("prediction_insert_conflict article_id=%s user_id=%s", article_id, user_id)
        return existing
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("prediction_insert_failed article_id=%s", article_id)
        raise StoreError(f"Failed to save prediction: {exc}") from exc

    db.refresh(prediction)
    return prediction


def list_predictions_for_user(db: Session, user_id: int, limit: int, offset: int) -> List[Prediction]:
    try:
        return (
            db.query(Prediction)
            .options(selectinload(Prediction.news_article))
            .filter(Prediction.user_id == user_id)
            .order_by(Prediction.created_at.desc(), Prediction.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to load predictions: {exc}") from exc
