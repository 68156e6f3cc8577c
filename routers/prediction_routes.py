from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from schemas.prediction import PredictionHistoryResponse, PredictionResponse, to_prediction_out
from services.auth import get_setup_user
from services.news.filters import parse_pagination
from services.prediction.synthesizer import PredictionSynthesizer, get_prediction_synthesizer
from services.prediction_service import list_predictions_for_user

router = APIRouter(tags=["predictions"])


# Registered before /{news_id} so "history" is not taken for an article id.
@router.get("/history", response_model=PredictionHistoryResponse)
def prediction_history(
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_setup_user),
):
    page_limit, page_offset = parse_pagination(limit, offset)
    predictions = list_predictions_for_user(db, user.id, page_limit, page_offset)
    return PredictionHistoryResponse(
        count=len(predictions),
        page=page_offset // page_limit + 1,
        limit=page_limit,
        data=[to_prediction_out(p) for p in predictions],
    )


@router.get("/{news_id}", response_model=PredictionResponse)
async def get_prediction(
    news_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_setup_user),
    synthesizer: PredictionSynthesizer = Depends(get_prediction_synthesizer),
):
    prediction, cached = await synthesizer.generate_prediction(db, news_id, user)
    return PredictionResponse(data=prediction, cached=cached)
