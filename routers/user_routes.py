from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from schemas.user import BusinessDetailsUpdate, ProfileUpdate, UserResponse, to_user_out
from services.auth import get_current_user
from services.user_service import update_business_details, update_profile

router = APIRouter(tags=["users"])


@router.put("/profile", response_model=UserResponse)
def update_user_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    user = update_profile(
        db,
        user,
        first_name=payload.first_name,
        last_name=payload.last_name,
        password=payload.password,
    )
    return UserResponse(data=to_user_out(user))


@router.patch("/business-details", response_model=UserResponse)
def update_user_business_details(
    payload: BusinessDetailsUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    user = update_business_details(db, user, industry=payload.industry, location=payload.location)
    return UserResponse(data=to_user_out(user))
