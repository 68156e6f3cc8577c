from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from middleware.rate_limit import AUTH_RATE_LIMIT, limiter
from models.user import User
from schemas.user import AuthPayload, AuthResponse, UserCreate, UserLogin, UserResponse, to_user_out
from services.auth import create_access_token, get_current_user
from services.user_service import authenticate_user, create_user

router = APIRouter(tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(data=AuthPayload(user=to_user_out(user), token=create_access_token(user.id)))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_RATE_LIMIT)
def register(request: Request, payload: UserCreate, db: Session = Depends(get_db)):
    user = create_user(
        db,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(AUTH_RATE_LIMIT)
def login(request: Request, payload: UserLogin, db: Session = Depends(get_db)):
    user = authenticate_user(db, payload.email, payload.password)
    return _auth_response(user)


@router.get("/profile", response_model=UserResponse)
def profile(current_user: User = Depends(get_current_user)):
    return UserResponse(data=to_user_out(current_user))
