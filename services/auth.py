from datetime import datetime, timedelta, timezone
import os
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from services.errors import AuthError, ValidationError

# ========================
# Config
# ========================

# Load from env in prod; fall back only for local dev
SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-in-prod")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "30"))

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# ========================
# Password helpers
# ========================

def verify_password(plain: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

# ========================
# JWT helpers
# ========================

def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))
    to_encode = {"sub": str(user_id), "iat": int(now.timestamp()), "exp": int(expire.timestamp())}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode & verify JWT. Raises AuthError on failure.
    """
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthError("Not authorized, token failed")

def get_bearer_token(request: Request) -> Optional[str]:
    auth = request.headers.get("Authorization") or ""
    if not auth.lower().startswith("bearer "):
        return None
    token = auth.split(" ", 1)[1].strip()
    return token or None

def token_subject(request: Request) -> Optional[str]:
    """`sub` claim of a valid bearer token, else None. Used for rate-limit keys."""
    token = get_bearer_token(request)
    if not token:
        return None
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    sub = payload.get("sub")
    return str(sub) if sub else None

# ========================
# User dependencies
# ========================

def _get_user_by_sub(db: Session, sub: Any) -> User:
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise AuthError("Not authorized, invalid token")
    user = db.get(User, user_id)
    if not user:
        raise AuthError("Not authorized, user not found")
    return user

def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = get_bearer_token(request)
    if not token:
        raise AuthError("Not authorized, no token")
    payload = decode_access_token(token)
    sub = payload.get("sub")
    if not sub:
        raise AuthError("Not authorized, invalid token")
    return _get_user_by_sub(db, sub)

SETUP_REQUIRED_MSG = "Please complete your business profile setup first"

def get_setup_user(user: User = Depends(get_current_user)) -> User:
    """Current user, required to have completed business details."""
    if not user.setup_completed:
        raise ValidationError(SETUP_REQUIRED_MSG)
    return user
