# services/user_service.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.user import User
from services.auth import get_password_hash, verify_password
from services.errors import AuthError, ValidationError
from services.industry import resolve_industry_category

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MSG = "User with this email already exists"
INVALID_CREDENTIALS_MSG = "Invalid email or password"


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == (email or "").strip().lower()).first()


def create_user(db: Session, *, email: str, password: str, first_name: str, last_name: str) -> User:
    if get_user_by_email(db, email):
        raise ValidationError(DUPLICATE_EMAIL_MSG)

    user = User(
        email=email.strip().lower(),
        hashed_password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        setup_completed=False,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError(DUPLICATE_EMAIL_MSG)
    db.refresh(user)
    logger.info("user_registered user_id=%s", user.id)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        raise AuthError(INVALID_CREDENTIALS_MSG)
    return user


def update_profile(
    db: Session,
    user: User,
    *,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    password: Optional[str] = None,
) -> User:
    if first_name is not None:
        user.first_name = first_name.strip()
    if last_name is not None:
        user.last_name = last_name.strip()
    if password is not None:
        user.hashed_password = get_password_hash(password)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_business_details(db: Session, user: User, *, industry: str, location: str) -> User:
    """Save industry/location, resolve the industry category and mark setup complete."""
    user.business_industry = industry.strip()
    user.business_location = location.strip()
    user.industry_category = resolve_industry_category(user.business_industry).value
    user.setup_completed = True
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("business_details_updated user_id=%s category=%s", user.id, user.industry_category)
    return user
