# models/user.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database import Base
from services.industry import BusinessProfile


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Always stored lower-cased
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))

    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Business profile
    business_industry: Mapped[str | None] = mapped_column(String(120), nullable=True)
    business_location: Mapped[str | None] = mapped_column(String(120), nullable=True)
    industry_category: Mapped[str | None] = mapped_column(String(32), nullable=True)  # services.industry.IndustryCategory
    setup_completed: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false", nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    predictions = relationship("Prediction", back_populates="user", cascade="all, delete-orphan")

    @property
    def business_profile(self) -> BusinessProfile | None:
        return BusinessProfile.from_fields(
            self.business_industry,
            self.business_location,
            self.industry_category,
        )
