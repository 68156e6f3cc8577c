import os
from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["health"])

APP_ENV = os.getenv("APP_ENV", "development")


@router.get("")
def health():
    return {
        "status": "ok",
        "message": "Server is running",
        "env": APP_ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
