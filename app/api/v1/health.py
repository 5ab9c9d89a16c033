"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Service status and whether the account/catalog store is reachable."""
    db_status = "connected" if check_db_connected(db) else "disconnected"
    return HealthResponse(
        environment=get_settings().APP_ENV,
        database=db_status,
    )
