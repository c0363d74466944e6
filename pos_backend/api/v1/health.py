"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pos_backend import __version__
from pos_backend.core.config import settings
from pos_backend.core.database import check_db_connected, get_db
from pos_backend.schemas.common import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """Liveness plus a SELECT 1; used by load balancers and monitoring."""
    return HealthResponse(
        environment=settings.APP_ENV,
        version=__version__,
        database="connected" if check_db_connected(db) else "disconnected",
    )
