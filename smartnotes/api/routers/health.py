"""Health (sin auth)."""
from fastapi import APIRouter, status

from smartnotes.api.schemas.health import HealthOut


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
def health() -> HealthOut:
    return HealthOut(status="ok")
