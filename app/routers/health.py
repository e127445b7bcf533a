"""Health check endpoint."""

from fastapi import APIRouter

from app.config import get_settings
from app.models.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Reports which provider is configured. Never includes credentials.
    """
    settings = get_settings()
    return HealthResponse(
        environment=settings.environment,
        provider=settings.ai.provider_name or "none",
        endpoint_configured=settings.ai.endpoint_configured,
    )
