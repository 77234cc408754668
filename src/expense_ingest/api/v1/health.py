from fastapi import APIRouter, Depends

from expense_ingest.config import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Basic health check."""
    return {"status": "ok"}


@router.get("/health/ready")
async def health_ready(settings: Settings = Depends(get_settings)):
    """Readiness check with the active ingestion options."""
    return {
        "status": "ready",
        "llm_fallback": "enabled" if settings.llm_fallback_enabled else "disabled",
    }
