"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from equation_solver import __version__

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Report liveness and whether solving can work with the loaded settings.

    The server starts without an API key, so a missing credential shows up
    here as ``degraded`` rather than as a failed startup.
    """
    settings = request.app.state.settings
    credential = bool(settings.openai_api_key)
    return {
        "status": "healthy" if credential else "degraded",
        "version": __version__,
        "credential_configured": credential,
        "assistant": {
            "model": settings.assistant_model,
            "id": settings.assistant_id,
            "reused": settings.reuse_assistant,
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
