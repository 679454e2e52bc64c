# qa_copilot/api/health.py
"""
Liveness and readiness.
"""
from datetime import datetime, timezone
from fastapi import APIRouter

from qa_copilot.core.config import settings
from qa_copilot.llm.adapter import get_registry

router = APIRouter(tags=["Health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/healthz")
async def healthz():
    return {"ok": True, "timestamp": _now()}


@router.get("/api/health")
async def api_health():
    """Service status plus which providers can serve requests without a user key."""
    keys = {
        provider.id.value: bool(settings.llm.default_key_for(provider.id.value))
        for provider in get_registry().all()
    }
    return {
        "status": "healthy",
        "service": "qa-copilot",
        "defaultKeys": keys,
        "timestamp": _now(),
    }
