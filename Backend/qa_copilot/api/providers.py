# qa_copilot/api/providers.py
"""
LLM provider discovery routes.
"""
from fastapi import APIRouter
from pydantic import BaseModel
from typing import List

from qa_copilot.core.config import settings
from qa_copilot.llm.adapter import get_registry

router = APIRouter(prefix="/api/providers", tags=["Providers"])


class ProviderInfo(BaseModel):
    id: str
    name: str
    model: str
    hasDefaultKey: bool
    supportsImages: bool
    supportsSystemInstruction: bool
    selfCorrection: bool
    jsonModeActions: List[str]


@router.get("")
async def list_providers():
    """
    List registered providers and what they can do.

    hasDefaultKey tells the client whether a user-supplied key is required.
    """
    providers = []
    for provider in get_registry().all():
        caps = provider.capabilities
        providers.append(ProviderInfo(
            id=provider.id.value,
            name=provider.display_name,
            model=provider.model,
            hasDefaultKey=bool(settings.llm.default_key_for(provider.id.value)),
            supportsImages=caps.supports_images,
            supportsSystemInstruction=caps.supports_system_instruction,
            selfCorrection=caps.self_correction,
            jsonModeActions=sorted(a.value for a in caps.json_mode_actions),
        ))

    return {
        "providers": [p.model_dump() for p in providers],
        "default_provider": settings.llm.default_provider,
    }
