# qa_copilot/llm/adapter.py
"""
Provider registry - maps a wire provider id to its adapter instance.

The orchestrator asks the registry for an adapter and then talks to it only
through the LLMProvider interface and its capabilities; no provider-name
switches live outside this module.

NOTE: No fallback between providers - if the selected provider fails, the
request fails.
"""
from typing import Dict, Iterable, List, Optional, Union

from qa_copilot.core.config import settings
from qa_copilot.core.constants import ProviderId
from qa_copilot.core.logging import log

from .providers import GeminiProvider, LLMProvider, OpenAIProvider


class ProviderRegistry:
    def __init__(self, providers: Optional[Iterable[LLMProvider]] = None):
        if providers is None:
            providers = [
                OpenAIProvider(model=settings.llm.openai_model, timeout=settings.llm.request_timeout),
                GeminiProvider(model=settings.llm.gemini_model, timeout=settings.llm.request_timeout),
            ]
        self._providers: Dict[ProviderId, LLMProvider] = {p.id: p for p in providers}
        log("REGISTRY", f"Registered providers: {[p.value for p in self._providers]}")

    def get(self, provider: Union[ProviderId, str]) -> LLMProvider:
        provider_id = ProviderId(provider)
        try:
            return self._providers[provider_id]
        except KeyError:
            raise LookupError(f"Provider not registered: {provider_id.value}")

    def all(self) -> List[LLMProvider]:
        return list(self._providers.values())


# Singleton instance
_registry: Optional[ProviderRegistry] = None


def get_registry() -> ProviderRegistry:
    global _registry
    if _registry is None:
        _registry = ProviderRegistry()
    return _registry
