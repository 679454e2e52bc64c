# qa_copilot/orchestration/orchestrator.py
"""
Generation Orchestrator - the request pipeline.

    build prompt -> provider call -> [self-correction] -> normalize

Strictly sequential, single attempt per call, no shared mutable state. The
orchestrator never branches on a provider name: it reads the adapter's
capabilities instead.
"""
from typing import Optional

from qa_copilot.core.exceptions import MalformedResponseError
from qa_copilot.core.logging import log
from qa_copilot.llm.adapter import ProviderRegistry, get_registry
from qa_copilot.models.request import GenerationRequest
from qa_copilot.models.result import GenerationOutcome

from .normalizer import normalize
from .prompt_builder import build_prompt
from .self_correction import self_correct, should_self_correct


class GenerationOrchestrator:

    def __init__(self, registry: Optional[ProviderRegistry] = None):
        self.registry = registry or get_registry()

    async def run(self, request: GenerationRequest) -> GenerationOutcome:
        """
        Execute one logical action.

        Raises:
            MissingInputError, AuthenticationError, QuotaExceededError,
            ProviderError, MalformedResponseError
        """
        provider = self.registry.get(request.provider)
        action = request.action

        bundle = build_prompt(request, include_images=provider.capabilities.supports_images)
        api_key = request.api_key()

        log("GENERATE", f"{action.value} via {provider.display_name} (framework={request.framework})")
        draft = await provider.invoke(bundle, api_key)

        if not should_self_correct(provider, action):
            return normalize(action, draft)

        reviewed = await self_correct(provider, draft, request, api_key)
        if reviewed is draft:
            return normalize(action, draft)

        try:
            return normalize(action, reviewed)
        except MalformedResponseError as e:
            # The review pass may not make a parseable draft unparseable
            log("SELF-CORRECT", f"⚠️ Reviewed output unusable ({e.message}), using draft")
            return normalize(action, draft)
