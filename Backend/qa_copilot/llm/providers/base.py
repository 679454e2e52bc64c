# qa_copilot/llm/providers/base.py
"""
Provider adapter interface.

An adapter turns a PromptBundle into its provider's native HTTP request,
issues it, and pulls the raw text back out of the native response. It never
interprets that text; normalization happens downstream.

Upstream error shapes are translated here, at the boundary, into the typed
hierarchy in qa_copilot.core.exceptions.
"""
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

import aiohttp

from qa_copilot.core.constants import Action, ProviderId
from qa_copilot.core.exceptions import AuthenticationError, ProviderError, QACopilotError, QuotaExceededError
from qa_copilot.core.logging import log
from qa_copilot.models.prompt import PromptBundle


@dataclass(frozen=True)
class ProviderCapabilities:
    """Provider-intrinsic properties. Not user-configurable.

    Attributes:
        supports_images: accepts inline image parts
        supports_system_instruction: accepts a separate system instruction
        json_mode_actions: actions for which the native JSON-only response
            mode may be switched on
        self_correction: a second review pass runs after `generate`
    """
    supports_images: bool
    supports_system_instruction: bool
    json_mode_actions: FrozenSet[Action] = field(default_factory=frozenset)
    self_correction: bool = False


@dataclass
class ProviderRequest:
    url: str
    headers: Dict[str, str]
    payload: Dict[str, Any]


class LLMProvider(ABC):
    """Abstract LLM backend (Strategy pattern)."""

    id: ProviderId
    display_name: str
    default_model: str
    capabilities: ProviderCapabilities

    def __init__(self, model: Optional[str] = None, timeout: Optional[float] = None):
        self.model = model or self.default_model
        self.timeout = timeout

    def wants_json(self, bundle: PromptBundle) -> bool:
        """JSON-only mode: the action demands it and this provider allows it for the action."""
        return bundle.json_output and bundle.action in self.capabilities.json_mode_actions

    @abstractmethod
    def build_request(self, bundle: PromptBundle, api_key: str) -> ProviderRequest:
        """Translate a prompt bundle into this provider's native request."""
        ...

    @abstractmethod
    def extract_text(self, data: Dict[str, Any]) -> str:
        """Pull the raw text blob out of this provider's native response.

        Raises:
            ProviderError: response carries no text
        """
        ...

    def user_text(self, bundle: PromptBundle) -> str:
        """Text for the user turn, carrying the system instruction inline when there is no separate slot."""
        if bundle.system_instruction and not self.capabilities.supports_system_instruction:
            return f"{bundle.system_instruction}\n\n{bundle.text}"
        return bundle.text

    async def invoke(self, bundle: PromptBundle, api_key: Optional[str]) -> str:
        """
        Single round trip to the provider - no retries.

        Every failure leaves here typed; callers never see a raw transport
        or client-library exception.

        Raises:
            AuthenticationError: no API key available, or the key was rejected
            QuotaExceededError: upstream rate limit
            ProviderError: any other upstream failure
        """
        if not api_key:
            raise AuthenticationError(self.display_name)

        request = self.build_request(bundle, api_key)
        log(self.id.value.upper(), f"Calling {self.model} ({bundle.action.value}, json={self.wants_json(bundle)})")
        try:
            data = await self._post(request)
        except QACopilotError:
            raise
        except Exception as e:
            self.raise_for_transport_error(e)
        return self.extract_text(data)

    async def _post(self, request: ProviderRequest) -> Dict[str, Any]:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession() as session:
            async with session.post(
                request.url,
                json=request.payload,
                headers=request.headers,
                timeout=timeout,
            ) as response:
                text = await response.text()
                if response.status != 200:
                    self.raise_for_status(response.status, text)
                try:
                    return json.loads(text)
                except json.JSONDecodeError as e:
                    raise ProviderError(
                        self.display_name,
                        f"Failed to parse {self.display_name} response: {e}",
                        upstream_status=response.status,
                    )

    def raise_for_status(self, status: int, body: str) -> None:
        """Map a non-200 upstream status onto the typed hierarchy."""
        excerpt = body[:200]
        log(self.id.value.upper(), f"Error {status}: {body[:500]}")

        if status == 429 or "429" in excerpt or "RESOURCE_EXHAUSTED" in excerpt:
            raise QuotaExceededError(self.display_name, excerpt)

        if status in (401, 403):
            raise AuthenticationError(
                self.display_name,
                f"{self.display_name} rejected the API key ({status}).",
            )

        raise ProviderError(
            self.display_name,
            f"{self.display_name} API error {status}: {excerpt}",
            upstream_status=status,
        )

    def raise_for_transport_error(self, error: Exception) -> None:
        message = str(error) or type(error).__name__
        if "429" in message:
            raise QuotaExceededError(self.display_name, message)
        raise ProviderError(self.display_name, f"{self.display_name} request failed: {message}")
