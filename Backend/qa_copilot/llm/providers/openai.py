# qa_copilot/llm/providers/openai.py
"""
OpenAI provider implementation (text/JSON only).
"""
from typing import Any, Dict

from qa_copilot.core.constants import Action, ProviderId
from qa_copilot.core.exceptions import ProviderError
from qa_copilot.core.logging import log
from qa_copilot.models.prompt import PromptBundle

from .base import LLMProvider, ProviderCapabilities, ProviderRequest


DEFAULT_MODEL = "gpt-4o"
API_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIProvider(LLMProvider):
    id = ProviderId.OPENAI
    display_name = "OpenAI"
    default_model = DEFAULT_MODEL
    # json_object mode only ever yields an object; fixtures may be arrays
    capabilities = ProviderCapabilities(
        supports_images=False,
        supports_system_instruction=True,
        json_mode_actions=frozenset({Action.GENERATE}),
    )

    def build_request(self, bundle: PromptBundle, api_key: str) -> ProviderRequest:
        if bundle.images:
            log("OPENAI", f"Dropping {len(bundle.images)} image part(s): text-only provider")

        messages = []
        if bundle.system_instruction and self.capabilities.supports_system_instruction:
            messages.append({"role": "system", "content": bundle.system_instruction})
        messages.append({"role": "user", "content": self.user_text(bundle)})

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
        }
        if self.wants_json(bundle):
            payload["response_format"] = {"type": "json_object"}

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        return ProviderRequest(url=API_URL, headers=headers, payload=payload)

    def extract_text(self, data: Dict[str, Any]) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(self.display_name, f"Failed to parse OpenAI response: {e}")

        if content is None:
            raise ProviderError(self.display_name, "OpenAI returned an empty message")
        return content
