# qa_copilot/llm/providers/gemini.py
"""
Google Gemini provider implementation (multimodal).
"""
from typing import Any, Dict, List

from qa_copilot.core.constants import Action, ProviderId
from qa_copilot.core.exceptions import ProviderError
from qa_copilot.models.prompt import ImagePart, PromptBundle, TextPart

from .base import LLMProvider, ProviderCapabilities, ProviderRequest


DEFAULT_MODEL = "gemini-2.5-flash"
API_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiProvider(LLMProvider):
    id = ProviderId.GEMINI
    display_name = "Gemini"
    default_model = DEFAULT_MODEL
    capabilities = ProviderCapabilities(
        supports_images=True,
        supports_system_instruction=True,
        json_mode_actions=frozenset({Action.GENERATE, Action.GENERATE_FIXTURE}),
        self_correction=True,
    )

    def build_request(self, bundle: PromptBundle, api_key: str) -> ProviderRequest:
        # Image parts precede text; the prompt builder already orders them
        parts: List[Dict[str, Any]] = []
        for part in bundle.parts:
            if isinstance(part, ImagePart):
                parts.append({"inlineData": {"data": part.data, "mimeType": part.mime_type}})
            elif isinstance(part, TextPart):
                parts.append({"text": part.text})

        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {
                "responseMimeType": "application/json" if self.wants_json(bundle) else "text/plain",
            },
        }

        # System instruction goes separately (Gemini's preferred format),
        # otherwise as the first text part after any images
        if bundle.system_instruction:
            if self.capabilities.supports_system_instruction:
                payload["systemInstruction"] = {"parts": [{"text": bundle.system_instruction}]}
            else:
                parts.insert(len(bundle.images), {"text": bundle.system_instruction})

        headers = {
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
        }
        return ProviderRequest(
            url=f"{API_URL}/{self.model}:generateContent",
            headers=headers,
            payload=payload,
        )

    def extract_text(self, data: Dict[str, Any]) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            block_reason = (data.get("promptFeedback") or {}).get("blockReason")
            if block_reason:
                raise ProviderError(self.display_name, f"Gemini blocked the prompt: {block_reason}")
            raise ProviderError(self.display_name, "No candidates in Gemini response")

        content = candidates[0].get("content") or {}
        parts = content.get("parts") or []
        texts = [p["text"] for p in parts if isinstance(p, dict) and "text" in p]
        if not texts:
            raise ProviderError(self.display_name, "No text parts in Gemini response")
        return "".join(texts)
