# tests/utils/providers.py
"""
Scripted providers - real adapters with the HTTP round trip replaced by a
queue of canned native responses.
"""
from typing import Any, Dict, List

from qa_copilot.llm.providers import GeminiProvider, OpenAIProvider


class ScriptedMixin:
    """
    Queue entries that are exceptions are raised instead of returned.

    `calls` counts round trips, so single-attempt behaviour can be asserted.
    """

    def __init__(self, *responses: Any, **kwargs):
        super().__init__(**kwargs)
        self.responses: List[Any] = list(responses)
        self.requests = []
        self.calls = 0

    async def _post(self, request) -> Dict[str, Any]:
        self.calls += 1
        self.requests.append(request)
        if not self.responses:
            raise AssertionError("Scripted provider called more times than scripted")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class ScriptedGemini(ScriptedMixin, GeminiProvider):
    pass


class ScriptedOpenAI(ScriptedMixin, OpenAIProvider):
    pass


def gemini_response(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def openai_response(text: str) -> Dict[str, Any]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}
