# qa_copilot/llm/providers/__init__.py
"""
LLM Providers - Individual provider implementations.
"""
from .base import LLMProvider, ProviderCapabilities, ProviderRequest
from .openai import OpenAIProvider
from .gemini import GeminiProvider

__all__ = ["LLMProvider", "ProviderCapabilities", "ProviderRequest", "OpenAIProvider", "GeminiProvider"]
