# qa_copilot/llm/__init__.py
"""
LLM module - Unified interface for all LLM providers.
"""
from .adapter import ProviderRegistry, get_registry
from .providers import LLMProvider, ProviderCapabilities, OpenAIProvider, GeminiProvider

__all__ = [
    "ProviderRegistry",
    "get_registry",
    "LLMProvider",
    "ProviderCapabilities",
    "OpenAIProvider",
    "GeminiProvider",
]
