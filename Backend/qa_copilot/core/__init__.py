# qa_copilot/core/__init__.py
"""
Core module - Application constants, configuration, and shared errors.
"""
from .config import settings
from .constants import (
    Action,
    ProviderId,
    FixtureFormat,
    SelectorType,
    QuoteStyle,
    AssertionStyle,
    DEFAULT_FRAMEWORK,
)
from .exceptions import (
    QACopilotError,
    MissingInputError,
    InvalidInputError,
    AuthenticationError,
    ProviderError,
    QuotaExceededError,
    MalformedResponseError,
)

__all__ = [
    "settings",
    "Action",
    "ProviderId",
    "FixtureFormat",
    "SelectorType",
    "QuoteStyle",
    "AssertionStyle",
    "DEFAULT_FRAMEWORK",
    "QACopilotError",
    "MissingInputError",
    "InvalidInputError",
    "AuthenticationError",
    "ProviderError",
    "QuotaExceededError",
    "MalformedResponseError",
]
