"""
Custom exceptions for the application.

Every error that can reach a client carries the HTTP status it maps to.
Provider adapters translate upstream error shapes into this hierarchy,
so nothing above the adapter layer inspects raw status codes or messages.
"""
from typing import Optional, Dict, Any

from .constants import QUOTA_EXCEEDED_MESSAGE


class QACopilotError(Exception):
    """Base exception for all QA Copilot errors."""
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MissingInputError(QACopilotError):
    """A required request field for the selected action is absent or empty."""
    status_code = 400

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message, {"field": field_name} if field_name else None)
        self.field_name = field_name


class InvalidInputError(QACopilotError):
    """A request field used by the selected action has an unacceptable value."""
    status_code = 400

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message, {"field": field_name} if field_name else None)
        self.field_name = field_name


class AuthenticationError(QACopilotError):
    """No usable credential for the selected provider."""
    status_code = 401

    def __init__(self, provider: str, message: Optional[str] = None):
        super().__init__(
            message or f"{provider} API Key not found.",
            {"provider": provider},
        )
        self.provider = provider


class ProviderError(QACopilotError):
    """Generic upstream LLM failure."""
    status_code = 500

    def __init__(self, provider: str, message: str, upstream_status: Optional[int] = None):
        super().__init__(
            message,
            {"provider": provider, "upstream_status": upstream_status},
        )
        self.provider = provider
        self.upstream_status = upstream_status


class QuotaExceededError(ProviderError):
    """Upstream rate limit - surfaced so the client can apply its own backoff."""
    status_code = 429

    def __init__(self, provider: str, upstream_message: str = ""):
        super().__init__(provider, QUOTA_EXCEEDED_MESSAGE, upstream_status=429)
        self.upstream_message = upstream_message


class MalformedResponseError(QACopilotError):
    """The model's output could not be parsed into the required shape."""
    status_code = 500

    def __init__(self, message: str, raw_excerpt: str = ""):
        super().__init__(message, {"raw_excerpt": raw_excerpt[:200]})
        self.raw_excerpt = raw_excerpt
