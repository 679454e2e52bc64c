# qa_copilot/orchestration/error_classifier.py
"""
Error classification - every entry point funnels failures through here.

DECISION TABLE:
    MissingInputError       -> 400
    InvalidInputError       -> 400
    AuthenticationError     -> 401
    QuotaExceededError      -> 429
    MalformedResponseError  -> 500
    ProviderError           -> 500
    anything else           -> 500 (message passed through, never a trace)
"""
from dataclasses import dataclass

from qa_copilot.core.exceptions import QACopilotError
from qa_copilot.core.logging import log


@dataclass(frozen=True)
class ClassifiedError:
    status_code: int
    message: str
    kind: str

    def envelope(self) -> dict:
        return {"error": self.message}


class ErrorClassifier:
    """Maps exceptions to the uniform client-facing error envelope."""

    DEFAULT_MESSAGE = "Internal Server Error"

    @classmethod
    def classify(cls, error: BaseException) -> ClassifiedError:
        if isinstance(error, QACopilotError):
            classified = ClassifiedError(
                status_code=error.status_code,
                message=error.message or cls.DEFAULT_MESSAGE,
                kind=type(error).__name__,
            )
        else:
            classified = ClassifiedError(
                status_code=500,
                message=str(error) or cls.DEFAULT_MESSAGE,
                kind="InternalError",
            )

        log("ERROR", f"{classified.kind} -> {classified.status_code}: {classified.message}")
        return classified
