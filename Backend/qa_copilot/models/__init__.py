"""
Request, prompt and result models.
"""
from .request import GenerationRequest, StylePreferences
from .prompt import PromptBundle, TextPart, ImagePart, ContentPart
from .result import (
    RiskAnalysis,
    LintItem,
    GeneratedFile,
    CanonicalResult,
    StructuredOutcome,
    RawOutcome,
    GenerationOutcome,
)

__all__ = [
    "GenerationRequest",
    "StylePreferences",
    "PromptBundle",
    "TextPart",
    "ImagePart",
    "ContentPart",
    "RiskAnalysis",
    "LintItem",
    "GeneratedFile",
    "CanonicalResult",
    "StructuredOutcome",
    "RawOutcome",
    "GenerationOutcome",
]
