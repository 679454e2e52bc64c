# qa_copilot/orchestration/__init__.py
"""
Orchestration - prompt construction, dispatch, self-correction,
normalization and error classification.
"""
from .prompt_builder import build_prompt, render_style_guide, render_context, parse_image_data
from .normalizer import normalize, strip_code_fences, parse_canonical_result
from .self_correction import self_correct, should_self_correct, build_correction_prompt
from .error_classifier import ErrorClassifier, ClassifiedError
from .orchestrator import GenerationOrchestrator

__all__ = [
    "build_prompt",
    "render_style_guide",
    "render_context",
    "parse_image_data",
    "normalize",
    "strip_code_fences",
    "parse_canonical_result",
    "self_correct",
    "should_self_correct",
    "build_correction_prompt",
    "ErrorClassifier",
    "ClassifiedError",
    "GenerationOrchestrator",
]
