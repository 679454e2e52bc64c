# qa_copilot/llm/prompts/__init__.py
"""
Prompt constants and the framework rule table.
"""
from .frameworks import FrameworkRules, FRAMEWORK_RULES, get_framework_rules, is_known_framework
from .system import (
    GENERATE_PREAMBLE,
    GENERATE_INSTRUCTIONS,
    GENERATE_OUTPUT_SCHEMA,
    FIX_PREAMBLE,
    FIX_RULES,
    REFINE_PREAMBLE,
    REFINE_RULES,
    EXPLAIN_PROMPT,
    FIXTURE_PROMPT,
    DEBUG_INSTRUCTION_TEMPLATE,
    SELF_CORRECTION_TEMPLATE,
)

__all__ = [
    "FrameworkRules", "FRAMEWORK_RULES", "get_framework_rules", "is_known_framework",
    "GENERATE_PREAMBLE", "GENERATE_INSTRUCTIONS", "GENERATE_OUTPUT_SCHEMA",
    "FIX_PREAMBLE", "FIX_RULES",
    "REFINE_PREAMBLE", "REFINE_RULES",
    "EXPLAIN_PROMPT", "FIXTURE_PROMPT",
    "DEBUG_INSTRUCTION_TEMPLATE", "SELF_CORRECTION_TEMPLATE",
]
