# qa_copilot/core/constants.py
"""
Application-wide constants and enums.
"""
from enum import Enum


class Action(str, Enum):
    """Operations accepted by POST /api/generate."""
    GENERATE = "generate"
    FIX = "fix"
    REFINE = "refine"
    EXPLAIN = "explain"
    GENERATE_FIXTURE = "generate_fixture"
    DEBUG = "debug"


class ProviderId(str, Enum):
    """Wire identifiers of the supported LLM backends."""
    OPENAI = "openai"
    GEMINI = "gemini"


class FixtureFormat(str, Enum):
    JSON = "json"
    SQL = "sql"
    CSV = "csv"


class SelectorType(str, Enum):
    DATA_TESTID = "data-testid"
    ID = "id"
    CLASS = "class"
    TEXT = "text"


class QuoteStyle(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"


class AssertionStyle(str, Enum):
    SHOULD = "should"
    EXPECT = "expect"


# Actions whose response is code that replaces an existing file

DEFAULT_FRAMEWORK = "cypress"

QUOTA_EXCEEDED_MESSAGE = "API Quota Exceeded (Rate Limit)."
