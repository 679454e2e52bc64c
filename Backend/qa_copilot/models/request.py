# qa_copilot/models/request.py
"""
Inbound request models for POST /api/generate.

Field names follow the browser client's camelCase payload. Fields that the
selected action does not use are accepted and ignored, including
`fixtureFormat` and `preferences`: those two are only checked by the
actions that read them, through fixture_format() and style_preferences().
"""
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from qa_copilot.core.config import settings
from qa_copilot.core.constants import (
    Action,
    AssertionStyle,
    DEFAULT_FRAMEWORK,
    FixtureFormat,
    ProviderId,
    QuoteStyle,
    SelectorType,
)
from qa_copilot.core.exceptions import InvalidInputError


class StylePreferences(BaseModel):
    """Coding style the generated code must follow. Immutable per request."""
    model_config = ConfigDict(frozen=True)

    selectorType: SelectorType = SelectorType.DATA_TESTID
    quoteStyle: QuoteStyle = QuoteStyle.SINGLE
    assertionStyle: AssertionStyle = AssertionStyle.SHOULD


def _default_provider() -> ProviderId:
    try:
        return ProviderId(settings.llm.default_provider)
    except ValueError:
        return ProviderId.GEMINI


class GenerationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    action: Action = Action.GENERATE
    provider: ProviderId = Field(default_factory=_default_provider)
    userApiKey: Optional[str] = Field(default=None, alias="apiKeyOverride")
    framework: str = DEFAULT_FRAMEWORK

    # generate
    testCase: Optional[str] = None
    htmlContext: Optional[str] = None
    imageData: Optional[str] = None

    # fix / refine / explain / debug
    currentCode: Optional[str] = None
    errorMessage: Optional[str] = None
    refineInstruction: Optional[str] = None
    fileName: Optional[str] = None
    errorLog: Optional[str] = None

    # generate_fixture
    fixtureRequest: Optional[str] = None
    fixtureFormat: Any = None

    preferences: Any = None

    def api_key(self) -> Optional[str]:
        """Request-supplied key, falling back to the server default."""
        if self.userApiKey and self.userApiKey.strip():
            return self.userApiKey.strip()
        return settings.llm.default_key_for(self.provider.value)

    def fixture_format(self) -> FixtureFormat:
        """Requested fixture format, JSON when none was sent."""
        if self.fixtureFormat is None or self.fixtureFormat == "":
            return FixtureFormat.JSON
        value = self.fixtureFormat.strip().lower() if isinstance(self.fixtureFormat, str) else self.fixtureFormat
        try:
            return FixtureFormat(value)
        except ValueError:
            allowed = ", ".join(f"'{fmt.value}'" for fmt in FixtureFormat)
            raise InvalidInputError(
                f"Invalid request: fixtureFormat: Input should be {allowed}",
                field_name="fixtureFormat",
            )

    def style_preferences(self) -> Optional[StylePreferences]:
        """
        Parsed coding style, or None when the client sent none.

        Raises:
            InvalidInputError: preferences were sent but don't describe a style
        """
        if self.preferences is None:
            return None
        if isinstance(self.preferences, StylePreferences):
            return self.preferences
        try:
            return StylePreferences.model_validate(self.preferences)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(["preferences", *(str(part) for part in first.get("loc", ()))])
            raise InvalidInputError(
                f"Invalid request: {location}: {first.get('msg')}",
                field_name="preferences",
            )
