# qa_copilot/orchestration/prompt_builder.py
"""
Prompt Builder - deterministic system instruction + content parts per action.

Pure functions, no I/O. Identical requests produce byte-identical bundles,
which is what makes provider stubs in tests reproducible.

Block order inside the generate prompt:
    preamble -> <coding_style_rules> -> <html_context>/<visual_context>
    -> critical instructions -> output schema -> framework rules
"""
import re
from typing import Callable, Dict, List, Optional

from qa_copilot.core.constants import (
    Action,
    AssertionStyle,
    DEFAULT_FRAMEWORK,
    FixtureFormat,
    QuoteStyle,
    SelectorType,
)
from qa_copilot.core.exceptions import MissingInputError
from qa_copilot.core.logging import log
from qa_copilot.llm.prompts import (
    DEBUG_INSTRUCTION_TEMPLATE,
    EXPLAIN_PROMPT,
    FIX_PREAMBLE,
    FIX_RULES,
    FIXTURE_PROMPT,
    GENERATE_INSTRUCTIONS,
    GENERATE_OUTPUT_SCHEMA,
    GENERATE_PREAMBLE,
    REFINE_PREAMBLE,
    REFINE_RULES,
    get_framework_rules,
    is_known_framework,
)
from qa_copilot.models.prompt import ContentPart, ImagePart, PromptBundle, TextPart
from qa_copilot.models.request import GenerationRequest, StylePreferences


# ═══════════════════════════════════════════════════════════════════════════
# STYLE GUIDE
# ═══════════════════════════════════════════════════════════════════════════

# Exactly one of these appears in a style guide, never both
FORBID_EXPECT_DIRECTIVE = "FORBIDDEN: expect(...)"
FORBID_SHOULD_DIRECTIVE = "FORBIDDEN: .should()"

SELECTOR_RULES = {
    SelectorType.DATA_TESTID: "- RULE: Use [data-testid='value'] attribute selectors, e.g. cy.get(\"[data-testid='value']\")",
    SelectorType.ID: "- RULE: Prefer IDs (#id) over classes.",
    SelectorType.CLASS: "- RULE: Use class selectors (.class-name). Avoid positional chains like nth-child.",
    SelectorType.TEXT: "- RULE: Locate elements by their visible text, e.g. cy.contains('Submit') or page.getByText('Submit').",
}

ASSERTION_RULES = {
    AssertionStyle.SHOULD: (
        "[MODE: CHAINED] USE: cy.get(...).should('be.visible'). "
        + FORBID_EXPECT_DIRECTIVE
    ),
    AssertionStyle.EXPECT: (
        "[MODE: EXPLICIT EXPECT] RULE: Cypress is async. WRAP in .then(). "
        "CORRECT: cy.get(selector).then(($el) => { expect($el).to.be.visible; }); "
        + FORBID_SHOULD_DIRECTIVE
    ),
}

QUOTE_RULES = {
    QuoteStyle.SINGLE: "Single Quotes ('')",
    QuoteStyle.DOUBLE: 'Double Quotes ("")',
}


def render_style_guide(preferences: Optional[StylePreferences]) -> str:
    """Render the <coding_style_rules> block, or "" when no preferences were sent."""
    if preferences is None:
        return ""

    return f"""
        <coding_style_rules>
          IMPORTANT: You are configured to use a SPECIFIC CODING STYLE.
          Do NOT revert to default framework patterns.

          1. SELECTOR STRATEGY:
             - PREFERRED: "{preferences.selectorType.value}"
             {SELECTOR_RULES[preferences.selectorType]}

          2. QUOTE STYLE:
             - FORCE: "{QUOTE_RULES[preferences.quoteStyle]}"

          3. ASSERTION STYLE (CRITICAL):
             - MODE: "{preferences.assertionStyle.value}"
             {ASSERTION_RULES[preferences.assertionStyle]}
        </coding_style_rules>
        """


# ═══════════════════════════════════════════════════════════════════════════
# CONTEXT (HTML + IMAGE)
# ═══════════════════════════════════════════════════════════════════════════

DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)


def parse_image_data(image_data: str) -> ImagePart:
    """Split a base64 data URI into payload and mime type."""
    match = DATA_URI_PATTERN.match(image_data.strip())
    if not match:
        raise MissingInputError("imageData must be a base64 data URI", field_name="imageData")
    return ImagePart(data=match.group("data"), mime_type=match.group("mime"))


def render_context(html_context: Optional[str], has_image: bool) -> str:
    context = ""

    if html_context and html_context.strip():
        context += f"""
        <html_context>
          The user provided an HTML snippet. USE THESE EXACT SELECTORS (IDs, Classes).
          {html_context}
        </html_context>
        """

    if has_image:
        context += """
        <visual_context>
          An image of the UI has been provided.
          TASK: Analyze the image to identify interactive elements (buttons, inputs) and their likely purpose.
          COMBINE this visual understanding with the Test Case description to generate the script.
        </visual_context>
        """

    return context


def _require(value: Optional[str], field_name: str, action: Action) -> str:
    if value is None or not value.strip():
        raise MissingInputError(
            f"'{field_name}' is required for action '{action.value}'.",
            field_name=field_name,
        )
    return value


# ═══════════════════════════════════════════════════════════════════════════
# PER-ACTION BUILDERS
# ═══════════════════════════════════════════════════════════════════════════

def _build_generate(request: GenerationRequest, include_images: bool) -> PromptBundle:
    test_case = _require(request.testCase, "testCase", Action.GENERATE)

    image: Optional[ImagePart] = None
    if request.imageData and include_images:
        image = parse_image_data(request.imageData)
    elif request.imageData:
        log("PROMPT", f"Dropping image context: provider '{request.provider.value}' is text-only")

    style_guide = render_style_guide(request.style_preferences())
    context = render_context(request.htmlContext, has_image=image is not None)
    if not is_known_framework(request.framework):
        log("PROMPT", f"Unknown framework '{request.framework}', using {DEFAULT_FRAMEWORK} rules")
    rules = get_framework_rules(request.framework)

    system_instruction = (
        GENERATE_PREAMBLE
        + f"\n      {style_guide}\n      {context}\n"
        + GENERATE_INSTRUCTIONS
        + GENERATE_OUTPUT_SCHEMA
        + "\n      CONTEXT & RULES:\n"
        + rules.prompt_block
    )

    parts: List[ContentPart] = []
    # Image must precede the text part
    if image is not None:
        parts.append(image)
    parts.append(TextPart(
        f"Test Case: {test_case}\n\nIMPORTANT REMINDER:\n{style_guide}\n{context}"
    ))

    return PromptBundle(
        system_instruction=system_instruction,
        parts=tuple(parts),
        action=Action.GENERATE,
        json_output=True,
    )


def _build_fix(request: GenerationRequest, include_images: bool) -> PromptBundle:
    code = _require(request.currentCode, "currentCode", Action.FIX)
    error = _require(request.errorMessage, "errorMessage", Action.FIX)
    file_name = request.fileName or "unknown"
    preferences = request.style_preferences()
    style_guide = render_style_guide(preferences)

    text = f"FILE: {file_name}\nERROR: {error}\nCODE:\n{code}"
    if preferences is not None:
        text += "\n\nIMPORTANT: Maintain style!"

    return PromptBundle(
        system_instruction=FIX_PREAMBLE + f"      {style_guide}\n" + FIX_RULES,
        parts=(TextPart(text),),
        action=Action.FIX,
    )


def _refine_bundle(code: str, instruction: str, preferences: Optional[StylePreferences], action: Action) -> PromptBundle:
    style_guide = render_style_guide(preferences)
    return PromptBundle(
        system_instruction=REFINE_PREAMBLE + f"\n      {style_guide}\n" + REFINE_RULES,
        parts=(TextPart(f"CURRENT CODE:\n{code}\n\nUSER INSTRUCTION: {instruction}"),),
        action=action,
    )


def _build_refine(request: GenerationRequest, include_images: bool) -> PromptBundle:
    code = _require(request.currentCode, "currentCode", Action.REFINE)
    instruction = _require(request.refineInstruction, "refineInstruction", Action.REFINE)
    return _refine_bundle(code, instruction, request.style_preferences(), Action.REFINE)


def _build_debug(request: GenerationRequest, include_images: bool) -> PromptBundle:
    code = _require(request.currentCode, "currentCode", Action.DEBUG)
    error_log = _require(request.errorLog, "errorLog", Action.DEBUG)
    instruction = DEBUG_INSTRUCTION_TEMPLATE.format(error_log=error_log.strip())
    return _refine_bundle(code, instruction, request.style_preferences(), Action.DEBUG)


def _build_explain(request: GenerationRequest, include_images: bool) -> PromptBundle:
    code = _require(request.currentCode, "currentCode", Action.EXPLAIN)
    return PromptBundle(
        system_instruction=EXPLAIN_PROMPT,
        parts=(TextPart(f"EXPLAIN THIS CODE:\n{code}"),),
        action=Action.EXPLAIN,
    )


def _build_fixture(request: GenerationRequest, include_images: bool) -> PromptBundle:
    fixture_request = _require(request.fixtureRequest, "fixtureRequest", Action.GENERATE_FIXTURE)
    fmt = request.fixture_format()
    return PromptBundle(
        system_instruction=FIXTURE_PROMPT,
        parts=(TextPart(f"GENERATE {fmt.value.upper()} DATA:\nRequest: {fixture_request}"),),
        action=Action.GENERATE_FIXTURE,
        json_output=fmt == FixtureFormat.JSON,
    )


BUILDERS: Dict[Action, Callable[[GenerationRequest, bool], PromptBundle]] = {
    Action.GENERATE: _build_generate,
    Action.FIX: _build_fix,
    Action.REFINE: _build_refine,
    Action.DEBUG: _build_debug,
    Action.EXPLAIN: _build_explain,
    Action.GENERATE_FIXTURE: _build_fixture,
}


def build_prompt(request: GenerationRequest, include_images: bool = True) -> PromptBundle:
    """
    Build the prompt bundle for a request.

    Args:
        request: Validated generation request
        include_images: False for providers that cannot take inline images;
            the image part and the <visual_context> block are both left out.

    Raises:
        MissingInputError: a field required by the action is absent or blank
    """
    bundle = BUILDERS[request.action](request, include_images)
    log(
        "PROMPT",
        f"Built {request.action.value} prompt: {len(bundle.system_instruction)} chars system, "
        f"{len(bundle.parts)} part(s)",
    )
    return bundle
