# qa_copilot/orchestration/self_correction.py
"""
Self-Correction Pass - second structured review of a `generate` draft.

Best-effort: whatever goes wrong in the second call, the caller gets the
unrefined draft back. This is the one failure in the pipeline that never
fails the request.
"""
from typing import Optional

from qa_copilot.core.constants import Action
from qa_copilot.core.logging import log
from qa_copilot.llm.prompts import SELF_CORRECTION_TEMPLATE
from qa_copilot.llm.providers import LLMProvider
from qa_copilot.models.prompt import PromptBundle, TextPart
from qa_copilot.models.request import GenerationRequest


def should_self_correct(provider: LLMProvider, action: Action) -> bool:
    return provider.capabilities.self_correction and action == Action.GENERATE


def build_correction_prompt(draft: str, request: GenerationRequest) -> PromptBundle:
    preferences = request.style_preferences()
    if request.htmlContext and request.htmlContext.strip():
        selector_rule = (
            "HTML context was provided. Did the code use the EXACT IDs/Classes from it?\n"
            f"         HTML CONTEXT:\n         {request.htmlContext}"
        )
    else:
        selector_rule = "If HTML context was provided, did the code use the EXACT IDs/Classes?"

    text = SELF_CORRECTION_TEMPLATE.format(
        draft=draft,
        selector_rule=selector_rule,
        quote_style=preferences.quoteStyle.value if preferences else "Any",
        assertion_style=preferences.assertionStyle.value if preferences else "Any",
    )
    # Reviewer runs without the generation system instruction, JSON only
    return PromptBundle(
        system_instruction="",
        parts=(TextPart(text),),
        action=Action.GENERATE,
        json_output=True,
    )


async def self_correct(
    provider: LLMProvider,
    draft: str,
    request: GenerationRequest,
    api_key: Optional[str],
) -> str:
    """
    Resubmit the draft with a review rubric to the same provider.

    Returns:
        The reviewed JSON text, or the original draft if the review call fails
        or comes back empty.
    """
    bundle = build_correction_prompt(draft, request)
    try:
        refined = await provider.invoke(bundle, api_key)
    except Exception as e:
        log("SELF-CORRECT", f"⚠️ Self-correction failed, using draft: {e}")
        return draft

    if not refined or not refined.strip():
        log("SELF-CORRECT", "⚠️ Self-correction returned nothing, using draft")
        return draft

    log("SELF-CORRECT", "✅ Draft reviewed")
    return refined
