"""
Generation Orchestrator Invariant Tests

INVARIANTS:
1. One provider call per action, two for Gemini generate (draft + review)
2. A failing or unusable review pass returns the draft, never an error
3. Text-only providers never receive image parts
4. Credential errors surface before any upstream call
"""
import json

import pytest

from qa_copilot.core.exceptions import (
    AuthenticationError,
    InvalidInputError,
    MalformedResponseError,
    MissingInputError,
    ProviderError,
    QuotaExceededError,
)
from qa_copilot.llm.adapter import ProviderRegistry
from qa_copilot.models.request import GenerationRequest
from qa_copilot.models.result import RawOutcome, StructuredOutcome
from qa_copilot.orchestration import ErrorClassifier, GenerationOrchestrator
from qa_copilot.orchestration.self_correction import build_correction_prompt

from tests.utils.providers import ScriptedGemini, ScriptedOpenAI, gemini_response, openai_response


def orchestrator_for(*providers) -> GenerationOrchestrator:
    return GenerationOrchestrator(ProviderRegistry(providers))


# ════════════════════════════════════════════════════════════════════
# SELF-CORRECTION
# ════════════════════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_gemini_generate_runs_review_pass(generate_request, canonical_payload):
    reviewed = dict(canonical_payload, risk_analysis={"score": 3, "priority": "Low", "reasoning": "reviewed"})
    provider = ScriptedGemini(
        gemini_response(json.dumps(canonical_payload)),
        gemini_response(json.dumps(reviewed)),
    )

    outcome = await orchestrator_for(provider).run(generate_request)

    assert isinstance(outcome, StructuredOutcome)
    assert outcome.result.risk_analysis.reasoning == "reviewed"
    assert provider.calls == 2
    review_payload = provider.requests[1].payload
    assert "systemInstruction" not in review_payload
    assert review_payload["generationConfig"]["responseMimeType"] == "application/json"


@pytest.mark.asyncio
async def test_review_failure_returns_draft(generate_request, canonical_json):
    provider = ScriptedGemini(
        gemini_response(canonical_json),
        ProviderError("Gemini", "Gemini API error 500: boom", upstream_status=500),
    )

    outcome = await orchestrator_for(provider).run(generate_request)

    assert isinstance(outcome, StructuredOutcome)
    assert outcome.result.risk_analysis.score == 7
    assert provider.calls == 2


@pytest.mark.asyncio
async def test_review_quota_error_returns_draft(generate_request, canonical_json):
    provider = ScriptedGemini(gemini_response(canonical_json), QuotaExceededError("Gemini", "429"))
    outcome = await orchestrator_for(provider).run(generate_request)
    assert outcome.result.risk_analysis.priority == "High"


@pytest.mark.asyncio
async def test_unparseable_review_falls_back_to_draft(generate_request, canonical_json):
    provider = ScriptedGemini(
        gemini_response(canonical_json),
        gemini_response("Looks good to me!"),
    )
    outcome = await orchestrator_for(provider).run(generate_request)
    assert len(outcome.result.generated_files) == 2


@pytest.mark.asyncio
async def test_unparseable_draft_is_fatal(generate_request):
    provider = ScriptedGemini(gemini_response("not json"), gemini_response("still not json"))
    with pytest.raises(MalformedResponseError):
        await orchestrator_for(provider).run(generate_request)


def test_correction_prompt_carries_html_and_style(generate_request):
    request = generate_request.model_copy(update={"htmlContext": "<input id='user'>"})
    bundle = build_correction_prompt('{"draft": true}', request)
    assert bundle.system_instruction == ""
    assert bundle.json_output is True
    assert '{"draft": true}' in bundle.text
    assert "<input id='user'>" in bundle.text
    assert "Quote Style: Any" in bundle.text


# ════════════════════════════════════════════════════════════════════
# SINGLE ATTEMPT
# ════════════════════════════════════════════════════════════════════

@pytest.mark.asyncio
@pytest.mark.parametrize("fields", [
    {"action": "fix", "currentCode": "x", "errorMessage": "e"},
    {"action": "refine", "currentCode": "x", "refineInstruction": "i"},
    {"action": "explain", "currentCode": "x"},
    {"action": "generate_fixture", "fixtureRequest": "users"},
    {"action": "debug", "currentCode": "x", "errorLog": "boom"},
])
async def test_non_generate_actions_call_once(fields):
    provider = ScriptedGemini(gemini_response("```js\nfixed()\n```"))
    request = GenerationRequest(provider="gemini", apiKeyOverride="k", **fields)

    outcome = await orchestrator_for(provider).run(request)

    assert outcome == RawOutcome("fixed()")
    assert provider.calls == 1


@pytest.mark.asyncio
async def test_openai_generate_has_no_review_pass(canonical_json):
    provider = ScriptedOpenAI(openai_response(canonical_json))
    request = GenerationRequest(
        provider="openai", apiKeyOverride="k", testCase="t",
        imageData="data:image/png;base64,AAAA",
    )

    outcome = await orchestrator_for(provider).run(request)

    assert isinstance(outcome, StructuredOutcome)
    assert provider.calls == 1
    user_message = provider.requests[0].payload["messages"][1]["content"]
    assert "<visual_context>" not in user_message


@pytest.mark.asyncio
async def test_upstream_failure_is_not_retried(generate_request):
    provider = ScriptedGemini(QuotaExceededError("Gemini", "429"))
    with pytest.raises(QuotaExceededError):
        await orchestrator_for(provider).run(generate_request)
    assert provider.calls <= 1


# ════════════════════════════════════════════════════════════════════
# INPUT + CREDENTIALS
# ════════════════════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_missing_key_fails_before_upstream(monkeypatch):
    from qa_copilot.core.config import settings
    monkeypatch.setattr(settings.llm, "openai_api_key", None)

    provider = ScriptedOpenAI()
    with pytest.raises(AuthenticationError):
        await orchestrator_for(provider).run(GenerationRequest(provider="openai", testCase="t"))
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_server_key_is_used_when_request_has_none(monkeypatch):
    from qa_copilot.core.config import settings
    monkeypatch.setattr(settings.llm, "gemini_api_key", "server-key")

    provider = ScriptedGemini(gemini_response("explained"))
    await orchestrator_for(provider).run(
        GenerationRequest(provider="gemini", action="explain", currentCode="x", apiKeyOverride="  ")
    )
    assert provider.requests[0].headers["x-goog-api-key"] == "server-key"


@pytest.mark.asyncio
async def test_missing_input_fails_before_upstream():
    provider = ScriptedGemini()
    with pytest.raises(MissingInputError):
        await orchestrator_for(provider).run(GenerationRequest(provider="gemini", apiKeyOverride="k"))
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_unused_fields_are_not_validated():
    provider = ScriptedGemini(gemini_response("It visits the home page."))
    request = GenerationRequest(
        provider="gemini", apiKeyOverride="k", action="explain", currentCode="cy.visit('/')",
        fixtureFormat="xml", preferences={"quoteStyle": "backtick"},
    )

    outcome = await orchestrator_for(provider).run(request)

    assert outcome == RawOutcome("It visits the home page.")


@pytest.mark.asyncio
async def test_invalid_fixture_format_fails_before_upstream():
    provider = ScriptedGemini()
    request = GenerationRequest(
        provider="gemini", apiKeyOverride="k", action="generate_fixture", fixtureRequest="users", fixtureFormat="xml",
    )
    with pytest.raises(InvalidInputError):
        await orchestrator_for(provider).run(request)
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_quota_text_in_foreign_exception_is_429():
    provider = ScriptedOpenAI(RuntimeError("Request failed with status code 429"))
    request = GenerationRequest(provider="openai", apiKeyOverride="k", action="explain", currentCode="x")

    with pytest.raises(QuotaExceededError) as exc:
        await orchestrator_for(provider).run(request)

    assert ErrorClassifier.classify(exc.value).status_code == 429
    assert provider.calls == 1
