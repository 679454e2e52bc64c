"""
Response Normalizer Tests
"""
import json

import pytest

from qa_copilot.core.constants import Action
from qa_copilot.core.exceptions import MalformedResponseError
from qa_copilot.models.result import RawOutcome, StructuredOutcome
from qa_copilot.orchestration.normalizer import normalize, parse_canonical_result, strip_code_fences


# ════════════════════════════════════════════════════════════════════
# FENCE STRIPPING
# ════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("raw", [
    "```javascript\ncy.get('#a').click();\n```",
    "```js\ncy.get('#a').click();\n```\n",
    "```\ncy.get('#a').click();\n```",
    "  \n```typescript\ncy.get('#a').click();\n```  ",
    "cy.get('#a').click();",
])
def test_fix_output_has_no_fences(raw):
    outcome = normalize(Action.FIX, raw)
    assert isinstance(outcome, RawOutcome)
    assert outcome.text == "cy.get('#a').click();"
    assert not outcome.text.startswith("```")
    assert not outcome.text.endswith("```")


def test_inner_fences_are_kept():
    raw = "```markdown\nUse this:\n```js\ncy.visit('/')\n```\nDone.\n```"
    assert strip_code_fences(raw) == "Use this:\n```js\ncy.visit('/')\n```\nDone."


def test_strip_empty():
    assert strip_code_fences("") == ""


@pytest.mark.parametrize("action", [Action.REFINE, Action.DEBUG, Action.EXPLAIN, Action.GENERATE_FIXTURE])
def test_text_actions_return_raw(action):
    outcome = normalize(action, "```\nbody\n```")
    assert outcome == RawOutcome("body")
    assert outcome.to_wire() == "body"
    assert outcome.kind == "raw"


# ════════════════════════════════════════════════════════════════════
# CANONICAL RESULT
# ════════════════════════════════════════════════════════════════════

class TestCanonicalResult:

    def test_fenced_json_is_parsed(self, canonical_json):
        outcome = normalize(Action.GENERATE, f"```json\n{canonical_json}\n```")
        assert isinstance(outcome, StructuredOutcome)
        assert outcome.kind == "structured"
        assert len(outcome.result.generated_files) == 2

    def test_lint_ids_follow_model_order(self, canonical_json):
        result = parse_canonical_result(canonical_json)
        assert [item.id for item in result.lint_report] == [0, 1]

    def test_original_content_snapshot(self, canonical_json):
        result = parse_canonical_result(canonical_json)
        for generated in result.generated_files:
            assert generated.original_content == generated.content

    def test_wire_format_round_trips(self, canonical_json):
        outcome = normalize(Action.GENERATE, canonical_json)
        wire = json.loads(outcome.to_wire())
        assert set(wire) == {"risk_analysis", "lint_report", "generated_files"}
        assert wire["lint_report"][1]["id"] == 1
        assert "original_content" in wire["generated_files"][0]

    def test_lenient_score_and_casing(self, canonical_payload):
        canonical_payload["risk_analysis"] = {"score": "8/10", "priority": "high", "reasoning": ""}
        canonical_payload["lint_report"][0]["severity"] = "warning"
        result = parse_canonical_result(json.dumps(canonical_payload))
        assert result.risk_analysis.score == 8
        assert result.risk_analysis.priority == "High"
        assert result.lint_report[0].severity == "Warning"

    def test_score_is_clamped(self, canonical_payload):
        canonical_payload["risk_analysis"]["score"] = 14
        assert parse_canonical_result(json.dumps(canonical_payload)).risk_analysis.score == 10

    @pytest.mark.parametrize("severity", ["Info", "critical", "", None, 3])
    def test_unknown_severity_becomes_warning(self, canonical_payload, severity):
        canonical_payload["lint_report"].append({"severity": severity, "message": "tip", "file": "login.cy.js"})
        result = parse_canonical_result(json.dumps(canonical_payload))
        assert result.lint_report[2].severity == "Warning"
        assert len(result.generated_files) == 2

    def test_lint_entry_without_message(self, canonical_payload):
        canonical_payload["lint_report"].insert(0, {"severity": "Error", "file": "login.cy.js"})
        canonical_payload["lint_report"].append({"message": None})
        result = parse_canonical_result(json.dumps(canonical_payload))
        assert result.lint_report[0].message == ""
        assert result.lint_report[3].message == ""
        assert result.lint_report[3].severity == "Warning"
        assert result.lint_report[3].file == ""
        assert [item.id for item in result.lint_report] == [0, 1, 2, 3]
        assert result.lint_report[1].message == "Uses Page Object Model"

    @pytest.mark.parametrize("priority", ["Critical", "Medium-High", None])
    def test_unknown_priority_becomes_medium(self, canonical_payload, priority):
        canonical_payload["risk_analysis"]["priority"] = priority
        assert parse_canonical_result(json.dumps(canonical_payload)).risk_analysis.priority == "Medium"

    def test_missing_priority_and_reasoning(self, canonical_payload):
        canonical_payload["risk_analysis"] = {"score": 4}
        risk = parse_canonical_result(json.dumps(canonical_payload)).risk_analysis
        assert (risk.score, risk.priority, risk.reasoning) == (4, "Medium", "")

    def test_duplicate_paths_are_merged(self, canonical_payload):
        canonical_payload["generated_files"].append(
            {"path": "cypress/e2e/login.cy.js", "content": "// newer"}
        )
        result = parse_canonical_result(json.dumps(canonical_payload))
        paths = [f.path for f in result.generated_files]
        assert paths == ["cypress/support/pages/LoginPage.js", "cypress/e2e/login.cy.js"]
        assert result.generated_files[1].content == "// newer"
        assert result.generated_files[1].original_content == "// newer"

    def test_lint_report_is_not_filtered(self, canonical_payload):
        canonical_payload["lint_report"].append({"severity": "Error", "message": "x", "file": "N/A"})
        result = parse_canonical_result(json.dumps(canonical_payload))
        assert len(result.lint_report) == 3
        assert [item.id for item in result.valid_lint_items()] == [0, 1]

    def test_file_for_lint(self, canonical_json):
        result = parse_canonical_result(canonical_json)
        resolved = result.file_for_lint(result.lint_report[0])
        assert resolved.path == "cypress/support/pages/LoginPage.js"


# ════════════════════════════════════════════════════════════════════
# MALFORMED OUTPUT
# ════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("raw", [
    "Here is your test: describe(...)",
    "[1, 2, 3]",
    '{"risk_analysis": {"score": 5, "priority": "Low"}, "generated_files": "nope"}',
    '{"risk_analysis": null, "generated_files": [{"path": "a", "content": "b"}]}',
    '{"risk_analysis": {"score": 5, "priority": "Low"}, "lint_report": [], "generated_files": []}',
])
def test_malformed_generate_output(raw):
    with pytest.raises(MalformedResponseError) as exc:
        normalize(Action.GENERATE, raw)
    assert exc.value.status_code == 500
    assert exc.value.message
