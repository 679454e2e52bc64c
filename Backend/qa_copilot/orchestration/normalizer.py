# qa_copilot/orchestration/normalizer.py
"""
Response Normalizer - raw provider text -> canonical outcome.

    generate                  -> fences stripped, JSON parsed, CanonicalResult
    fix / refine / debug      -> fences stripped, code returned verbatim
    explain / generate_fixture-> fences stripped, text returned

A JSON failure on `generate` is fatal for the request: downstream consumers
assume a fully typed result, so no partial result is ever returned.
"""
import json
import re
from typing import Any, Dict, List

from pydantic import ValidationError

from qa_copilot.core.constants import Action
from qa_copilot.core.exceptions import MalformedResponseError
from qa_copilot.core.logging import log
from qa_copilot.models.result import CanonicalResult, GenerationOutcome, RawOutcome, StructuredOutcome


# Opening fence: ``` optionally followed by a language tag, only when the tag
# sits alone on the fence line
FENCE_OPEN = re.compile(r"^\s*```(?:[\w+.#-]*[ \t]*\r?\n)?")
FENCE_CLOSE = re.compile(r"\r?\n?[ \t]*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove one leading and one trailing markdown fence, then outer whitespace."""
    if not text:
        return ""
    stripped = FENCE_OPEN.sub("", text, count=1)
    stripped = FENCE_CLOSE.sub("", stripped, count=1)
    return stripped.strip()


def _dedupe_files(files: List[Any]) -> List[Any]:
    """Merge entries sharing a path: first position kept, later content wins."""
    by_path: Dict[str, Dict[str, Any]] = {}
    order: List[str] = []
    passthrough: List[Any] = []

    for entry in files:
        if not isinstance(entry, dict) or not isinstance(entry.get("path"), str):
            # Left for schema validation to reject
            passthrough.append(entry)
            continue
        path = entry["path"]
        if path in by_path:
            log("NORMALIZER", f"Duplicate generated file path merged: {path}")
            by_path[path] = {**by_path[path], **entry}
        else:
            by_path[path] = dict(entry)
            order.append(path)

    return [by_path[p] for p in order] + passthrough


def parse_canonical_result(text: str) -> CanonicalResult:
    """
    Parse fence-stripped `generate` output into a CanonicalResult.

    Lint entries get a stable id equal to their position in the model's
    ordering; every file gets its original_content snapshot.

    Raises:
        MalformedResponseError: not JSON, not an object, wrong shape, or no files
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"AI returned invalid JSON: {e.msg}", raw_excerpt=text)

    if not isinstance(data, dict):
        raise MalformedResponseError("AI response is not a JSON object", raw_excerpt=text)

    lint_report = data.get("lint_report") or []
    files = data.get("generated_files") or []
    if not isinstance(lint_report, list) or not isinstance(files, list):
        raise MalformedResponseError(
            "lint_report and generated_files must be arrays", raw_excerpt=text
        )

    shaped = {
        "risk_analysis": data.get("risk_analysis"),
        "lint_report": [
            {**item, "id": index} if isinstance(item, dict) else item
            for index, item in enumerate(lint_report)
        ],
        "generated_files": [
            {**entry, "original_content": entry.get("content", "")} if isinstance(entry, dict) else entry
            for entry in _dedupe_files(files)
        ],
    }

    try:
        result = CanonicalResult.model_validate(shaped)
    except ValidationError as e:
        raise MalformedResponseError(
            f"AI response does not match the expected structure: {e.error_count()} error(s)",
            raw_excerpt=text,
        )

    if not result.generated_files:
        raise MalformedResponseError("AI response contains no generated files", raw_excerpt=text)

    return result


def normalize(action: Action, raw: str) -> GenerationOutcome:
    """Convert a raw provider response into the tagged outcome for its action."""
    text = strip_code_fences(raw or "")

    if action == Action.GENERATE:
        result = parse_canonical_result(text)
        log(
            "NORMALIZER",
            f"Parsed {len(result.generated_files)} file(s), {len(result.lint_report)} lint item(s)",
        )
        return StructuredOutcome(result)

    return RawOutcome(text)
