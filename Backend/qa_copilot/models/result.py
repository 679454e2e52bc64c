# qa_copilot/models/result.py
"""
Canonical result shapes.

`generate` produces a CanonicalResult; every other action produces plain
text. GenerationOutcome tags which of the two a response carries so callers
never guess whether to parse again.
"""
import json
from dataclasses import dataclass
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


PRIORITIES = ("High", "Medium", "Low")
SEVERITIES = ("Error", "Warning", "Good")


def _pick(value, allowed, fallback):
    """Case-insensitive match against `allowed`; anything else becomes `fallback`."""
    if isinstance(value, str):
        value = value.strip().capitalize()
        if value in allowed:
            return value
    return fallback


class RiskAnalysis(BaseModel):
    score: int = Field(ge=1, le=10)
    priority: Literal["High", "Medium", "Low"] = "Medium"
    reasoning: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, value):
        if isinstance(value, str):
            value = value.strip().split("/")[0]
        try:
            number = round(float(value))
        except (TypeError, ValueError):
            return value
        return min(10, max(1, number))

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value):
        # "Critical", "Medium-High" and the like are not worth failing a result over
        return _pick(value, PRIORITIES, "Medium")

    @field_validator("reasoning", mode="before")
    @classmethod
    def _text_or_empty(cls, value):
        return "" if value is None else value


class LintItem(BaseModel):
    id: int = 0
    severity: Literal["Error", "Warning", "Good"] = "Warning"
    message: str = ""
    file: str = ""

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, value):
        return _pick(value, SEVERITIES, "Warning")

    @field_validator("message", "file", mode="before")
    @classmethod
    def _text_or_empty(cls, value):
        return "" if value is None else value


class GeneratedFile(BaseModel):
    path: str
    content: str
    # Snapshot taken at normalization time; the editor diffs/reset against it
    original_content: str = ""


class CanonicalResult(BaseModel):
    risk_analysis: RiskAnalysis
    lint_report: List[LintItem] = Field(default_factory=list)
    generated_files: List[GeneratedFile] = Field(default_factory=list)

    def file_for_lint(self, item: LintItem) -> Optional[GeneratedFile]:
        """Resolve a lint entry to its file by substring match on the path."""
        if not item.file:
            return None
        for generated in self.generated_files:
            if item.file in generated.path:
                return generated
        return None

    def valid_lint_items(self) -> List[LintItem]:
        """
        Lint entries that resolve to a generated file.

        The core never filters lint_report itself; this is the view a
        consumer shows. Orphaned entries (placeholder names, unknown files)
        are left out.
        """
        return [
            item for item in self.lint_report
            if len(item.file) > 2 and item.file != "N/A" and self.file_for_lint(item) is not None
        ]


@dataclass(frozen=True)
class StructuredOutcome:
    result: CanonicalResult
    kind: Literal["structured"] = "structured"

    def to_wire(self) -> str:
        return json.dumps(self.result.model_dump(), ensure_ascii=False)


@dataclass(frozen=True)
class RawOutcome:
    text: str
    kind: Literal["raw"] = "raw"

    def to_wire(self) -> str:
        return self.text


GenerationOutcome = Union[StructuredOutcome, RawOutcome]
