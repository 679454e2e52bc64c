# qa_copilot/llm/prompts/frameworks.py
"""
Framework rule table.

Maps a target test framework id to the structural conventions injected into
generation prompts. Built once at import and exposed read-only. Unknown ids
resolve to the Cypress rules; that fallback is part of the contract, not an
error.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from qa_copilot.core.constants import DEFAULT_FRAMEWORK


@dataclass(frozen=True)
class FrameworkRules:
    id: str
    display_name: str
    prompt_block: str
    spec_dir: str
    fixtures_dir: str


_CYPRESS = FrameworkRules(
    id="cypress",
    display_name="Cypress",
    prompt_block="""
    FRAMEWORK: Cypress (JavaScript)
    STRICT FILE STRUCTURE:
    1. Spec Files: Must be in "cypress/e2e/..." with extension ".cy.js"
    2. Page Objects: Must be in "cypress/support/pages/..." with extension ".js"
    3. Fixtures: "cypress/fixtures/..."
    4. SYNTAX: Use cy.get(), cy.visit(), etc.
""",
    spec_dir="cypress/e2e",
    fixtures_dir="cypress/fixtures",
)

_PLAYWRIGHT = FrameworkRules(
    id="playwright",
    display_name="Playwright",
    prompt_block="""
    FRAMEWORK: Playwright (TypeScript)
    STRICT FILE STRUCTURE:
    1. Spec Files: Must be in "tests/e2e/..." with extension ".spec.ts"
    2. Page Objects: Must be in "pages/..." with extension ".ts" (DO NOT put in cypress folder!)
    3. Utils: "utils/..."
    4. SYNTAX: Use await page.locator(), await page.goto(), etc.
    5. FORBIDDEN: Do NOT use any folder named 'cypress'.
""",
    spec_dir="tests/e2e",
    fixtures_dir="tests/fixtures",
)


FRAMEWORK_RULES: Mapping[str, FrameworkRules] = MappingProxyType({
    _CYPRESS.id: _CYPRESS,
    _PLAYWRIGHT.id: _PLAYWRIGHT,
})


def get_framework_rules(framework: str) -> FrameworkRules:
    """Rules for a framework id; unknown or empty ids get the default framework."""
    key = (framework or "").strip().lower()
    return FRAMEWORK_RULES.get(key, FRAMEWORK_RULES[DEFAULT_FRAMEWORK])


def is_known_framework(framework: str) -> bool:
    return (framework or "").strip().lower() in FRAMEWORK_RULES
