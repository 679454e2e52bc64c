# tests/conftest.py
"""
Shared pytest fixtures for QA Copilot tests.

Provides:
- Canned canonical payloads
- A sample generate request
- An ASGI client wired to a stub provider registry
"""
import json
import os

# Keep the per-IP limiter out of the way for in-process clients
os.environ.setdefault("RATE_LIMIT", "10000/minute")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from typing import Any, Dict

from qa_copilot.llm.adapter import ProviderRegistry
from qa_copilot.models.request import GenerationRequest
from qa_copilot.orchestration import GenerationOrchestrator


# ═══════════════════════════════════════════════════════
# FIXTURES - Payloads
# ═══════════════════════════════════════════════════════

@pytest.fixture
def canonical_payload() -> Dict[str, Any]:
    return {
        "risk_analysis": {"score": 7, "priority": "High", "reasoning": "Login guards every flow."},
        "lint_report": [
            {"severity": "Good", "message": "Uses Page Object Model", "file": "LoginPage.js"},
            {"severity": "Warning", "message": "Hardcoded password", "file": "login.cy.js"},
        ],
        "generated_files": [
            {
                "path": "cypress/support/pages/LoginPage.js",
                "content": "class LoginPage {\n  visit() { cy.visit('/login'); }\n}\nexport default new LoginPage();",
            },
            {
                "path": "cypress/e2e/login.cy.js",
                "content": "import loginPage from '../support/pages/LoginPage';\n\ndescribe('Login', () => {\n  it('logs in', () => { loginPage.visit(); });\n});",
            },
        ],
    }


@pytest.fixture
def canonical_json(canonical_payload) -> str:
    return json.dumps(canonical_payload)


@pytest.fixture
def generate_request() -> GenerationRequest:
    return GenerationRequest(
        action="generate",
        provider="gemini",
        apiKeyOverride="test-key",
        framework="cypress",
        testCase="User logs in with valid credentials",
    )


# ═══════════════════════════════════════════════════════
# FIXTURES - App client
# ═══════════════════════════════════════════════════════

@pytest.fixture
def app():
    from qa_copilot.main import app as fastapi_app
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def use_providers(app):
    """Route /api/generate through a registry built from the given providers."""
    from qa_copilot.api.generate import get_orchestrator

    def _install(*providers):
        registry = ProviderRegistry(providers)
        app.dependency_overrides[get_orchestrator] = lambda: GenerationOrchestrator(registry)
        return registry

    return _install


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
