# qa_copilot/lib/packaging.py
"""
Project packaging - zips generated files together with the boilerplate a
framework needs to run them (`npm install` + run script).
"""
import io
import json
import time
import zipfile
from textwrap import dedent
from typing import Dict, Iterable, Optional

from qa_copilot.core.constants import FixtureFormat
from qa_copilot.core.exceptions import MissingInputError
from qa_copilot.llm.prompts.frameworks import get_framework_rules


FIXTURE_EXTENSIONS = {
    FixtureFormat.JSON: "json",
    FixtureFormat.SQL: "sql",
    FixtureFormat.CSV: "csv",
}

CYPRESS_CONFIG = dedent("""\
    const { defineConfig } = require("cypress");

    module.exports = defineConfig({
      e2e: {
        setupNodeEvents(on, config) {
          // implement node event listeners here
        },
      },
    });
    """)

PLAYWRIGHT_CONFIG = dedent("""\
    import { defineConfig, devices } from '@playwright/test';

    export default defineConfig({
      testDir: './tests',
      fullyParallel: true,
      forbidOnly: !!process.env.CI,
      retries: process.env.CI ? 2 : 0,
      workers: process.env.CI ? 1 : undefined,
      reporter: 'html',
      use: {
        trace: 'on-first-retry',
      },
      projects: [
        {
          name: 'chromium',
          use: { ...devices['Desktop Chrome'] },
        },
      ],
    });
    """)

README_TEMPLATE = dedent("""\
    # QA Copilot Generated Project ({framework_name})

    This project was automatically generated by QA Copilot.
    Specs live in `{spec_dir}/`, fixtures in `{fixtures_dir}/`.

    ## How to Run

    1. Install dependencies:
       ```bash
       npm install
       ```

    2. Run Tests:
       ```bash
       {run_command}
       ```
    """)


def _package_json(scripts: Dict[str, str], dev_dependencies: Dict[str, str]) -> str:
    return json.dumps(
        {
            "name": "qa-copilot-test",
            "version": "1.0.0",
            "scripts": scripts,
            "devDependencies": dev_dependencies,
        },
        indent=2,
    )


def boilerplate_files(framework: str) -> Dict[str, str]:
    """Scaffolding files for a framework, keyed by archive path."""
    rules = get_framework_rules(framework)

    if rules.id == "playwright":
        files = {
            "package.json": _package_json(
                {"test": "npx playwright test", "test:ui": "npx playwright test --ui"},
                {"@playwright/test": "^1.40.0", "@types/node": "^20.0.0"},
            ),
            "playwright.config.ts": PLAYWRIGHT_CONFIG,
        }
        run_command = "npm run test"
    else:
        files = {
            "package.json": _package_json(
                {"cypress:open": "cypress open", "cypress:run": "cypress run"},
                {"cypress": "^13.0.0"},
            ),
            "cypress.config.js": CYPRESS_CONFIG,
            "cypress/support/e2e.js": "// Import commands.js using ES2015 syntax:\nimport './commands';\n",
            "cypress/support/commands.js": "// Custom commands go here\n",
        }
        run_command = "npm run cypress:open"

    readme = README_TEMPLATE
    for key, value in (
        ("{framework_name}", rules.display_name),
        ("{spec_dir}", rules.spec_dir),
        ("{fixtures_dir}", rules.fixtures_dir),
        ("{run_command}", run_command),
    ):
        readme = readme.replace(key, value)
    files["README.md"] = readme
    return files


def archive_name(framework: str) -> str:
    return f"qa-copilot-{get_framework_rules(framework).id}-project.zip"


def build_project_zip(framework: str, files: Iterable[dict], fixtures: Iterable[dict] = ()) -> bytes:
    """
    Build the project archive in memory.

    `files` are {path, content} mappings. `fixtures` are {content, format,
    name} mappings placed in the framework's fixture folder. Boilerplate is
    only added for paths the generated files don't already provide.

    Raises:
        MissingInputError: no files to package
    """
    generated = {}
    for f in files:
        path = (f.get("path") or "").strip().lstrip("/")
        if path:
            generated[path] = f.get("content") or ""

    for fixture in fixtures:
        path = fixture_path(framework, fixture.get("format") or FixtureFormat.JSON, fixture.get("name"))
        generated.setdefault(path, fixture.get("content") or "")

    if not generated:
        raise MissingInputError("No files to export.", field_name="files")

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for path, content in generated.items():
            zf.writestr(path, content)
        for path, content in boilerplate_files(framework).items():
            if path not in generated:
                zf.writestr(path, content)

    return buffer.getvalue()


def fixture_path(framework: str, fixture_format: FixtureFormat, name: Optional[str] = None) -> str:
    """Workspace path for a generated fixture, inside the framework's fixture folder."""
    fixture_format = FixtureFormat(fixture_format)
    ext = FIXTURE_EXTENSIONS[fixture_format]
    if not name:
        name = f"mock_data_{int(time.time() * 1000)}.{ext}"
    return f"{get_framework_rules(framework).fixtures_dir}/{name}"
