import sys
import json
import os
from datetime import datetime
from typing import Any


# ═══════════════════════════════════════════════════════════════════════════════
# LOG FILTERING
# ═══════════════════════════════════════════════════════════════════════════════
# Only these scopes are shown at INFO level
# Everything else is gated behind QA_COPILOT_DEBUG

INFO_SCOPES = {
    "GENERATE",       # Request lifecycle
    "OPENAI",         # OpenAI adapter
    "GEMINI",         # Gemini adapter
    "SELF-CORRECT",   # Second pass verdict
    "ERROR",          # Classified failures
    "CRAWL",          # Page fetch + sanitize
    "EXPORT",         # Project ZIP
    "MONITORING",
    "SECURITY",
}

# DEBUG-only scopes (hidden by default)
DEBUG_SCOPES = {
    "PROMPT",
    "NORMALIZER",
    "REGISTRY",
}

DEBUG_MODE = os.getenv("QA_COPILOT_DEBUG", "false").lower() == "true"


def log(scope: str, message: str, data: Any = None) -> None:
    """
    Scoped console logging: `[HH:MM:SS] [SCOPE] message`.

    Scopes outside INFO_SCOPES print only with QA_COPILOT_DEBUG=true.
    Structured `data` is printed as indented JSON beneath the line.
    """
    if not DEBUG_MODE and scope not in INFO_SCOPES:
        return

    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] [{scope}] {message}")

    if data is not None:
        if isinstance(data, (dict, list)):
            data = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        print(f"  Data: {data}")

    sys.stdout.flush()
