# qa_copilot/api/__init__.py
"""
API module - All route handlers.
"""
from . import health, generate, crawl, export, providers

__all__ = [
    "health",
    "generate",
    "crawl",
    "export",
    "providers",
]
