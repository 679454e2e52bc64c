# qa_copilot/core/config.py
"""
Application configuration - single source of truth for all settings.
"""
import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


@dataclass
class LLMSettings:
    """LLM provider configuration."""
    default_provider: str = field(default_factory=lambda: os.getenv("DEFAULT_LLM_PROVIDER", "gemini"))
    openai_api_key: Optional[str] = field(default_factory=lambda: os.getenv("OPENAI_API_KEY"))
    gemini_api_key: Optional[str] = field(default_factory=lambda: os.getenv("GEMINI_API_KEY"))
    openai_model: str = field(default_factory=lambda: os.getenv("OPENAI_MODEL", "gpt-4o"))
    gemini_model: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"))
    # None = no bound at this layer; the caller's transport timeout applies
    request_timeout: Optional[float] = field(default_factory=lambda: _optional_float("LLM_REQUEST_TIMEOUT"))

    def default_key_for(self, provider: str) -> Optional[str]:
        """Server-side fallback credential for a provider id."""
        return {
            "openai": self.openai_api_key,
            "gemini": self.gemini_api_key,
        }.get(provider)


@dataclass
class CrawlSettings:
    """Crawl endpoint configuration."""
    max_html_length: int = field(default_factory=lambda: int(os.getenv("CRAWL_MAX_HTML_LENGTH", "50000")))
    timeout: float = field(default_factory=lambda: float(os.getenv("CRAWL_TIMEOUT", "20")))
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )


@dataclass
class Settings:
    """Main application settings."""
    llm: LLMSettings = field(default_factory=LLMSettings)
    crawl: CrawlSettings = field(default_factory=CrawlSettings)
    port: int = field(default_factory=lambda: int(os.getenv("PORT", 8000)))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    cors_origins: str = field(default_factory=lambda: os.getenv("CORS_ORIGINS", "*"))
    rate_limit: str = field(default_factory=lambda: os.getenv("RATE_LIMIT", "100/minute"))


# Singleton instance
settings = Settings()
