# qa_copilot/main.py
"""
QA Copilot Backend - test automation code generation over LLM providers.
"""
import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

# Rate limiting
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from qa_copilot.api import crawl, export, generate, health, providers
from qa_copilot.core.config import Settings, settings as default_settings
from qa_copilot.core.exceptions import QACopilotError
from qa_copilot.core.logging import log
from qa_copilot.lib.monitoring import register_monitoring
from qa_copilot.llm.adapter import get_registry
from qa_copilot.orchestration import ErrorClassifier


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry = get_registry()
    log("GENERATE", f"🚀 QA Copilot ready, providers: {', '.join(p.display_name for p in registry.all())}")
    yield
    log("GENERATE", "🔌 Shutting down")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"Invalid request: {location}: {first.get('msg')}"
    return f"Invalid request: {first.get('msg')}"


def _install_error_envelope(app: FastAPI) -> None:
    """Every failure leaves the service as {"error": message}."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        log("ERROR", f"ValidationError -> 400: {message}", data=exc.errors())
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(QACopilotError)
    async def qa_copilot_error_handler(request: Request, exc: QACopilotError):
        classified = ErrorClassifier.classify(exc)
        return JSONResponse(status_code=classified.status_code, content=classified.envelope())


def create_app(settings: Settings = default_settings) -> FastAPI:
    """Assemble the service: middleware, error envelope, metrics and routers."""
    app = FastAPI(
        title="QA Copilot",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_monitoring(app)

    # CORS - comma-separated CORS_ORIGINS, "*" allows any origin
    origins = ["*"] if settings.cors_origins == "*" else [o.strip() for o in settings.cors_origins.split(",")]
    if origins == ["*"] and not settings.debug:
        log("SECURITY", "⚠️ CORS allows any origin - set CORS_ORIGINS in production")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Per client IP, e.g. RATE_LIMIT="50/minute"
    limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    log("SECURITY", f"🛡️ Rate limiting enabled: {settings.rate_limit}")

    _install_error_envelope(app)

    for module in (health, generate, crawl, export, providers):
        app.include_router(module.router)

    return app


app = create_app()


if __name__ == "__main__":
    log("GENERATE", f"🔑 Keys loaded: gemini={bool(default_settings.llm.gemini_api_key)} openai={bool(default_settings.llm.openai_api_key)}")
    uvicorn.run(
        "qa_copilot.main:app",
        host="0.0.0.0",
        port=default_settings.port,
        reload=default_settings.debug,
    )
