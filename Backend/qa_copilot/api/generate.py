# qa_copilot/api/generate.py
"""
POST /api/generate - the single generation endpoint.

Every response carries exactly one of `result` or `error`.
"""
from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from qa_copilot.core.logging import log
from qa_copilot.lib.monitoring import record_generation
from qa_copilot.models.request import GenerationRequest
from qa_copilot.orchestration import ErrorClassifier, GenerationOrchestrator

router = APIRouter(prefix="/api", tags=["Generate"])


def get_orchestrator() -> GenerationOrchestrator:
    return GenerationOrchestrator()


@router.post("/generate")
async def generate(
    request: GenerationRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    action = request.action.value
    provider = request.provider.value

    try:
        outcome = await orchestrator.run(request)
    except Exception as e:
        classified = ErrorClassifier.classify(e)
        record_generation(action, provider, classified.kind)
        return JSONResponse(status_code=classified.status_code, content=classified.envelope())

    record_generation(action, provider, "success")
    log("GENERATE", f"✅ {action} via {provider} -> {outcome.kind}")
    return {"result": outcome.to_wire(), "kind": outcome.kind}
