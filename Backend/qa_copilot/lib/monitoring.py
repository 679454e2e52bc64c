# qa_copilot/lib/monitoring.py
from fastapi import FastAPI
from prometheus_client.registry import CollectorRegistry as Registry
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator
from qa_copilot.core.logging import log

# Create a separate registry
registry = Registry()

generation_requests = Counter(
    'qa_copilot_generation_requests_total',
    'Generation requests by action, provider and outcome',
    ['action', 'provider', 'outcome'],
    registry=registry
)


def record_generation(action: str, provider: str, outcome: str):
    """Count one /api/generate request. outcome is "success" or the error kind."""
    generation_requests.labels(action=action, provider=provider, outcome=outcome).inc()


def register_monitoring(app: FastAPI):
    """
    Registers Prometheus monitoring on the FastAPI app.
    Request counts and durations come from the instrumentator; /metrics
    exposes them together with the generation counter.
    """
    instrumentator = Instrumentator(
        excluded_handlers=["/metrics"],  # Don't monitor the metrics endpoint itself
        registry=registry
    ).instrument(app)

    instrumentator.expose(app, include_in_schema=False, should_gzip=True)

    log("MONITORING", "Prometheus instrumentation registered at /metrics.")
