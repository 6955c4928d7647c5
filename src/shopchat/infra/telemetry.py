"""OpenTelemetry bootstrap — tracing initialisation and helpers.

Configures a ``TracerProvider`` with an OTLP HTTP exporter when tracing is
enabled via ``TracingConfig``.  When disabled the module is a graceful no-op
and ``tracer`` hands out non-recording spans.

Auto-instrumentations wired here:

- **FastAPI** (inbound HTTP spans)
- **httpx** (outbound HTTP spans — tool endpoints and the LLM service)

Usage::

    from shopchat.infra.telemetry import SPAN_LLM_COMPLETE, tracer

    with tracer.start_as_current_span(SPAN_LLM_COMPLETE) as span:
        ...
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from opentelemetry import trace

from shopchat.configs.system import TracingConfig

logger = logging.getLogger(__name__)

tracer = trace.get_tracer("shopchat")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_CHAT_PIPELINE = "chat.pipeline"
SPAN_TOOL_LOOKUP = "tool.lookup"
SPAN_TOOL_COMPARE = "tool.compare"
SPAN_LLM_COMPLETE = "llm.complete"

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_CHAT_INTENT = "chat.intent"
ATTR_CHAT_HISTORY_LEN = "chat.history_len"
ATTR_TOOL_BACKEND = "tool.backend"
ATTR_TOOL_OUTCOME = "tool.outcome"
ATTR_LLM_MODEL = "llm.model"
ATTR_LLM_MESSAGE_COUNT = "llm.message_count"
ATTR_LLM_STATUS = "llm.status_code"


def init_telemetry(
    app: FastAPI | None = None,
    settings: TracingConfig | None = None,
) -> None:
    """Initialise the OTEL ``TracerProvider`` and auto-instrumentations.

    No-op when *settings* is ``None`` or tracing is disabled.
    """
    if settings is None or not settings.enabled:
        logger.info("OpenTelemetry tracing disabled.")
        return

    if not settings.endpoint:
        logger.warning(
            "Tracing enabled but no OTLP endpoint configured — "
            "skipping OpenTelemetry setup."
        )
        return

    from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
        OTLPSpanExporter,
    )
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
    from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

    resource = Resource.create({"service.name": settings.service_name})
    sampler = ParentBased(root=TraceIdRatioBased(settings.sample_rate))
    provider = TracerProvider(resource=resource, sampler=sampler)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.endpoint))
    )
    trace.set_tracer_provider(provider)

    if app is not None:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        FastAPIInstrumentor.instrument_app(
            app, excluded_urls=",".join(settings.excluded_urls)
        )

    from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

    HTTPXClientInstrumentor().instrument()

    logger.info(
        "OpenTelemetry tracing initialised (service=%s).", settings.service_name
    )
