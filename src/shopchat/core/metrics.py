"""Prometheus metrics for the shopchat application.

Custom business metrics that complement the auto-instrumented HTTP
metrics provided by ``prometheus-fastapi-instrumentator``.

All metrics use the ``shopchat_`` prefix.
"""

import logging

from fastapi import FastAPI
from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from shopchat.configs.config import AppConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Chat metrics
# ---------------------------------------------------------------------------

CHAT_REQUESTS_TOTAL = Counter(
    "shopchat_chat_requests_total",
    "Total chat requests, by classified intent and envelope status",
    ["intent", "status"],  # status: "ok" | "error"
)

CHAT_DURATION_SECONDS = Histogram(
    "shopchat_chat_duration_seconds",
    "End-to-end duration of a chat request",
    ["intent"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60),
)

# ---------------------------------------------------------------------------
# Tool call metrics
# ---------------------------------------------------------------------------

TOOL_CALLS_TOTAL = Counter(
    "shopchat_tool_calls_total",
    "Total catalog tool invocations, by tool and outcome",
    ["tool_name", "outcome"],  # found | found_pair | candidates | not_found | tool_error
)

LOOKUP_STAGE_FAILURES_TOTAL = Counter(
    "shopchat_lookup_stage_failures_total",
    "Lookup stages that failed and fell through to the next stage",
    ["stage"],
)

# ---------------------------------------------------------------------------
# LLM metrics
# ---------------------------------------------------------------------------

LLM_CALLS_TOTAL = Counter(
    "shopchat_llm_calls_total",
    "Total LLM completion calls, by result",
    ["status"],  # "ok" | "fallback" | "error"
)

LLM_LATENCY_SECONDS = Histogram(
    "shopchat_llm_latency_seconds",
    "Latency of LLM completion calls",
    buckets=(0.25, 0.5, 1, 2, 5, 10, 30, 60),
)


# ---------------------------------------------------------------------------
# App wiring
# ---------------------------------------------------------------------------


def setup_metrics(app: FastAPI, config: AppConfig) -> None:
    """Attach HTTP instrumentation and the ``/metrics`` endpoint to *app*.

    Must run while the app is being built: the instrumentator adds
    middleware, which Starlette refuses once the app has started.
    """
    Instrumentator(
        should_instrument_requests_inprogress=True,
        excluded_handlers=config.tracing.excluded_urls,
    ).instrument(app).expose(app, endpoint="/metrics")

    logger.info("Prometheus metrics initialised")
