# highlights/observability.py
from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# ---- Prometheus metrics (low-cardinality labels) ----
REQUEST_COUNT = Counter(
    "hl_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "hl_http_request_duration_seconds",
    "HTTP request latency (seconds)",
    buckets=(0.005, 0.01, 0.02, 0.05, 0.1, 0.2, 0.5, 1.0, 2.5, 5.0, 10.0),
)

CACHE_LOOKUPS = Counter(
    "hl_year_cache_lookups_total",
    "Year cache lookups",
    ["result"],  # hit | miss | forced
)

UPSTREAM_CALLS = Counter(
    "hl_upstream_calls_total",
    "Calls to the generative-text API",
    ["outcome"],  # ok | http_error | no_content | transport_error (empty answers: EMPTY_RESULTS)
)

EMPTY_RESULTS = Counter(
    "hl_empty_results_total",
    "Upstream answers that coerced to no usable items",
)

UPSTREAM_LATENCY = Histogram(
    "hl_upstream_request_duration_seconds",
    "Upstream generateContent latency (seconds)",
    buckets=(0.1, 0.25, 0.5, 1.0, 2.0, 4.0, 8.0, 16.0),
)

COALESCED_WAITS = Counter(
    "hl_coalesced_waits_total",
    "Lookups that joined an upstream call already in flight for the same year",
)


def metrics_endpoint():
    """Return Prometheus exposition format."""
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


# ---- Per-request timing + JSON request log ----
async def timing_middleware(request: Request, call_next: Callable):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start

    # route template, not the raw path: unknown URLs must not mint new label values
    route = request.scope.get("route")
    path = getattr(route, "path", "unmatched")
    status = str(response.status_code)

    REQUEST_COUNT.labels(method=request.method, path=path, status=status).inc()
    REQUEST_LATENCY.observe(elapsed)

    logging.getLogger("request").info(
        json.dumps(
            {
                "method": request.method,
                "path": request.url.path,
                "query": request.url.query or None,
                "status": status,
                "duration_s": round(elapsed, 6),
                "client": request.client.host if request.client else None,
            }
        )
    )
    return response
