# highlights/main.py
from __future__ import annotations

import httpx
from fastapi import FastAPI, Request

from highlights.cache import YearCache
from highlights.errors import HighlightsError, highlights_error_handler
from highlights.logging_conf import setup_logging

# --- Observability ---
from highlights.observability import metrics_endpoint, timing_middleware

# --- Routers ---
from highlights.routers import achievement  # /api/achievement
from highlights.schemas import HealthResponse, VersionResponse
from highlights.service import LookupService
from highlights.settings import Settings, get_settings
from highlights.upstream import GeminiClient
from highlights.utils import utc_now_iso
from highlights.version import SERVICE_NAME, SERVICE_VERSION, service_version_payload


def build_lookup_service(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> LookupService:
    cache = YearCache(ttl_sec=settings.cache_ttl_sec, max_entries=settings.cache_max_entries)
    upstream = GeminiClient(
        api_key=settings.api_key,
        endpoint=settings.endpoint,
        timeout=settings.upstream_timeout_sec,
        transport=transport,
    )
    return LookupService(cache=cache, upstream=upstream)


def create_app(
    settings: Settings | None = None,
    *,
    lookup: LookupService | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the app. The lookup service (and its cache) is created here, once per
    app, and shared by every request through app.state.lookup.
    `transport` is handed to the upstream httpx client (tests use MockTransport).
    """
    settings = settings or get_settings()
    app = FastAPI(title="Year Highlights", version=SERVICE_VERSION)
    app.state.settings = settings
    app.state.lookup = lookup or build_lookup_service(settings, transport=transport)

    # --- Include routers ---
    app.include_router(achievement.router)

    # --- Errors ---
    app.add_exception_handler(HighlightsError, highlights_error_handler)

    # --- Observability ---
    app.middleware("http")(timing_middleware)

    # --- Utility endpoints ---
    @app.get("/health", response_model=HealthResponse)
    def health(request: Request):
        lookup_service: LookupService = request.app.state.lookup
        configured = lookup_service.upstream.configured
        return {
            "status": "ok" if configured else "degraded",
            "as_of": utc_now_iso(),
            "service": SERVICE_NAME,
            "credential_configured": configured,
            "cached_years": len(lookup_service.cache),
        }

    @app.get("/version", response_model=VersionResponse)
    def version(request: Request):
        p = service_version_payload()
        return VersionResponse(
            service=p["service"],
            service_version=p["service_version"],
            upstream_endpoint=request.app.state.lookup.upstream.endpoint,
        )

    @app.get("/metrics")
    def metrics():
        return metrics_endpoint()

    return app


# --- App ---
setup_logging()
app = create_app()
