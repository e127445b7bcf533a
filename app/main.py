"""Smart Recipe Generator API - FastAPI Application."""

import httpx
import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.logger import logger

settings = get_settings()

# Query parameters that carry credentials (Gemini `?key=`)
SECRET_QUERY_PARAMS = ("key",)


def _strip_secret_params(data: dict) -> None:
    """Remove credential query parameters from httpx breadcrumb/span data in place."""
    url = data.get("url")
    if isinstance(url, str):
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL:
            parsed = None
        if parsed is not None:
            for name in SECRET_QUERY_PARAMS:
                parsed = parsed.copy_remove_param(name)
            data["url"] = str(parsed)

    query = data.get("http.query")
    if isinstance(query, str):
        params = httpx.QueryParams(query)
        for name in SECRET_QUERY_PARAMS:
            params = params.remove(name)
        data["http.query"] = str(params)


def scrub_breadcrumb(crumb: dict, hint: dict) -> dict:
    if isinstance(crumb.get("data"), dict):
        _strip_secret_params(crumb["data"])
    return crumb


def scrub_event(event: dict, hint: dict) -> dict:
    """Scrub breadcrumbs and span data on error events and transactions."""
    breadcrumbs = event.get("breadcrumbs")
    if isinstance(breadcrumbs, dict):
        breadcrumbs = breadcrumbs.get("values")
    for crumb in breadcrumbs or []:
        scrub_breadcrumb(crumb, hint)

    for span in event.get("spans") or []:
        if isinstance(span.get("data"), dict):
            _strip_secret_params(span["data"])
    return event


# Initialize Sentry for error monitoring
if settings.sentry_dsn:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.2,
        # Don't send PII
        send_default_pii=False,
        before_breadcrumb=scrub_breadcrumb,
        before_send=scrub_event,
        before_send_transaction=scrub_event,
    )
    logger.info(f"📊 Sentry initialized for {settings.environment}")
else:
    logger.info("📊 Sentry not configured (no SENTRY_DSN)")

from app.routers import recipes_router, health_router
from app.routers.recipes import MISSING_INGREDIENTS

# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="Generate recipes from the ingredients you have, with AI",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(recipes_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """A malformed recipe request is a client error like a missing ingredient list."""
    logger.warning(f"Rejected request body on {request.url.path}: {len(exc.errors())} validation error(s)")
    return JSONResponse(status_code=400, content={"detail": MISSING_INGREDIENTS})


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "docs": "/docs",
        "health": "/health",
    }


# Startup/shutdown events
@app.on_event("startup")
async def startup():
    """Run on application startup."""
    logger.info(f"🚀 {settings.api_title} v{settings.api_version}")
    logger.info(f"📍 Environment: {settings.environment}")
    logger.info(
        f"🤖 AI provider: {settings.ai.provider_name or 'none'} "
        f"(endpoint configured: {settings.ai.endpoint_configured})"
    )


@app.on_event("shutdown")
async def shutdown():
    """Run on application shutdown."""
    logger.info("👋 Shutting down Smart Recipe Generator API")
