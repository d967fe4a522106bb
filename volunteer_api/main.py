"""FastAPI application entry point."""
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from volunteer_api.core.config import settings
from volunteer_api.core.exceptions import register_exception_handlers
from volunteer_api.core.structured_logging import build_log_context, configure_logging
from volunteer_api.db.session import engine

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Volunteer Platform API",
    description="Regions, organizations, quests and rewards for volunteers",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

register_exception_handlers(app)

# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def request_logging(request: Request, call_next):
    """Tag every request with an X-Request-ID and log its outcome."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        extra=build_log_context(
            user_id=getattr(request.state, "user_id", None),
            request_id=request_id,
            route=request.url.path,
            method=request.method,
        ),
    )
    return response


# ============================================================================
# Routers
# ============================================================================

from volunteer_api.routers import (  # noqa: E402
    achievements,
    auth,
    categories,
    cities,
    experience,
    help_types,
    organization_types,
    organization_updates,
    organizations,
    quest_updates,
    quests,
    rabbitmq,
    regions,
    tickets,
    upload,
    users,
)

api = settings.API_PREFIX
api_v2 = settings.API_V2_PREFIX

app.include_router(auth.router, prefix=f"{api}/auth", tags=["auth"])
app.include_router(users.router, prefix=f"{api}/users", tags=["users"])
app.include_router(experience.router, prefix=f"{api}/experience", tags=["experience"])

# Geography and lookups
app.include_router(regions.router, prefix=f"{api}/regions", tags=["regions"])
app.include_router(cities.router, prefix=f"{api}/cities", tags=["cities"])
app.include_router(categories.router, prefix=f"{api}/categories", tags=["categories"])
app.include_router(help_types.router, prefix=f"{api}/help-types", tags=["help-types"])
app.include_router(
    organization_types.router, prefix=f"{api}/organization-types", tags=["organization-types"]
)

# Organizations
app.include_router(organizations.router, prefix=f"{api}/organizations", tags=["organizations"])
app.include_router(
    organization_updates.router,
    prefix=f"{api}/organization-updates",
    tags=["organization-updates"],
)

# Quests and rewards
app.include_router(quests.router, prefix=f"{api}/quests", tags=["quests"])
app.include_router(quest_updates.router, prefix=f"{api}/quest-updates", tags=["quest-updates"])
app.include_router(achievements.router, prefix=f"{api}/achievements", tags=["achievements"])

# Support, storage and messaging
app.include_router(tickets.router, prefix=f"{api}/tickets", tags=["tickets"])
app.include_router(upload.router, prefix=f"{api}/upload", tags=["upload"])
app.include_router(rabbitmq.router, prefix=f"{api}/rabbitmq", tags=["rabbitmq"])

# v2 bulk creation
app.include_router(categories.bulk_router, prefix=f"{api_v2}/categories", tags=["categories"])
app.include_router(cities.bulk_router, prefix=f"{api_v2}/cities", tags=["cities"])
app.include_router(
    organizations.bulk_router, prefix=f"{api_v2}/organizations", tags=["organizations"]
)


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
