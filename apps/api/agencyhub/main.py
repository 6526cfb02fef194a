"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from sqlalchemy import text

from agencyhub.core.config import settings
from agencyhub.core.structured_logging import configure_logging
from agencyhub.db.session import engine
from agencyhub.services.identity_service import AuthenticationRequired

configure_logging()
logger = logging.getLogger(__name__)

# ============================================================================
# Sentry Integration (optional, for production error tracking)
# ============================================================================

if settings.SENTRY_DSN and settings.ENV != "dev":
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        send_default_pii=False,
    )
    logger.info("Sentry initialized for error tracking")

# ============================================================================
# Rate Limiting
# ============================================================================

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from agencyhub.core.rate_limit import limiter


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Agency Hub API",
    description="Multi-tenant agency and sub-account API",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,  # Required for the session cookie
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)


@app.exception_handler(AuthenticationRequired)
async def authentication_required_handler(request: Request, exc: AuthenticationRequired):
    """Unauthenticated requests to protected routes go to the sign-in page."""
    logger.info("Redirecting unauthenticated request for %s to sign-in", request.url.path)
    return RedirectResponse(url=f"{settings.frontend_base_url}/sign-in", status_code=302)


# ============================================================================
# Routers
# ============================================================================

from agencyhub.routers import agency_router, subaccounts_router, users_router

app.include_router(agency_router)
app.include_router(subaccounts_router)
app.include_router(users_router)


# ============================================================================
# Public endpoints
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


@app.get("/site")
def site():
    """Public landing stub; no session required."""
    return {
        "name": "Agency Hub",
        "sign_in_url": f"{settings.frontend_base_url}/sign-in",
        "sign_up_url": f"{settings.frontend_base_url}/agency/sign-up",
    }
