# storerate/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from storerate.core.config import get_settings
from storerate.core.errors import (
    FormError,
    form_error_handler,
    validation_error_handler,
)

# Routers
from storerate.routers.auth import router as auth_router
from storerate.routers.dashboard import router as dashboard_router
from storerate.routers.admin_stats import router as admin_stats_router
from storerate.routers.users import router as users_router
from storerate.routers.stores import router as stores_router

# Fails fast when SUPABASE_URL / SUPABASE_KEY are missing.
settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Log which Supabase project and optional features are in use.

    Shutdown:
      - Nothing to release; clients are per request.
    """
    logger.info("Startup: using Supabase project at %s", settings.SUPABASE_URL)
    if settings.SUPABASE_JWT_SECRET:
        logger.info("Startup: access tokens are verified locally before use")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        logger.info("Startup: no service role key, admin-created users sign up normally")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Form errors: {"errors": {field: message}} ---
app.add_exception_handler(FormError, form_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

# Versioned API prefix, e.g. /api/v1
app.include_router(auth_router, prefix=settings.API_V1_STR)
app.include_router(dashboard_router, prefix=settings.API_V1_STR)
app.include_router(admin_stats_router, prefix=settings.API_V1_STR)
app.include_router(users_router, prefix=settings.API_V1_STR)
app.include_router(stores_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "storerate"}
