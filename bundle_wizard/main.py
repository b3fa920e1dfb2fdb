# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager
from typing import Any, Dict
import logging
import os
import uuid

from fastapi import FastAPI, Request, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from . import config
from . import db
from .logging_config import setup_logging
from .routes import (
    wizard_router,
    admin_products_router,
    admin_flavors_router,
    admin_bundles_router,
)
from .services.wizard_sessions import get_cache_stats

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # No migrations: catalog tables are created on startup if missing
    db.init_db()
    logger.info("Bundle Wizard API started")
    yield


app = FastAPI(
    title="Bundle Wizard API",
    description="Flavor wizard and catalog back office for restaurant bundles",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Wizard", "description": "Customer-facing bundle flavor wizard"},
        {"name": "Admin - Products", "description": "Admin endpoints for products"},
        {"name": "Admin - Flavors", "description": "Admin endpoints for flavors"},
        {"name": "Admin - Bundles", "description": "Admin endpoints for bundle components"},
    ],
)


# ---------- Request ID Middleware ----------
# Adds a unique request ID to each request for debugging and log correlation


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each request.
    The ID is available in request.state.request_id and returned in X-Request-ID header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)

# In production, set CORS_ORIGINS to restrict allowed origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Health ----------


@app.get("/health", tags=["Health"])
def health() -> Dict[str, Any]:
    """Health check endpoint. Returns ok if the service is running."""
    return {"status": "ok", "open_wizards": get_cache_stats()["size"]}


# ---------- Include Routers with API Version Prefix ----------
# All API endpoints are available under /api/v1/
# Example: /api/v1/wizard/bundles/{id}, /api/v1/admin/flavors, etc.

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(wizard_router)
api_v1_router.include_router(admin_products_router)
api_v1_router.include_router(admin_flavors_router)
api_v1_router.include_router(admin_bundles_router)

app.include_router(api_v1_router)

app.include_router(wizard_router)
app.include_router(admin_products_router)
app.include_router(admin_flavors_router)
app.include_router(admin_bundles_router)


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "bundle_wizard.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
