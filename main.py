"""
EarthSafe API - FastAPI Application Entry Point

This is the main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.database import init_db, close_db
from app.middleware import setup_http_middleware
from app.utils.error_handling import setup_exception_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.app_env}")

    # Initialize database (dev only - use migrations in production)
    if settings.is_development:
        await init_db()
        logger.info("Database tables initialized")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await close_db()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Production, sales, compliance and lending records for artisanal mines",
    version="1.0.0",
    docs_url="/api/docs" if not settings.is_production else None,
    redoc_url="/api/redoc" if not settings.is_production else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_http_middleware(
    app=app,
    development_mode=settings.is_development,
    uploads_prefix=settings.uploads_url_prefix,
)

setup_exception_handlers(app)

# Uploaded files (receipts, compliance documents)
uploads_dir = Path(settings.storage_local_path)
uploads_dir.mkdir(parents=True, exist_ok=True)
app.mount(settings.uploads_url_prefix, StaticFiles(directory=str(uploads_dir)), name="uploads")


# ===========================================
# API ROUTES
# ===========================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "message": f"{settings.app_name} is running",
    }


# ===========================================
# INCLUDE ROUTERS
# ===========================================

from app.routers import (  # noqa: E402
    auth, organizations, shifts, equipment,
    expenses, payroll, receipts, sales,
    loans, compliance, inventory, dashboard, demo,
)

# Users & organizations
app.include_router(auth.router, prefix="/api")
app.include_router(organizations.router, prefix="/api")

# Production
app.include_router(shifts.router, prefix="/api")
app.include_router(equipment.router, prefix="/api")

# Finance
app.include_router(expenses.router, prefix="/api")
app.include_router(payroll.router, prefix="/api")
app.include_router(receipts.router, prefix="/api")
app.include_router(sales.router, prefix="/api")
app.include_router(dashboard.router, prefix="/api")

# Lending
app.include_router(loans.router, prefix="/api")

# Compliance & inventory
app.include_router(compliance.router, prefix="/api")
app.include_router(inventory.router, prefix="/api")

# Demo data
app.include_router(demo.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
    )
