"""
Table Manager - FastAPI Backend
Main application entry point
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import uvicorn

from table_manager.core.config import settings
from table_manager.core.db import init_db
from table_manager.core.errors import SeatingError
from table_manager.api import routes_admin, routes_guest, routes_public
from table_manager.utils.responses import seating_error_response

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    init_db()
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Table Manager",
    description="Event seating and venue layout backend",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(SeatingError)
async def seating_error_handler(request: Request, exc: SeatingError):
    """Translate classified failures into the error envelope"""
    if exc.error_code == "storage_error":
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return seating_error_response(exc)

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_guest.router, prefix="/api/guest", tags=["guest"])
app.include_router(routes_admin.router, prefix="/api", tags=["admin"])

# Mount static files (the single-page front end)
os.makedirs("public", exist_ok=True)
app.mount("/", StaticFiles(directory="public", html=True), name="public")

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True
    )
