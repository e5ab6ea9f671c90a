#!/usr/bin/env python3

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .core.auth import verify_token
from .core.logging import setup_logging
from .models.models import GenerateRequest

logger = logging.getLogger(__name__)

# Application start time for uptime calculation
_app_start_time = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    setup_logging()
    logger.info("Starting graph XSD service")

    yield

    logger.info("Shutting down graph XSD service")


app = FastAPI(
    title="Graph XSD API",
    description="API for generating XML Schema documents from class graphs",
    version=os.getenv("APP_VERSION", "unknown"),
    lifespan=lifespan
)

# CORS middleware
allowed_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_version_header(request, call_next):
    """Add version information to response headers"""
    response = await call_next(request)
    response.headers["X-API-Version"] = os.getenv("APP_VERSION", "unknown")
    return response


@app.get("/healthz")
async def health_check():
    """Liveness probe - checks if application is alive and can serve requests"""
    current_time = time.time()
    return {
        "status": "healthy",
        "timestamp": current_time,
        "uptime": current_time - _app_start_time,
        "api_version": os.getenv("APP_VERSION", "unknown"),
    }


# XSD Generation Routes

@app.post("/api/xsd/generate")
async def generate_xsd(
    request: GenerateRequest,
    token: str = Depends(verify_token)
):
    """Generate an XSD document for a class and everything it references.

    Args:
        request: Graph nodes, root class uid and generation options
        token: Authentication token
    """
    from .handlers.xsd import handle_xsd_generation

    content, filename = handle_xsd_generation(request)

    return Response(
        content=content,
        media_type="application/xml",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"'
        }
    )


@app.post("/api/xsd/tree")
async def generate_xsd_tree(
    request: GenerateRequest,
    token: str = Depends(verify_token)
):
    """Generate the schema tree (attributes and child collections) as JSON."""
    from .handlers.xsd import handle_schema_tree
    return handle_schema_tree(request)
