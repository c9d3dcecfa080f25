"""
Main HTTP server for the Apollo Devtools panel.

Serves recent activity and cache endpoints.
"""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.config import get_config
from .cache_api import router as cache_router
from .recent_activity_api import reset_sessions
from .recent_activity_api import router as recent_router

logging.basicConfig(
    level=get_config().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Apollo Devtools API",
    description="GraphQL client cache inspection and recent activity API",
    version=__version__,
)

# The panel runs in the browser devtools, on a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(recent_router)
app.include_router(cache_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Apollo Devtools API",
        "version": __version__,
        "endpoints": {
            "recent": "/recent",
            "cache": "/cache",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/reset")
async def reset():
    """Drop every recording session."""
    return reset_sessions()


def main():
    """Main entry point for HTTP server."""
    api = get_config().api

    logger.info("=" * 60)
    logger.info("Apollo Devtools - API Server")
    logger.info("=" * 60)
    logger.info(f"Host: {api.host}")
    logger.info(f"Port: {api.port}")
    logger.info("=" * 60)
    logger.info(f"API Documentation: http://{api.host}:{api.port}/docs")
    logger.info("=" * 60)

    uvicorn.run(
        "apollo_devtools.ui.http_server:app",
        host=api.host,
        port=api.port,
        reload=api.reload,
    )


if __name__ == "__main__":
    main()
