"""FastAPI web application serving virtual timeline queries."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from virtualtimeline.web.routers.timeline import router as timeline_router

logger = logging.getLogger(__name__)

SERVICE_NAME = "virtual-timeline"
SERVICE_VERSION = "1.0.0"


def create_app() -> FastAPI:
    """Create and return the FastAPI app."""
    app = FastAPI(
        title="Virtual Timeline",
        description="Real/virtual time mapping for recordings with discarded footage",
        version=SERVICE_VERSION,
    )

    # Browser player served from a dev server on another port
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.include_router(timeline_router, prefix="/api", tags=["timeline"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
        }

    return app


app = create_app()


def run_dev_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Run development server."""
    logger.info("Starting timeline server at http://%s:%d", host, port)
    uvicorn.run(
        "virtualtimeline.web.app:app",
        host=host,
        port=port,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    run_dev_server()
