"""
FastAPI Application Entry Point for Headsup.

This module creates and configures the FastAPI application with:
- HTTP routes for the single local table
- CORS middleware for a locally served client
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from headsup.server.routes import router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Headsup Hold'em",
        description="Heads-up Texas Hold'em against a heuristic AI",
        version="0.1.0",
    )

    # CORS middleware for a client served from another local port
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.on_event("startup")
    async def startup_event():
        logger.info("Headsup server starting up...")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Headsup server shutting down...")

    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "headsup.server.app:app",
        host="127.0.0.1",
        port=8000,
        reload=False,
    )


if __name__ == "__main__":
    main()
