"""AI Studio main application."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aistudio import __version__
from aistudio.api import router
from aistudio.config import settings
from aistudio.studio import Studio

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("aistudio")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting AI Studio server...")
    logger.info(f"Environment: {settings.env.value}")
    logger.info(f"Start policy: {settings.start_policy.value}")

    app.state.studio = Studio(settings)
    simulated = [name for name, flags in app.state.studio.describe().items() if flags["simulated"]]
    if simulated:
        logger.info(f"Simulated backends: {', '.join(simulated)}")

    yield

    logger.info("Shutting down AI Studio server...")
    app.state.studio.close()
    app.state.studio = None
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="AI Studio",
    description="Face aging, YouTube download, web search, script-to-movie and hair removal",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allowed_methods,
    allow_headers=settings.cors_allowed_headers,
)

app.include_router(router)


def main():
    """Entry point for the application."""
    uvicorn.run(
        "aistudio.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
