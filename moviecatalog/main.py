"""
Movie Catalog - FastAPI Application

Main entry point for the API server.
Configuration reads from settings (CATALOG_* environment variables or .env).
"""

import logging

from fastapi import Depends, FastAPI

from moviecatalog import __version__
from moviecatalog.dependencies import get_movie_service, lifespan_handler
from moviecatalog.logging_setup import setup_logging
from moviecatalog.movies import router as movies_router
from moviecatalog.movies.service import MovieService
from moviecatalog.settings import get_settings

cfg = get_settings()

setup_logging(cfg.log_level)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Movie Catalog API",
        description="Create, list, update, patch and delete movie records",
        version=__version__,
        lifespan=lifespan_handler,
    )

    app.include_router(movies_router.router)

    logger.info(f"FastAPI application created (env={cfg.env})")
    return app


app = create_app()


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Movie Catalog API",
        "version": __version__,
        "environment": cfg.env,
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health_check(service: MovieService = Depends(get_movie_service)):
    return {"status": "healthy", "movies": service.count_movies()}


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting API server on {cfg.api_host}:{cfg.api_port}")
    uvicorn.run(
        "moviecatalog.main:app",
        host=cfg.api_host,
        port=cfg.api_port,
        reload=cfg.api_reload,
        log_level=cfg.log_level.lower(),
    )
