"""
API Dependencies - singleton wiring and FastAPI dependency injection

Builds the repository selected in settings, the store on top of it and the
service the routers talk to. Tests replace get_movie_service through
app.dependency_overrides.
"""

import logging
from contextlib import asynccontextmanager
from functools import lru_cache

from moviecatalog.movies.service import MovieService
from moviecatalog.movies.store import MovieStore
from moviecatalog.repositories import BaseRepository, InMemoryRepository, JsonFileRepository
from moviecatalog.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_repository(cfg: Settings) -> BaseRepository:
    if cfg.storage_backend == "json":
        return JsonFileRepository(cfg.data_file)
    return InMemoryRepository()


def build_service(cfg: Settings) -> MovieService:
    store = MovieStore(build_repository(cfg))
    return MovieService(store, default_take=cfg.default_take)


@lru_cache
def get_movie_service() -> MovieService:
    """
    FastAPI dependency to access the movie service.

    Usage in routers:
        @router.get("/example")
        def example(service: MovieService = Depends(get_movie_service)):
            ...
    """
    cfg = get_settings()
    logger.info(f"Creating movie service (storage={cfg.storage_backend})")
    return build_service(cfg)


@asynccontextmanager
async def lifespan_handler(app):
    """
    FastAPI lifespan context manager for startup/shutdown.

    Usage in main.py:
        app = FastAPI(lifespan=lifespan_handler)
    """
    logger.info("FastAPI starting up...")
    yield
    logger.info("FastAPI shutting down...")
