from contextlib import contextmanager
import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response, status
from typing import Any, List, Optional

from moviecatalog.dependencies import get_movie_service
from moviecatalog.movies import mapper, schemas
from moviecatalog.movies.exceptions import MalformedPatch, MovieNotFound, StoreUnavailable, ValidationFailed
from moviecatalog.movies.patching import parse_operations
from moviecatalog.movies.service import MovieService
from moviecatalog.settings import Settings, get_settings

router = APIRouter(prefix="/movies", tags=["Movies"])
logger = logging.getLogger(__name__)


@contextmanager
def catalog_errors(movie_id: Optional[int] = None):
    """Translate catalog errors raised inside a route into HTTP responses."""
    try:
        yield
    except MovieNotFound:
        logger.warning(f"Movie {movie_id} not found")
        raise HTTPException(status_code=404, detail="Movie not found")
    except MalformedPatch as e:
        logger.warning(f"Rejected patch for movie {movie_id}: {e.reason}")
        raise HTTPException(status_code=400, detail=e.reason)
    except ValidationFailed as e:
        logger.warning(f"Validation failed for movie {movie_id}: {e}")
        raise HTTPException(
            status_code=422,
            detail=[v.model_dump() for v in e.violations],
        )
    except StoreUnavailable as e:
        logger.error(f"Movie store unavailable: {e.reason}", exc_info=True)
        raise HTTPException(status_code=503, detail="Movie store unavailable")


@router.post(
    "/",
    response_model=schemas.MovieRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_movie(
    movie: schemas.MovieCreate,
    request: Request,
    response: Response,
    service: MovieService = Depends(get_movie_service),
    cfg: Settings = Depends(get_settings),
):
    """Add a movie; the Location header points at the new record."""
    with catalog_errors():
        created = service.create_movie(movie)
    response.headers["Location"] = str(request.url_for("get_movie", movie_id=created.id))
    return mapper.to_read(created, include_id=cfg.read_includes_id)


@router.get("/", response_model=List[schemas.MovieRead], response_model_exclude_none=True)
def list_movies(
    skip: int = Query(0, description="Movies to skip; negative values count as 0"),
    take: Optional[int] = Query(None, description="Max movies to return (default 50)"),
    service: MovieService = Depends(get_movie_service),
    cfg: Settings = Depends(get_settings),
):
    with catalog_errors():
        movies = service.list_movies(skip, take)
    return [mapper.to_read(m, include_id=cfg.read_includes_id) for m in movies]


@router.get("/{movie_id}", response_model=schemas.MovieRead, response_model_exclude_none=True)
def get_movie(
    movie_id: int,
    service: MovieService = Depends(get_movie_service),
    cfg: Settings = Depends(get_settings),
):
    with catalog_errors(movie_id):
        movie = service.get_movie(movie_id)
    return mapper.to_read(movie, include_id=cfg.read_includes_id)


@router.put("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
def replace_movie(
    movie_id: int,
    movie: schemas.MovieUpdate,
    service: MovieService = Depends(get_movie_service),
):
    """Overwrite every field of a movie."""
    with catalog_errors(movie_id):
        service.replace_movie(movie_id, movie)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
def patch_movie(
    movie_id: int,
    patch: Any = Body(..., examples=[[{"op": "replace", "path": "/duration_minutes", "value": 150}]]),
    service: MovieService = Depends(get_movie_service),
):
    """
    Apply a JSON-Patch document (list of operations) to a movie.
    The movie only changes if every operation applies and the result is valid.
    """
    with catalog_errors(movie_id):
        operations = parse_operations(patch)
        service.patch_movie(movie_id, operations)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{movie_id}", response_model=schemas.MovieRead, response_model_exclude_none=True)
def delete_movie(
    movie_id: int,
    service: MovieService = Depends(get_movie_service),
    cfg: Settings = Depends(get_settings),
):
    """Delete a movie and return what was removed."""
    with catalog_errors(movie_id):
        deleted = service.delete_movie(movie_id)
    return mapper.to_read(deleted, include_id=cfg.read_includes_id)
