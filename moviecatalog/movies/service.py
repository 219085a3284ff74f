import logging
from typing import List, Optional, Sequence

from moviecatalog.movies.models import Movie
from moviecatalog.movies.patching import PatchReconciler
from moviecatalog.movies.schemas import MovieCreate, MovieUpdate, PatchOperation
from moviecatalog.movies.store import DEFAULT_SKIP, DEFAULT_TAKE, MovieStore
from moviecatalog.movies.validation import ensure_valid

logger = logging.getLogger(__name__)


class MovieService:
    """Validates input, then hands it to the store. One instance per application."""

    def __init__(self, store: MovieStore, default_take: int = DEFAULT_TAKE):
        self.store = store
        self.default_take = default_take
        self.reconciler = PatchReconciler(store)

    def create_movie(self, data: MovieCreate) -> Movie:
        ensure_valid(data)
        movie = self.store.create(data)
        logger.info(f"Created movie {movie.id} ({movie.title!r})")
        return movie

    def list_movies(self, skip: int = DEFAULT_SKIP, take: Optional[int] = None) -> List[Movie]:
        if take is None:
            take = self.default_take
        return self.store.list(skip, take)

    def get_movie(self, movie_id: int) -> Movie:
        return self.store.get(movie_id)

    def replace_movie(self, movie_id: int, data: MovieUpdate) -> Movie:
        ensure_valid(data)
        movie = self.store.replace(movie_id, data)
        logger.info(f"Replaced movie {movie_id}")
        return movie

    def patch_movie(self, movie_id: int, operations: Sequence[PatchOperation]) -> Movie:
        movie = self.reconciler.reconcile(movie_id, operations)
        logger.info(f"Patched movie {movie_id}")
        return movie

    def delete_movie(self, movie_id: int) -> Movie:
        movie = self.store.delete(movie_id)
        logger.info(f"Deleted movie {movie_id}")
        return movie

    def count_movies(self) -> int:
        return self.store.count()
