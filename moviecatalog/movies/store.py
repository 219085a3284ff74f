"""
Entity store for movies.

Wraps an injected repository with id assignment and not-found handling.
Every operation holds `lock`, a re-entrant lock that callers may also take
to make a read-modify-write sequence atomic with respect to other writers.
"""

import logging
import threading
from typing import List

from moviecatalog.movies import mapper
from moviecatalog.movies.exceptions import MovieNotFound
from moviecatalog.movies.models import Movie
from moviecatalog.movies.schemas import MovieCreate, MovieUpdate
from moviecatalog.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

DEFAULT_SKIP = 0
DEFAULT_TAKE = 50


class MovieStore:
    def __init__(self, repository: BaseRepository):
        self.repository = repository
        self.lock = threading.RLock()

    def create(self, fields: MovieCreate) -> Movie:
        """Persist a new movie with a fresh id. `fields` must already be validated."""
        movie = mapper.to_entity(fields)
        with self.lock:
            movie.id = self.repository.allocate_id()
            self.repository.insert(movie)
        logger.debug(f"Stored movie {movie.id}")
        return movie.model_copy()

    def get(self, movie_id: int) -> Movie:
        with self.lock:
            movie = self.repository.fetch(movie_id)
        if movie is None:
            raise MovieNotFound(movie_id)
        return movie

    def list(self, skip: int = DEFAULT_SKIP, take: int = DEFAULT_TAKE) -> List[Movie]:
        skip, take = max(skip, 0), max(take, 0)
        if take == 0:
            return []
        with self.lock:
            return self.repository.fetch_page(skip, take)

    def replace(self, movie_id: int, fields: MovieUpdate) -> Movie:
        """Overwrite title, genre and duration of an existing movie; the id never changes."""
        with self.lock:
            movie = self.get(movie_id)
            mapper.apply_update(fields, movie)
            if not self.repository.update(movie):
                raise MovieNotFound(movie_id)
        return movie

    def delete(self, movie_id: int) -> Movie:
        with self.lock:
            removed = self.repository.remove(movie_id)
        if removed is None:
            raise MovieNotFound(movie_id)
        return removed

    def count(self) -> int:
        with self.lock:
            return self.repository.count()
