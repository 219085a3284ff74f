"""
In-memory repository. Holds movies in an insertion-ordered dict; contents
last as long as the instance.
"""

from typing import Dict, List, Optional

from moviecatalog.movies.models import Movie
from moviecatalog.repositories.base import BaseRepository


class InMemoryRepository(BaseRepository):
    def __init__(self):
        self._movies: Dict[int, Movie] = {}
        self._last_id = 0

    def allocate_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def insert(self, movie: Movie) -> None:
        self._movies[movie.id] = movie.model_copy()

    def fetch(self, movie_id: int) -> Optional[Movie]:
        movie = self._movies.get(movie_id)
        return movie.model_copy() if movie else None

    def fetch_page(self, skip: int, take: int) -> List[Movie]:
        page = list(self._movies.values())[skip: skip + take]
        return [m.model_copy() for m in page]

    def update(self, movie: Movie) -> bool:
        if movie.id not in self._movies:
            return False
        # reassigning an existing key keeps its insertion position
        self._movies[movie.id] = movie.model_copy()
        return True

    def remove(self, movie_id: int) -> Optional[Movie]:
        return self._movies.pop(movie_id, None)

    def count(self) -> int:
        return len(self._movies)
