"""
Base Repository - Abstract interface for movie persistence

Defines the contract every storage backend must follow, so the store can
run against memory in tests and a JSON file in deployments without changes.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from moviecatalog.movies.models import Movie


class BaseRepository(ABC):
    """Abstract base class for movie repositories"""

    @abstractmethod
    def allocate_id(self) -> int:
        """
        Reserve the next movie id.

        Ids increase monotonically and are never handed out twice, even
        after the movie that held one is removed.
        """

    @abstractmethod
    def insert(self, movie: Movie) -> None:
        """Persist a new movie whose id was obtained from allocate_id()."""

    @abstractmethod
    def fetch(self, movie_id: int) -> Optional[Movie]:
        """Return the movie with `movie_id`, or None."""

    @abstractmethod
    def fetch_page(self, skip: int, take: int) -> List[Movie]:
        """
        Return movies in insertion order.

        Args:
            skip: Number of leading movies to skip (>= 0)
            take: Maximum number of movies to return (>= 0)
        """

    @abstractmethod
    def update(self, movie: Movie) -> bool:
        """Overwrite the stored record with the same id. False if absent."""

    @abstractmethod
    def remove(self, movie_id: int) -> Optional[Movie]:
        """Delete a movie and return the removed record, or None if absent."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored movies."""
