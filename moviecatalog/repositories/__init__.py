"""
Persistence backends for movie records.

The store talks to these through BaseRepository, so the in-memory backend
used in tests and the JSON file backend used in deployments are interchangeable.
"""

from moviecatalog.repositories.base import BaseRepository
from moviecatalog.repositories.memory import InMemoryRepository
from moviecatalog.repositories.json_file import JsonFileRepository

__all__ = ["BaseRepository", "InMemoryRepository", "JsonFileRepository"]
