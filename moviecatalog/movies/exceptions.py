"""
Domain errors raised by the movie catalog core.

Routers translate these into HTTP responses; nothing below the router
layer knows about status codes.
"""

from typing import List

from moviecatalog.movies.schemas import FieldViolation


class CatalogError(Exception):
    """Base class for every catalog failure."""


class ValidationFailed(CatalogError):
    def __init__(self, violations: List[FieldViolation]):
        self.violations = list(violations)
        fields = ", ".join(v.field for v in self.violations)
        super().__init__(f"Validation failed for: {fields}")


class MovieNotFound(CatalogError):
    def __init__(self, movie_id: int):
        self.movie_id = movie_id
        super().__init__(f"Movie {movie_id} not found")


class MalformedPatch(CatalogError):
    """A patch operation could not be applied to the update document."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class StoreUnavailable(CatalogError):
    """The persistence backend failed to read or write."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
