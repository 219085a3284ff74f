"""
Field projections between the shapes a movie takes.

No validation happens here. Each projection copies exactly the fields the
target shape declares; `id` is only ever carried from a persisted entity
into the read shape.
"""

from moviecatalog.movies.models import Movie
from moviecatalog.movies.schemas import MovieCreate, MovieRead, MovieUpdate

MUTABLE_FIELDS = ("title", "genre", "duration_minutes")


def to_entity(data: MovieCreate) -> Movie:
    """Build an unsaved entity; the store assigns the id."""
    return Movie(**{field: getattr(data, field) for field in MUTABLE_FIELDS})


def apply_update(data: MovieUpdate, movie: Movie) -> Movie:
    """Overwrite the mutable fields of `movie` in place and return it."""
    for field in MUTABLE_FIELDS:
        setattr(movie, field, getattr(data, field))
    return movie


def to_update(movie: Movie) -> MovieUpdate:
    return MovieUpdate(**{field: getattr(movie, field) for field in MUTABLE_FIELDS})


def to_read(movie: Movie, include_id: bool = True) -> MovieRead:
    read = MovieRead(**{field: getattr(movie, field) for field in MUTABLE_FIELDS})
    if include_id:
        read.id = movie.id
    return read
