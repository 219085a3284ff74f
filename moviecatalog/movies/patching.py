"""
Partial updates through JSON-Patch style operations.

A patch runs in three phases against a single movie:

1. Project  - the stored entity is projected to its MovieUpdate shape,
              which is the document the operations address.
2. Apply    - operations run strictly in order on a working copy. Any
              structural problem (unknown op, unknown field, a value the
              field cannot hold) aborts with MalformedPatch.
3. Validate - the candidate document is checked with the same rules as
   & commit   create and replace; only a valid candidate is written back.

The stored movie is untouched unless phase 3 commits.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from moviecatalog.movies import mapper
from moviecatalog.movies.exceptions import MalformedPatch
from moviecatalog.movies.models import Movie
from moviecatalog.movies.schemas import MovieUpdate, PatchOperation
from moviecatalog.movies.store import MovieStore
from moviecatalog.movies.validation import ensure_valid

logger = logging.getLogger(__name__)

# field name -> adapter that coerces a patch value into what the field holds
FIELD_TYPES: Dict[str, TypeAdapter] = {
    "title": TypeAdapter(Optional[str]),
    "genre": TypeAdapter(Optional[str]),
    "duration_minutes": TypeAdapter(Optional[int]),
}

# accepted spellings besides the field names themselves (matched case-insensitively)
FIELD_ALIASES = {
    "durationminutes": "duration_minutes",
}


def parse_operations(raw: Any) -> List[PatchOperation]:
    """Turn a decoded JSON body into patch operations, or raise MalformedPatch."""
    if not isinstance(raw, list):
        raise MalformedPatch("Patch document must be a JSON array of operations")

    operations = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise MalformedPatch(f"Operation {index} is not an object")
        try:
            operations.append(PatchOperation.model_validate(item))
        except ValidationError as e:
            problems = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
            raise MalformedPatch(f"Operation {index} is invalid: {problems}") from e
    return operations


def resolve_field(path: Optional[str]) -> str:
    """Map a JSON pointer such as "/title" onto a MovieUpdate field name."""
    if not path or not path.startswith("/"):
        raise MalformedPatch(f"Invalid path '{path}'")
    name = path[1:]
    if "/" in name:
        raise MalformedPatch(f"Path '{path}' does not address a top-level field")

    key = name.lower()
    key = FIELD_ALIASES.get(key, key)
    if key not in FIELD_TYPES:
        raise MalformedPatch(f"The target location specified by path '{path}' was not found")
    return key


def _coerce(field: str, value: Any) -> Any:
    # JSON true/false is never a title, genre or duration
    if isinstance(value, bool):
        raise MalformedPatch(f"The value '{value}' is invalid for target location '/{field}'")
    try:
        return FIELD_TYPES[field].validate_python(value)
    except ValidationError as e:
        raise MalformedPatch(f"The value '{value}' is invalid for target location '/{field}'") from e


# ────────────────────────────────
# Operation handlers
# ────────────────────────────────
def _set(document: Dict[str, Any], op: PatchOperation) -> None:
    if not op.has_value:
        raise MalformedPatch(f"'{op.op}' at '{op.path}' requires a value")
    field = resolve_field(op.path)
    document[field] = _coerce(field, op.value)


def _remove(document: Dict[str, Any], op: PatchOperation) -> None:
    document[resolve_field(op.path)] = None


def _copy(document: Dict[str, Any], op: PatchOperation) -> None:
    if op.from_ is None:
        raise MalformedPatch(f"'{op.op}' at '{op.path}' requires 'from'")
    source = resolve_field(op.from_)
    target = resolve_field(op.path)
    document[target] = _coerce(target, document[source])


def _move(document: Dict[str, Any], op: PatchOperation) -> None:
    _copy(document, op)
    source = resolve_field(op.from_)
    if source != resolve_field(op.path):
        document[source] = None


def _test(document: Dict[str, Any], op: PatchOperation) -> None:
    if not op.has_value:
        raise MalformedPatch(f"'test' at '{op.path}' requires a value")
    field = resolve_field(op.path)
    if document[field] != op.value:
        raise MalformedPatch(f"Test failed at '{op.path}'")


HANDLERS: Dict[str, Callable[[Dict[str, Any], PatchOperation], None]] = {
    "add": _set,
    "replace": _set,
    "remove": _remove,
    "copy": _copy,
    "move": _move,
    "test": _test,
}


def apply_operations(base: MovieUpdate, operations: Sequence[PatchOperation]) -> MovieUpdate:
    """Apply `operations` in order to a copy of `base` and return the candidate."""
    document = base.model_dump()
    for op in operations:
        handler = HANDLERS.get(op.op.lower())
        if handler is None:
            raise MalformedPatch(f"Unsupported operation '{op.op}'")
        handler(document, op)
    return MovieUpdate(**document)


class PatchReconciler:
    def __init__(self, store: MovieStore):
        self.store = store

    def reconcile(self, movie_id: int, operations: Sequence[PatchOperation]) -> Movie:
        """
        Apply a patch to the stored movie and persist the result.

        Raises:
            MovieNotFound: no movie has `movie_id`
            MalformedPatch: an operation could not be applied
            ValidationFailed: the patched movie breaks a field rule
        """
        with self.store.lock:
            base = mapper.to_update(self.store.get(movie_id))
            candidate = apply_operations(base, operations)
            ensure_valid(candidate)
            movie = self.store.replace(movie_id, candidate)

        logger.debug(f"Patched movie {movie_id} with {len(operations)} operation(s)")
        return movie
