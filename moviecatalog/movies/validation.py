"""
Field rules every movie must satisfy before it is written.

The same rules run for create, full replace and patch, on whatever candidate
document the caller has built. All rules are evaluated; the result lists one
violation per failing field, in declaration order.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel

from moviecatalog.movies.exceptions import ValidationFailed
from moviecatalog.movies.schemas import FieldViolation

TEXT_MAX_LENGTH = 50
MIN_DURATION = 70
MAX_DURATION = 600


def _check_text(field: str, value: Any) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return f"{field} is required"
    if not isinstance(value, str):
        return f"{field} must be a string"
    if len(value) > TEXT_MAX_LENGTH:
        return f"Max length is {TEXT_MAX_LENGTH} characters"
    return None


def _check_duration(field: str, value: Any) -> Optional[str]:
    if value is None:
        return f"{field} is required"
    if isinstance(value, bool) or not isinstance(value, int):
        return f"{field} must be an integer"
    if not MIN_DURATION <= value <= MAX_DURATION:
        return f"Duration must be between {MIN_DURATION} and {MAX_DURATION} minutes"
    return None


RULES: Dict[str, Callable[[str, Any], Optional[str]]] = {
    "title": _check_text,
    "genre": _check_text,
    "duration_minutes": _check_duration,
}


def validate_movie(candidate: Union[Mapping[str, Any], BaseModel]) -> List[FieldViolation]:
    """Return the violations of `candidate`; an empty list means it is valid."""
    if isinstance(candidate, BaseModel):
        candidate = candidate.model_dump()

    violations = []
    for field, rule in RULES.items():
        reason = rule(field, candidate.get(field))
        if reason is not None:
            violations.append(FieldViolation(field=field, reason=reason))
    return violations


def ensure_valid(candidate: Union[Mapping[str, Any], BaseModel]) -> None:
    violations = validate_movie(candidate)
    if violations:
        raise ValidationFailed(violations)
