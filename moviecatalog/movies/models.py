from pydantic import BaseModel
from typing import Optional


class Movie(BaseModel):
    """The persisted movie record. `id` stays unset until the store assigns one."""

    id: Optional[int] = None
    title: str
    genre: str
    duration_minutes: int
