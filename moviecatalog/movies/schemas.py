from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional


# Input shapes accept missing fields so that the validation rules can report
# them as "required" alongside every other violation.
class MovieCreate(BaseModel):
    title: Optional[str] = Field(None, examples=["Inception"])
    genre: Optional[str] = Field(None, examples=["Sci-Fi"])
    duration_minutes: Optional[int] = Field(None, examples=[148])


class MovieUpdate(BaseModel):
    title: Optional[str] = Field(None, examples=["Inception"])
    genre: Optional[str] = Field(None, examples=["Sci-Fi"])
    duration_minutes: Optional[int] = Field(None, examples=[148])


class MovieRead(BaseModel):
    id: Optional[int] = None  # omitted when read_includes_id is off
    title: str
    genre: str
    duration_minutes: int


class FieldViolation(BaseModel):
    field: str
    reason: str


class PatchOperation(BaseModel):
    """One JSON-Patch instruction, e.g. {"op": "replace", "path": "/title", "value": "Heat"}."""

    model_config = ConfigDict(populate_by_name=True)

    op: str
    path: str
    value: Any = None
    from_: Optional[str] = Field(None, alias="from")

    @property
    def has_value(self) -> bool:
        # an explicit null is a value; an absent key is not
        return "value" in self.model_fields_set
