from typing import Annotated
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from kinkatsu.models.exercise import BodyPart

# Trimmed before the length check
ExerciseName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]

class ExerciseInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: ExerciseName
    body_parts: Annotated[list[BodyPart], Field(min_length=1)]

    @field_validator("body_parts")
    @classmethod
    def unique_body_parts(cls, v: list[BodyPart]) -> list[BodyPart]:
        # a set of tags; keep first-seen order
        return list(dict.fromkeys(v))

class ExerciseRead(BaseModel):
    id: str
    name: str
    body_parts: list[BodyPart]

    model_config = ConfigDict(from_attributes=True, frozen=True)
