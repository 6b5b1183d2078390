"""Validation layer: raw candidate maps in, typed inputs or field issues out.

Both entry points are total. Malformed input never raises; it comes back as
a list of ``Issue`` objects addressed by field path (list indices included),
so callers can point at ``items[0].sets[1].weightKg`` directly.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from kinkatsu.schemas.exercise import ExerciseInput
from kinkatsu.schemas.result import Issue
from kinkatsu.schemas.workout import WorkoutInput

M = TypeVar("M", bound=BaseModel)


@dataclass(slots=True)
class ValidationResult(Generic[M]):
    data: Optional[M] = None
    issues: list[Issue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.data is not None and not self.issues


def issues_from_error(exc: ValidationError) -> list[Issue]:
    issues = []
    for err in exc.errors():
        if err["type"] == "value_error":
            # our own field validators; drop pydantic's "Value error, " prefix
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        issues.append(Issue(path=list(err["loc"]), message=message))
    return issues


def _validate(model: type[M], raw: Any) -> ValidationResult[M]:
    try:
        return ValidationResult(data=model.model_validate(raw))
    except ValidationError as e:
        return ValidationResult(issues=issues_from_error(e))


def validate_exercise(raw: Any) -> ValidationResult[ExerciseInput]:
    return _validate(ExerciseInput, raw)


def validate_workout(raw: Any) -> ValidationResult[WorkoutInput]:
    return _validate(WorkoutInput, raw)
