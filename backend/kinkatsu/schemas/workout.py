from __future__ import annotations
from typing import Annotated, Any, Optional
import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from kinkatsu.dates import DAY_PATTERN, parse_day


def _blank_to_none(v: Any) -> Any:
    # form fields arrive as "" when left empty
    if isinstance(v, str) and not v.strip():
        return None
    return v


Blank = BeforeValidator(_blank_to_none)
# precision matches the Numeric columns so nothing is rounded on the way in
WeightKg = Annotated[Decimal, Field(gt=0, le=1000, max_digits=6, decimal_places=2, allow_inf_nan=False)]
Reps = Annotated[int, Field(gt=0, le=1000)]
Rpe = Annotated[
    Optional[Annotated[Decimal, Field(ge=1, le=10, max_digits=3, decimal_places=1, allow_inf_nan=False)]], Blank
]
BodyWeight = Annotated[
    Optional[Annotated[Decimal, Field(gt=0, le=500, max_digits=5, decimal_places=2, allow_inf_nan=False)]], Blank
]
NotesStr = Annotated[Optional[Annotated[str, Field(max_length=1000)]], Blank]

_input_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- inputs (what the validation layer accepts) ----

class WorkoutSetInput(BaseModel):
    model_config = _input_config

    weight_kg: WeightKg
    reps: Reps
    rpe: Rpe = None


class WorkoutItemInput(BaseModel):
    model_config = _input_config

    exercise_id: Annotated[str, Field(min_length=1)]
    sets: Annotated[list[WorkoutSetInput], Field(min_length=1)]

    @field_validator("exercise_id")
    @classmethod
    def exercise_selected(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("select an exercise")
        return v2


class WorkoutHeaderInput(BaseModel):
    model_config = _input_config

    date: str
    body_weight: BodyWeight = None
    day_rpe: Rpe = None
    notes: NotesStr = None

    @field_validator("date")
    @classmethod
    def date_is_calendar_day(cls, v: str) -> str:
        if not DAY_PATTERN.fullmatch(v):
            raise ValueError("date must be in YYYY-MM-DD format")
        try:
            dt.date.fromisoformat(v)
        except ValueError:
            raise ValueError("date is not a real calendar day")
        return v


class WorkoutInput(WorkoutHeaderInput):
    items: list[WorkoutItemInput] = Field(default_factory=list)


# ---- reads (cached snapshots, never ORM rows) ----

_read_config = ConfigDict(from_attributes=True, frozen=True)


class ExerciseRef(BaseModel):
    model_config = _read_config

    id: str
    name: str


class WorkoutSetRead(BaseModel):
    model_config = _read_config

    id: str
    set_index: int
    weight_kg: float
    reps: int
    rpe: float | None = None


class WorkoutItemRead(BaseModel):
    model_config = _read_config

    id: str
    exercise_id: str
    exercise: ExerciseRef
    order_index: int
    sets: list[WorkoutSetRead]


class WorkoutSummary(BaseModel):
    model_config = _read_config

    id: str
    date: dt.date
    body_weight: float | None = None
    day_rpe: float | None = None
    notes: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def stored_instant_to_day(cls, v: Any) -> dt.date:
        return parse_day(v)


class WorkoutRead(WorkoutSummary):
    items: list[WorkoutItemRead]


class WorkoutPage(BaseModel):
    model_config = _read_config

    items: list[WorkoutSummary]
    total: int
    limit: int
    offset: int


class DayVolume(BaseModel):
    model_config = _read_config

    date: dt.date
    volume: float
    sets: int


class VolumeSummary(BaseModel):
    model_config = _read_config

    start: dt.date
    end: dt.date
    total_volume: float
    total_sets: int
    by_body_part: dict[str, float]
    days: list[DayVolume]
