"""Cached read path.

Every function here goes through the tag cache and returns frozen pydantic
snapshots, never ORM rows, so a cached value does not depend on the
session that produced it. Writes invalidate the matching tags in
``kinkatsu.actions``.
"""
from __future__ import annotations
from collections import defaultdict
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from kinkatsu.cache import TagCache, tags
from kinkatsu.dates import day_key, day_range, parse_day
from kinkatsu.repositories.exercise_repo import ExerciseRepository
from kinkatsu.repositories.workout_repo import WorkoutRepository
from kinkatsu.schemas.exercise import ExerciseRead
from kinkatsu.schemas.workout import (
    DayVolume,
    VolumeSummary,
    WorkoutPage,
    WorkoutRead,
    WorkoutSummary,
)


def get_exercises(db: Session, cache: TagCache) -> list[ExerciseRead]:
    def compute():
        return [ExerciseRead.model_validate(e) for e in ExerciseRepository(db).list_all()]

    return cache.get_or_compute("exercises", [tags.EXERCISES], compute)


def get_workout(db: Session, cache: TagCache, user_id: str, day: str | date | datetime) -> WorkoutRead | None:
    key = tags.workout_day(user_id, day)

    def compute():
        workout = WorkoutRepository(db).get_by_day(user_id, day)
        return WorkoutRead.model_validate(workout) if workout else None

    return cache.get_or_compute(key, tags.workout_save_tags(user_id, day), compute)


def list_workouts(db: Session, cache: TagCache, user_id: str, *, limit: int = 50, offset: int = 0) -> WorkoutPage:
    key = f"workouts:{user_id}:page:{limit}:{offset}"

    def compute():
        page = WorkoutRepository(db).list_by_user(user_id, limit=limit, offset=offset)
        return WorkoutPage(
            items=[WorkoutSummary.model_validate(w) for w in page.items],
            total=page.total,
            limit=page.limit,
            offset=page.offset,
        )

    return cache.get_or_compute(key, [tags.workouts_by_user(user_id)], compute)


def get_volume_summary(db: Session, cache: TagCache, user_id: str, start: date, end: date) -> VolumeSummary:
    """Training volume (weight x reps) per day and per body part for start..end inclusive.

    A set counts toward every body part its exercise is tagged with, so the
    per-body-part totals can add up to more than ``total_volume``.
    """
    key = f"volumes:{user_id}:{day_key(start)}:{day_key(end)}"

    def compute():
        rows = WorkoutRepository(db).sets_between(user_id, start, end)
        per_day: dict[date, list[float]] = defaultdict(list)
        by_body_part: dict[str, float] = defaultdict(float)
        for instant, item, s in rows:
            volume = float(s.weight_kg) * s.reps
            per_day[parse_day(instant)].append(volume)
            for part in item.exercise.body_parts:
                by_body_part[part] += volume
        days = [
            DayVolume(date=d, volume=round(sum(per_day[d]), 2), sets=len(per_day[d]))
            for d in day_range(start, end)
        ]
        return VolumeSummary(
            start=start,
            end=end,
            total_volume=round(sum(d.volume for d in days), 2),
            total_sets=len(rows),
            by_body_part={k: round(v, 2) for k, v in sorted(by_body_part.items())},
            days=days,
        )

    return cache.get_or_compute(key, [tags.workouts_by_user(user_id)], compute)


def last_n_days(end: date, days: int) -> tuple[date, date]:
    return end - timedelta(days=days - 1), end
