"""Cache tags and keys.

A workout save must invalidate both the per-user tag and the per-day tag:
the day view and the per-user listings are cached under different keys.
"""
from __future__ import annotations
from datetime import date, datetime

from kinkatsu.dates import day_key

EXERCISES = "exercises"


def workouts_by_user(user_id: str) -> str:
    return f"workouts:user:{user_id}"


def workout_day(user_id: str, day: str | date | datetime) -> str:
    return f"workout:{user_id}:{day_key(day)}"


def workout_save_tags(user_id: str, day: str | date | datetime) -> list[str]:
    return [workouts_by_user(user_id), workout_day(user_id, day)]
