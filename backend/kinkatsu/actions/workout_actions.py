from __future__ import annotations
import logging
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.orm import Session

from kinkatsu.actions import forms, messages
from kinkatsu.cache import TagCache, tags
from kinkatsu.errors import ErrorCode, StoreError
from kinkatsu.repositories.exercise_repo import ExerciseRepository
from kinkatsu.repositories.workout_repo import WorkoutRepository
from kinkatsu.schemas.result import ActionResult, Issue
from kinkatsu.schemas.validation import validate_workout

logger = logging.getLogger(__name__)


def submit_workout_save(
    raw_form: Mapping[str, Any],
    *,
    db: Session,
    cache: TagCache,
    current_user_id: Callable[[], Optional[str]],
    log: Optional[logging.Logger] = None,
) -> ActionResult:
    """Save the day's workout from the flat ``exerciseId-{i}`` / ``reps-{i}-{j}`` form."""
    return _run(lambda: forms.workout_candidate(raw_form), db, cache, current_user_id, log or logger)


def save_workout_payload(
    payload: Mapping[str, Any],
    day: str,
    *,
    db: Session,
    cache: TagCache,
    current_user_id: Callable[[], Optional[str]],
    log: Optional[logging.Logger] = None,
) -> ActionResult:
    """Same as submit_workout_save for a transport that already sends the nested items."""
    return _run(lambda: {**payload, "date": day}, db, cache, current_user_id, log or logger)


def _run(candidate, db, cache, current_user_id, log) -> ActionResult:
    try:
        user_id = current_user_id()
        if not user_id:
            return ActionResult.failure(ErrorCode.AUTHENTICATION_REQUIRED, messages.SIGN_IN_REQUIRED)

        result = validate_workout(candidate())
        if not result.ok:
            return ActionResult.failure(ErrorCode.VALIDATION_FAILED, messages.INVALID_INPUT, result.issues)
        data = result.data

        unknown = _unknown_exercises(db, data.items)
        if unknown:
            return ActionResult.failure(ErrorCode.VALIDATION_FAILED, messages.INVALID_INPUT, unknown)

        workout = WorkoutRepository(db).save_workout(user_id, data.date, data, data.items)

        # the day view and the per-user listings are cached under different tags
        cache.invalidate_many(tags.workout_save_tags(user_id, data.date))
        log.info("workout saved id=%s user=%s day=%s items=%d", workout.id, user_id, data.date, len(data.items))
        return ActionResult.success(workout.id)
    except StoreError:
        log.exception("failed to save workout")
        return ActionResult.failure(ErrorCode.STORE_ERROR, messages.WORKOUT_SAVE_FAILED)
    except Exception:
        log.exception("failed to save workout")
        return ActionResult.failure(ErrorCode.UNKNOWN, messages.WORKOUT_SAVE_FAILED)


def _unknown_exercises(db: Session, items) -> list[Issue]:
    known = ExerciseRepository(db).existing_ids(item.exercise_id for item in items)
    return [
        Issue(path=["items", i, "exerciseId"], message=messages.UNKNOWN_EXERCISE)
        for i, item in enumerate(items)
        if item.exercise_id not in known
    ]
