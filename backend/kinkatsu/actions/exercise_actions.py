from __future__ import annotations
import logging
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.orm import Session

from kinkatsu.actions import forms, messages
from kinkatsu.cache import TagCache, tags
from kinkatsu.errors import DuplicateNameError, ErrorCode, StoreError
from kinkatsu.repositories.exercise_repo import ExerciseRepository
from kinkatsu.schemas.result import ActionResult
from kinkatsu.schemas.validation import validate_exercise

logger = logging.getLogger(__name__)


def submit_exercise_create(
    raw_form: Mapping[str, Any],
    *,
    db: Session,
    cache: TagCache,
    current_user_id: Callable[[], Optional[str]],
    log: Optional[logging.Logger] = None,
) -> ActionResult:
    """Create a catalog exercise from a form with ``name`` and repeated ``bodyParts``."""
    log = log or logger
    try:
        user_id = current_user_id()
        if not user_id:
            return ActionResult.failure(ErrorCode.AUTHENTICATION_REQUIRED, messages.SIGN_IN_REQUIRED)

        result = validate_exercise(forms.exercise_candidate(raw_form))
        if not result.ok:
            return ActionResult.failure(ErrorCode.VALIDATION_FAILED, messages.INVALID_INPUT, result.issues)
        data = result.data

        # validation cannot see other rows; the repository rejects duplicates too
        repo = ExerciseRepository(db)
        if repo.get_by_name(data.name) is not None:
            return ActionResult.failure(ErrorCode.DUPLICATE_NAME, messages.DUPLICATE_EXERCISE)
        exercise = repo.create(
            name=data.name,
            body_parts=[bp.value for bp in data.body_parts],
            created_by=user_id,
        )

        cache.invalidate(tags.EXERCISES)
        log.info("exercise created id=%s by=%s", exercise.id, user_id)
        return ActionResult.success(exercise.id)
    except DuplicateNameError:
        return ActionResult.failure(ErrorCode.DUPLICATE_NAME, messages.DUPLICATE_EXERCISE)
    except StoreError:
        log.exception("failed to create exercise")
        return ActionResult.failure(ErrorCode.STORE_ERROR, messages.EXERCISE_CREATE_FAILED)
    except Exception:
        log.exception("failed to create exercise")
        return ActionResult.failure(ErrorCode.UNKNOWN, messages.EXERCISE_CREATE_FAILED)
