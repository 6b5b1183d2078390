from typing import Callable, Optional
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from kinkatsu import data
from kinkatsu.actions import submit_exercise_create
from kinkatsu.cache import TagCache, get_cache
from kinkatsu.db import get_db
from kinkatsu.deps.auth import current_user_id_provider, get_current_user
from kinkatsu.models import User
from kinkatsu.routers.results import action_response
from kinkatsu.schemas.exercise import ExerciseRead
from kinkatsu.schemas.result import ActionResult

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("", response_model=list[ExerciseRead])
def list_exercises(
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_cache),
    _current: User = Depends(get_current_user),
):
    return data.get_exercises(db, cache)

@router.post("", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
async def create_exercise(
    request: Request,
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_cache),
    current_user_id: Callable[[], Optional[str]] = Depends(current_user_id_provider),
):
    # form fields: name, bodyParts (repeated)
    form = await request.form()
    result = await run_in_threadpool(
        submit_exercise_create, form, db=db, cache=cache, current_user_id=current_user_id
    )
    return action_response(result, success_status=status.HTTP_201_CREATED)
