from datetime import date
from typing import Any, Callable, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from kinkatsu import data
from kinkatsu.actions import save_workout_payload, submit_workout_save
from kinkatsu.cache import TagCache, get_cache
from kinkatsu.dates import parse_day, today_utc
from kinkatsu.db import get_db
from kinkatsu.deps.auth import current_user_id_provider, get_current_user
from kinkatsu.models import User
from kinkatsu.routers.results import action_response
from kinkatsu.schemas.result import ActionResult
from kinkatsu.schemas.workout import VolumeSummary, WorkoutPage, WorkoutRead

router = APIRouter(prefix="/workouts", tags=["workouts"])

MAX_VOLUME_RANGE_DAYS = 366

@router.post("", response_model=ActionResult)
async def save_workout_form(
    request: Request,
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_cache),
    current_user_id: Callable[[], Optional[str]] = Depends(current_user_id_provider),
):
    form = await request.form()
    result = await run_in_threadpool(
        submit_workout_save, form, db=db, cache=cache, current_user_id=current_user_id
    )
    return action_response(result)

@router.put("/{day}", response_model=ActionResult)
def save_workout_json(
    day: str,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_cache),
    current_user_id: Callable[[], Optional[str]] = Depends(current_user_id_provider),
):
    result = save_workout_payload(payload, day, db=db, cache=cache, current_user_id=current_user_id)
    return action_response(result)

@router.get("", response_model=WorkoutPage)
def list_my_workouts(
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_cache),
    current: User = Depends(get_current_user),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return data.list_workouts(db, cache, current.id, limit=limit, offset=offset)

@router.get("/volume", response_model=VolumeSummary)
def volume_summary(
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_cache),
    current: User = Depends(get_current_user),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
):
    end = end or today_utc()
    start = start or data.last_n_days(end, 7)[0]
    if start > end:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="start must not be after end")
    if (end - start).days >= MAX_VOLUME_RANGE_DAYS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="range too long")
    return data.get_volume_summary(db, cache, current.id, start, end)

@router.get("/today", response_model=WorkoutRead)
def todays_workout(
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_cache),
    current: User = Depends(get_current_user),
):
    return _workout_or_404(db, cache, current.id, today_utc())

@router.get("/{day}", response_model=WorkoutRead)
def workout_for_day(
    day: str,
    db: Session = Depends(get_db),
    cache: TagCache = Depends(get_cache),
    current: User = Depends(get_current_user),
):
    try:
        parsed = parse_day(day)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="day must be YYYY-MM-DD")
    return _workout_or_404(db, cache, current.id, parsed)

def _workout_or_404(db: Session, cache: TagCache, user_id: str, day: date) -> WorkoutRead:
    workout = data.get_workout(db, cache, user_id, day)
    if workout is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return workout
