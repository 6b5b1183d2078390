# kinkatsu/repositories/workout_repo.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional, Sequence

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from kinkatsu.dates import utc_midnight
from kinkatsu.errors import StoreError
from kinkatsu.models import Workout, WorkoutItem, WorkoutSet
from kinkatsu.repositories.base import BaseRepository, Page
from kinkatsu.schemas.workout import WorkoutHeaderInput, WorkoutItemInput

class WorkoutRepository(BaseRepository[Workout]):
    """One workout per (user, day); every save replaces the whole item/set tree."""
    model = Workout

    # READS
    def get_by_day(self, user_id: str, day: str | date | datetime) -> Optional[Workout]:
        stmt = (
            select(Workout)
            .where(Workout.user_id == user_id, Workout.date == utc_midnight(day))
            .options(selectinload(Workout.items).selectinload(WorkoutItem.sets))
            # a save in this session may have replaced the children behind the identity map
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_user(self, user_id: str, *, limit: int = 50, offset: int = 0) -> Page[Workout]:
        stmt = select(Workout).where(Workout.user_id == user_id).order_by(Workout.date.desc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    def sets_between(self, user_id: str, start: date, end: date) -> list[tuple[datetime, WorkoutItem, WorkoutSet]]:
        """Every set the user logged on days start..end inclusive, with its workout day and item."""
        stmt = (
            select(Workout.date, WorkoutItem, WorkoutSet)
            .join(WorkoutItem, WorkoutItem.workout_id == Workout.id)
            .join(WorkoutSet, WorkoutSet.workout_item_id == WorkoutItem.id)
            .where(
                Workout.user_id == user_id,
                Workout.date >= utc_midnight(start),
                Workout.date <= utc_midnight(end),
            )
            .order_by(Workout.date.asc(), WorkoutItem.order_index.asc(), WorkoutSet.set_index.asc())
        )
        return [tuple(row) for row in self.db.execute(stmt).all()]

    # WRITES
    def save_workout(
        self,
        user_id: str,
        day: str | date | datetime,
        header: WorkoutHeaderInput,
        items: Sequence[WorkoutItemInput],
    ) -> Workout:
        """Upsert the (user, day) header and replace its children in one transaction.

        Nothing is committed until the new tree is fully inserted. Any store
        failure rolls back to the previously committed workout (or to no
        workout at all) and is raised as StoreError.
        """
        instant = utc_midnight(day)
        try:
            workout = self._upsert_header(user_id, instant, header)
            # children are replaced with bulk statements; reload them on next access
            self.db.expire(workout, ["items"])
            self._delete_children(workout.id)
            self._insert_items(workout.id, items)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e
        except Exception:
            self.db.rollback()
            raise
        return workout

    def _upsert_header(self, user_id: str, instant: datetime, header: WorkoutHeaderInput) -> Workout:
        stmt = select(Workout).where(Workout.user_id == user_id, Workout.date == instant)
        workout = self.db.execute(stmt).scalar_one_or_none()
        if workout is None:
            workout = Workout(user_id=user_id, date=instant)
            self.db.add(workout)
        workout.body_weight = header.body_weight
        workout.day_rpe = header.day_rpe
        workout.notes = header.notes or None
        self.db.flush()
        return workout

    def _delete_children(self, workout_id: str) -> None:
        item_ids = select(WorkoutItem.id).where(WorkoutItem.workout_id == workout_id)
        self.db.execute(
            delete(WorkoutSet)
            .where(WorkoutSet.workout_item_id.in_(item_ids))
            .execution_options(synchronize_session="fetch")
        )
        self.db.execute(
            delete(WorkoutItem)
            .where(WorkoutItem.workout_id == workout_id)
            .execution_options(synchronize_session="fetch")
        )

    def _insert_items(self, workout_id: str, items: Sequence[WorkoutItemInput]) -> None:
        # order comes from submission order, never from a client-supplied index
        for order_index, item in enumerate(items):
            row = WorkoutItem(
                workout_id=workout_id,
                exercise_id=item.exercise_id,
                order_index=order_index,
                sets=[
                    WorkoutSet(set_index=set_index, weight_kg=s.weight_kg, reps=s.reps, rpe=s.rpe)
                    for set_index, s in enumerate(item.sets)
                ],
            )
            self.db.add(row)
        self.db.flush()
