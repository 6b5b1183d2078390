# kinkatsu/repositories/exercise_repo.py
from __future__ import annotations
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from kinkatsu.errors import DuplicateNameError, StoreError
from kinkatsu.models import Exercise
from kinkatsu.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    # READS
    def get_by_name(self, name: str) -> Optional[Exercise]:
        stmt = select(Exercise).where(Exercise.name == name)
        return self.db.execute(stmt).scalar_one_or_none()

    def existing_ids(self, exercise_ids: Iterable[str]) -> set[str]:
        ids = set(exercise_ids)
        if not ids:
            return set()
        stmt = select(Exercise.id).where(Exercise.id.in_(ids))
        return set(self.db.execute(stmt).scalars().all())

    def list_all(self) -> list[Exercise]:
        stmt = select(Exercise).order_by(Exercise.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    # WRITES
    def create(self, *, name: str, body_parts: list[str], created_by: str | None) -> Exercise:
        # Read before write so the caller gets a friendly duplicate, not constraint text
        if self.get_by_name(name) is not None:
            raise DuplicateNameError(name)
        ex = Exercise(name=name, body_parts=list(body_parts), created_by=created_by)
        try:
            self.db.add(ex)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # Lost a race with a concurrent create of the same name
            if self.get_by_name(name) is not None:
                raise DuplicateNameError(name) from e
            raise StoreError(str(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e
        self.db.refresh(ex)
        return ex

    def ensure(self, *, name: str, body_parts: list[str]) -> tuple[Exercise, bool]:
        """Create a catalog entry without an owner unless one with this name exists."""
        existing = self.get_by_name(name)
        if existing is not None:
            return existing, False
        return self.create(name=name, body_parts=body_parts, created_by=None), True
