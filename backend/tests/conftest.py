"""
Point the app at a throwaway SQLite file before anything imports
kinkatsu.settings, then create the schema once for the whole run.
"""
import os
import tempfile
import uuid

os.environ["DB_URL"] = "sqlite:///" + os.path.join(tempfile.mkdtemp(prefix="kinkatsu-"), "test.db")

import pytest

from kinkatsu import models  # noqa: F401  # registers every table
from kinkatsu.cache import get_cache
from kinkatsu.db import Base, SessionLocal, engine
from kinkatsu.repositories.exercise_repo import ExerciseRepository
from kinkatsu.repositories.user_repo import UserRepository

Base.metadata.create_all(engine)


@pytest.fixture(autouse=True)
def _fresh_cache():
    get_cache().clear()
    yield


@pytest.fixture(autouse=True)
def _empty_tables():
    """Every test starts from an empty store, whatever ran before it."""
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def user(db):
    return UserRepository(db).create(
        email=f"{uuid.uuid4().hex[:10]}@ex.com", name="Lifter", password_hash=""
    )


@pytest.fixture
def exercises(db):
    """Two fresh catalog entries: (bench, squat)."""
    repo = ExerciseRepository(db)
    tag = uuid.uuid4().hex[:6]
    bench = repo.create(name=f"Bench {tag}", body_parts=["CHEST", "ARMS"], created_by=None)
    squat = repo.create(name=f"Squat {tag}", body_parts=["LEGS"], created_by=None)
    return bench, squat
