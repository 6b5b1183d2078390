import uuid
import pytest

from kinkatsu.db import SessionLocal
from kinkatsu.errors import DuplicateNameError, StoreError
from kinkatsu.repositories.exercise_repo import ExerciseRepository
from kinkatsu.seed import DEFAULT_EXERCISES, seed_exercises


def uniq(prefix="Ex"):
    return f"{prefix} {uuid.uuid4().hex[:8]}"


def test_create_and_lookup(db, user):
    repo = ExerciseRepository(db)
    name = uniq()
    ex = repo.create(name=name, body_parts=["CHEST", "ARMS"], created_by=user.id)
    assert ex.id
    assert repo.existing_ids([ex.id]) == {ex.id}
    assert repo.get_by_name(name).body_parts == ["CHEST", "ARMS"]
    assert repo.get_by_name(name).created_by == user.id

def test_duplicate_name_is_distinguishable(db):
    repo = ExerciseRepository(db)
    name = uniq()
    repo.create(name=name, body_parts=["BACK"], created_by=None)
    with pytest.raises(DuplicateNameError):
        repo.create(name=name, body_parts=["LEGS"], created_by=None)

def test_constraint_race_maps_to_duplicate(db, monkeypatch):
    repo = ExerciseRepository(db)
    name = uniq()
    repo.create(name=name, body_parts=["BACK"], created_by=None)
    # simulate losing the race: the pre-check misses, the unique index fires
    real = repo.get_by_name
    calls = {"n": 0}

    def first_miss(n):
        calls["n"] += 1
        return None if calls["n"] == 1 else real(n)

    monkeypatch.setattr(repo, "get_by_name", first_miss)
    with pytest.raises(DuplicateNameError):
        repo.create(name=name, body_parts=["BACK"], created_by=None)
    # session is usable after the rollback
    assert real(name) is not None

def test_other_store_failures_raise_store_error(db, monkeypatch):
    from sqlalchemy.exc import OperationalError
    repo = ExerciseRepository(db)

    def broken_commit():
        raise OperationalError("INSERT", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "commit", broken_commit)
    with pytest.raises(StoreError):
        repo.create(name=uniq(), body_parts=["BACK"], created_by=None)

def test_list_all_sorted_by_name(db):
    repo = ExerciseRepository(db)
    tag = uuid.uuid4().hex[:6]
    for n in (f"zz {tag}", f"aa {tag}", f"mm {tag}"):
        repo.create(name=n, body_parts=["OTHER"], created_by=None)
    names = [e.name for e in repo.list_all() if e.name.endswith(tag)]
    assert names == [f"aa {tag}", f"mm {tag}", f"zz {tag}"]

def test_existing_ids(db, exercises):
    bench, squat = exercises
    repo = ExerciseRepository(db)
    assert repo.existing_ids([bench.id, "missing"]) == {bench.id}
    assert repo.existing_ids([]) == set()

def test_seed_is_idempotent():
    with SessionLocal() as db:
        seed_exercises(db)
        assert seed_exercises(db) == 0
        repo = ExerciseRepository(db)
        for name, part in DEFAULT_EXERCISES:
            ex = repo.get_by_name(name)
            assert ex is not None and ex.body_parts == [part] and ex.created_by is None

def test_seed_leaves_existing_names_alone(db, user):
    name, _ = DEFAULT_EXERCISES[0]
    mine = ExerciseRepository(db).create(name=name, body_parts=["ARMS"], created_by=user.id)
    assert seed_exercises(db) == len(DEFAULT_EXERCISES) - 1
    kept = ExerciseRepository(db).get_by_name(name)
    assert kept.id == mine.id
    assert kept.body_parts == ["ARMS"] and kept.created_by == user.id

def test_each_test_starts_from_an_empty_catalog(db):
    assert ExerciseRepository(db).list_all() == []
