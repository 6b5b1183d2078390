"""Insert the default exercise catalog.

    python -m kinkatsu.seed

Safe to run repeatedly: existing names are left untouched.
"""
import logging

from kinkatsu.cache import get_cache, tags
from kinkatsu.db import SessionLocal
from kinkatsu.repositories.exercise_repo import ExerciseRepository

log = logging.getLogger(__name__)

DEFAULT_EXERCISES = [
    ("ベンチプレス", "CHEST"),
    ("インクラインダンベルプレス", "CHEST"),
    ("ラットプルダウン", "BACK"),
    ("スクワット", "LEGS"),
    ("レッグプレス", "LEGS"),
    ("ショルダープレス", "SHOULDERS"),
    ("バイセップカール", "ARMS"),
    ("トライセップスプレスダウン", "ARMS"),
    ("カーフレイズ", "CALVES"),
    ("クランチ", "ABS"),
]

def seed_exercises(db) -> int:
    repo = ExerciseRepository(db)
    created = 0
    for name, body_part in DEFAULT_EXERCISES:
        _, was_created = repo.ensure(name=name, body_parts=[body_part])
        created += was_created
    if created:
        get_cache().invalidate(tags.EXERCISES)
    return created

def main() -> None:
    logging.basicConfig(level=logging.INFO)
    with SessionLocal() as db:
        created = seed_exercises(db)
    log.info("seeded %d exercises (%d already present)", created, len(DEFAULT_EXERCISES) - created)

if __name__ == "__main__":
    main()
