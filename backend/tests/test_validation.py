import pytest

from kinkatsu.dates import parse_day
from kinkatsu.models import BodyPart
from kinkatsu.schemas.validation import validate_exercise, validate_workout


def workout(**overrides):
    raw = {
        "date": "2025-12-19",
        "items": [{"exerciseId": "ex-1", "sets": [{"weightKg": "60", "reps": "5"}]}],
    }
    raw.update(overrides)
    return raw


def one_set(**fields):
    s = {"weightKg": 60, "reps": 5}
    s.update(fields)
    return workout(items=[{"exerciseId": "ex-1", "sets": [s]}])


def paths(result):
    return [i.path for i in result.issues]


# ---- exercise ----

def test_exercise_trims_name_and_parses_body_parts():
    r = validate_exercise({"name": "  ベンチプレス  ", "bodyParts": ["CHEST", "ARMS", "CHEST"]})
    assert r.ok
    assert r.data.name == "ベンチプレス"
    assert r.data.body_parts == [BodyPart.CHEST, BodyPart.ARMS]

def test_exercise_requires_a_body_part():
    r = validate_exercise({"name": "Row", "bodyParts": []})
    assert not r.ok
    assert paths(r) == [["bodyParts"]]

def test_exercise_rejects_unknown_body_part():
    r = validate_exercise({"name": "Row", "bodyParts": ["BACK", "NECK"]})
    assert not r.ok
    assert paths(r) == [["bodyParts", 1]]

@pytest.mark.parametrize("name", ["", "   ", "x" * 101, None])
def test_exercise_name_bounds(name):
    r = validate_exercise({"name": name, "bodyParts": ["BACK"]})
    assert not r.ok
    assert paths(r) == [["name"]]

def test_exercise_name_at_limit_ok():
    assert validate_exercise({"name": "x" * 100, "bodyParts": ["OTHER"]}).ok

def test_validation_never_raises_on_junk():
    for raw in (None, 42, "text", [], {"bodyParts": "CHEST"}):
        assert not validate_exercise(raw).ok
        assert not validate_workout(raw).ok


# ---- workout ----

def test_workout_coerces_text_numbers():
    r = validate_workout(one_set(weightKg="62.5", reps="8", rpe="7.5"))
    assert r.ok
    s = r.data.items[0].sets[0]
    assert (s.weight_kg, s.reps, s.rpe) == (62.5, 8, 7.5)

@pytest.mark.parametrize("weight,ok", [(1000, True), ("1000", True), (1000.01, False), (0, False), (-1, False)])
def test_weight_bounds(weight, ok):
    assert validate_workout(one_set(weightKg=weight)).ok is ok

@pytest.mark.parametrize("reps,ok", [(1, True), (1000, True), (0, False), (1001, False), ("5.5", False)])
def test_reps_bounds(reps, ok):
    assert validate_workout(one_set(reps=reps)).ok is ok

@pytest.mark.parametrize("rpe,ok", [(10, True), (1, True), (10.1, False), (0.5, False), ("", True), (None, True)])
def test_set_rpe_bounds(rpe, ok):
    assert validate_workout(one_set(rpe=rpe)).ok is ok

@pytest.mark.parametrize("weight,ok", [("62.55", True), (62.55, True), ("0.01", True), ("62.555", False), ("0.001", False)])
def test_weight_precision_matches_storage(weight, ok):
    assert validate_workout(one_set(weightKg=weight)).ok is ok

@pytest.mark.parametrize("rpe,ok", [("7.5", True), ("7.25", False)])
def test_rpe_precision_matches_storage(rpe, ok):
    r = validate_workout(one_set(rpe=rpe))
    assert r.ok is ok
    if not ok:
        assert paths(r) == [["items", 0, "sets", 0, "rpe"]]

def test_body_weight_precision_matches_storage():
    assert validate_workout(workout(bodyWeight="72.45")).ok
    assert not validate_workout(workout(bodyWeight="72.455")).ok

def test_non_numeric_is_an_issue_not_a_default():
    r = validate_workout(one_set(weightKg="heavy"))
    assert not r.ok
    assert paths(r) == [["items", 0, "sets", 0, "weightKg"]]

def test_issue_paths_point_at_the_bad_set():
    raw = workout(items=[
        {"exerciseId": "a", "sets": [{"weightKg": 50, "reps": 5}]},
        {"exerciseId": "b", "sets": [{"weightKg": 50, "reps": 5}, {"weightKg": 50, "reps": 0}]},
    ])
    r = validate_workout(raw)
    assert paths(r) == [["items", 1, "sets", 1, "reps"]]

def test_empty_items_accepted():
    r = validate_workout({"date": "2025-12-19"})
    assert r.ok
    assert r.data.items == []

def test_item_needs_a_set_and_an_exercise():
    r = validate_workout(workout(items=[{"exerciseId": " ", "sets": []}]))
    assert sorted(map(str, paths(r))) == sorted(map(str, [["items", 0, "exerciseId"], ["items", 0, "sets"]]))

@pytest.mark.parametrize("day", [
    "2025/12/19", "19-12-2025", "2025-12-1", "2025-02-30", "", None, "2025-12-19\n", "２０２５-12-19",
])
def test_bad_dates_rejected(day):
    r = validate_workout(workout(date=day))
    assert not r.ok
    assert paths(r) == [["date"]]

def test_date_format_message_is_readable():
    r = validate_workout(workout(date="2025/12/19"))
    assert r.issues[0].message == "date must be in YYYY-MM-DD format"

@pytest.mark.parametrize("field,value,ok", [
    ("bodyWeight", "72.4", True),
    ("bodyWeight", 500, True),
    ("bodyWeight", 500.5, False),
    ("bodyWeight", 0, False),
    ("dayRpe", 10, True),
    ("dayRpe", 11, False),
    ("notes", "n" * 1000, True),
    ("notes", "n" * 1001, False),
])
def test_header_bounds(field, value, ok):
    assert validate_workout(workout(**{field: value})).ok is ok

def test_blank_optional_header_fields_are_absent():
    r = validate_workout(workout(bodyWeight="", dayRpe=" ", notes=""))
    assert r.ok
    assert (r.data.body_weight, r.data.day_rpe, r.data.notes) == (None, None, None)

@pytest.mark.parametrize("day", ["2025-12-19\n", "２０２５-12-19", " 2025-12-19"])
def test_day_keys_are_plain_ascii(day):
    r = validate_workout(workout(date=day))
    assert r.issues[0].message == "date must be in YYYY-MM-DD format"
    with pytest.raises(ValueError):
        parse_day(day)
