from starlette.datastructures import FormData

from kinkatsu.actions.forms import decode_items, exercise_candidate, get_all, workout_candidate


def test_exercise_candidate_collects_repeated_body_parts():
    form = FormData([("name", "Row"), ("bodyParts", "BACK"), ("bodyParts", "ARMS")])
    assert exercise_candidate(form) == {"name": "Row", "bodyParts": ["BACK", "ARMS"]}

def test_get_all_on_plain_dicts():
    assert get_all({"bodyParts": ["BACK"]}, "bodyParts") == ["BACK"]
    assert get_all({"bodyParts": "BACK"}, "bodyParts") == ["BACK"]
    assert get_all({}, "bodyParts") == []

def test_items_ordered_by_embedded_index_with_gaps_closed():
    form = {
        "exerciseId-7": "squat",
        "setCount-7": "1",
        "weightKg-7-0": "100", "reps-7-0": "5",
        "exerciseId-2": "bench",
        "setCount-2": "2",
        "weightKg-2-0": "60", "reps-2-0": "8",
        "weightKg-2-1": "65", "reps-2-1": "6", "rpe-2-1": "9",
    }
    items = decode_items(form)
    assert [i["exerciseId"] for i in items] == ["bench", "squat"]
    assert items[0]["sets"] == [
        {"weightKg": "60", "reps": "8", "rpe": None},
        {"weightKg": "65", "reps": "6", "rpe": "9"},
    ]

def test_numeric_not_lexical_ordering():
    form = {
        "exerciseId-10": "ten", "weightKg-10-0": "1", "reps-10-0": "1",
        "exerciseId-9": "nine", "weightKg-9-0": "1", "reps-9-0": "1",
    }
    assert [i["exerciseId"] for i in decode_items(form)] == ["nine", "ten"]

def test_set_rows_sorted_and_renumbered():
    form = {
        "exerciseId-0": "bench",
        "weightKg-0-3": "70", "reps-0-3": "3",
        "weightKg-0-1": "60", "reps-0-1": "5",
    }
    sets = decode_items(form)[0]["sets"]
    assert [s["weightKg"] for s in sets] == ["60", "70"]

def test_blank_rows_skipped_and_empty_items_dropped():
    form = {
        "exerciseId-0": "bench", "setCount-0": "2",
        "weightKg-0-0": "", "reps-0-0": "",
        "weightKg-0-1": "60", "reps-0-1": "",
        "exerciseId-1": "squat", "setCount-1": "1",
        "weightKg-1-0": "", "reps-1-0": "",
    }
    items = decode_items(form)
    assert len(items) == 1
    # half-filled row is kept so validation can point at the missing reps
    assert items[0]["sets"] == [{"weightKg": "60", "reps": "", "rpe": None}]

def test_set_count_bounds_rows():
    form = {
        "exerciseId-0": "bench", "setCount-0": "1",
        "weightKg-0-0": "60", "reps-0-0": "5",
        "weightKg-0-1": "999", "reps-0-1": "1",
    }
    assert len(decode_items(form)[0]["sets"]) == 1

def test_workout_candidate_header_blanks_become_none():
    form = FormData([("date", "2025-12-19"), ("bodyWeight", ""), ("dayRpe", "8"), ("notes", "")])
    c = workout_candidate(form)
    assert c == {"date": "2025-12-19", "bodyWeight": None, "dayRpe": "8", "notes": None, "items": []}
