"""Decode flat form submissions into the nested candidates the validators take.

The workout form encodes its tree in field names::

    exerciseId-{i}  setCount-{i}  weightKg-{i}-{j}  reps-{i}-{j}  rpe-{i}-{j}

Order comes from the numeric indices, sorted ascending. Gaps left by rows
removed in the browser are closed up, so the result is always a dense,
ordered list of items, each with a dense, ordered list of sets.
"""
from __future__ import annotations
import re
from typing import Any, Mapping

_ITEM_KEY = re.compile(r"^exerciseId-(\d+)$")
_SET_KEY = re.compile(r"^(?:weightKg|reps|rpe)-(\d+)-(\d+)$")


def get_all(form: Mapping[str, Any], key: str) -> list[Any]:
    """All values for a repeated field; works for Starlette FormData and plain dicts."""
    if hasattr(form, "getlist"):
        return list(form.getlist(key))
    value = form.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def get_one(form: Mapping[str, Any], key: str) -> Any:
    values = get_all(form, key)
    return values[0] if values else None


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _optional(value: Any) -> Any:
    return None if _blank(value) else value


def _as_count(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def exercise_candidate(form: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "name": get_one(form, "name"),
        "bodyParts": [bp for bp in get_all(form, "bodyParts") if isinstance(bp, str)],
    }


def workout_candidate(form: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "date": get_one(form, "date"),
        "bodyWeight": _optional(get_one(form, "bodyWeight")),
        "dayRpe": _optional(get_one(form, "dayRpe")),
        "notes": _optional(get_one(form, "notes")),
        "items": decode_items(form),
    }


def decode_items(form: Mapping[str, Any]) -> list[dict[str, Any]]:
    item_indices: set[int] = set()
    set_indices: dict[int, set[int]] = {}
    for key in form.keys():
        m = _ITEM_KEY.match(key)
        if m:
            item_indices.add(int(m.group(1)))
            continue
        m = _SET_KEY.match(key)
        if m:
            set_indices.setdefault(int(m.group(1)), set()).add(int(m.group(2)))

    items = []
    for i in sorted(item_indices):
        # setCount bounds the rows when present; rows past it are stale UI state
        count = _as_count(get_one(form, f"setCount-{i}"))
        sets = []
        for j in sorted(set_indices.get(i, ())):
            if count is not None and j >= count:
                continue
            weight = get_one(form, f"weightKg-{i}-{j}")
            reps = get_one(form, f"reps-{i}-{j}")
            if _blank(weight) and _blank(reps):
                continue
            sets.append({
                "weightKg": weight,
                "reps": reps,
                "rpe": _optional(get_one(form, f"rpe-{i}-{j}")),
            })
        if sets:
            items.append({"exerciseId": get_one(form, f"exerciseId-{i}"), "sets": sets})
    return items
