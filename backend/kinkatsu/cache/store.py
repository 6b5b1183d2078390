"""Process-local read-through cache with tag invalidation.

Entries live in ``key -> (value, tags)``; ``tag -> keys`` is the reverse
index. Both maps change together under one lock. ``compute`` always runs
outside the lock, and a value computed while one of its tags was
invalidated is handed back but not stored, so a slow read that started
before a write can never put pre-write data back into the cache.
"""
from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Callable, Hashable, Iterable, TypeVar

log = logging.getLogger(__name__)

V = TypeVar("V")

_MISSING = object()


class TagCache:
    def __init__(self, max_entries: int = 2048):
        self.max_entries = max_entries
        self._entries: dict[Hashable, tuple[object, frozenset[str]]] = {}
        self._keys_by_tag: dict[str, set[Hashable]] = defaultdict(set)
        # only tags with a compute in flight are tracked; both maps empty out
        # again once those computes finish
        self._inflight: dict[str, int] = {}
        self._generations: dict[str, int] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get_or_compute(self, key: Hashable, tags: Iterable[str], compute: Callable[[], V]) -> V:
        tags = frozenset(tags)
        with self._lock:
            entry = self._entries.get(key, _MISSING)
            if entry is not _MISSING:
                self.hits += 1
                return entry[0]
            self.misses += 1
            seen = self._begin(tags)

        try:
            value = compute()
        except Exception:
            with self._lock:
                self._finish(seen)
            raise

        with self._lock:
            stale = any(self._generations.get(t, 0) != g for t, g in seen.items())
            self._finish(seen)
            if stale:
                log.debug("cache: %r invalidated while computing; not stored", key)
                return value
            self._store(key, value, tags)
        return value

    def invalidate(self, tag: str) -> int:
        """Drop every entry carrying ``tag``; returns how many were dropped."""
        with self._lock:
            self._bump(tag)
            keys = self._keys_by_tag.pop(tag, set())
            for key in keys:
                self._drop(key)
        if keys:
            log.debug("cache: invalidated %s (%d entries)", tag, len(keys))
        return len(keys)

    def invalidate_many(self, tags: Iterable[str]) -> int:
        return sum(self.invalidate(t) for t in tags)

    def clear(self) -> None:
        with self._lock:
            for tag in list(self._inflight):
                self._bump(tag)
            self._entries.clear()
            self._keys_by_tag.clear()

    def tracked_tags(self) -> int:
        """Tags currently held for race detection; zero when no compute is running."""
        with self._lock:
            return len(self._generations) + len(self._inflight)

    # callers hold the lock

    def _begin(self, tags: frozenset[str]) -> dict[str, int]:
        for tag in tags:
            self._inflight[tag] = self._inflight.get(tag, 0) + 1
        return {t: self._generations.get(t, 0) for t in tags}

    def _finish(self, seen: dict[str, int]) -> None:
        for tag in seen:
            left = self._inflight[tag] - 1
            if left:
                self._inflight[tag] = left
            else:
                del self._inflight[tag]
                self._generations.pop(tag, None)

    def _bump(self, tag: str) -> None:
        # nobody is reading under this tag, so there is no race to record
        if tag in self._inflight:
            self._generations[tag] = self._generations.get(tag, 0) + 1

    def _store(self, key: Hashable, value: object, tags: frozenset[str]) -> None:
        if key in self._entries:
            self._drop(key)
        while self._entries and len(self._entries) >= self.max_entries:
            # dicts keep insertion order: evict the oldest entry
            self._drop(next(iter(self._entries)))
        self._entries[key] = (value, tags)
        for tag in tags:
            self._keys_by_tag[tag].add(key)

    def _drop(self, key: Hashable) -> None:
        entry = self._entries.pop(key, None)
        if entry is None:
            return
        for tag in entry[1]:
            keys = self._keys_by_tag.get(tag)
            if keys is not None:
                keys.discard(key)
                if not keys:
                    del self._keys_by_tag[tag]
