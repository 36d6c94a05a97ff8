"""
Agent Memory Store

Two key-value tiers plus auxiliary state:

- short-term: lives for the engine's lifetime; task results land here
- long-term: meant to outlive a session; persisting it is up to the host
- context: append-only log of strings, optionally capped
- preferences / learnings: free-form maps for user settings and lessons

Reads check short-term before long-term. Snapshots are copies, so later
writes never change a snapshot that was already handed out.
"""

import threading
from typing import Any

import structlog

from yeticore.core.domain.models import MemorySnapshot

_MISSING = object()


class MemoryStore:
    def __init__(self, max_context_entries: int | None = None):
        """
        Initialize an empty store.

        Args:
            max_context_entries: Keep at most this many context entries,
                dropping the oldest. ``None`` keeps all of them.
        """
        self._short_term: dict[str, Any] = {}
        self._long_term: dict[str, Any] = {}
        self._context: list[str] = []
        self._preferences: dict[str, Any] = {}
        self._learnings: dict[str, Any] = {}
        self.max_context_entries = max_context_entries
        self._lock = threading.RLock()
        self.logger = structlog.get_logger().bind(component="memory_store")

    def update_memory(self, key: str, value: Any, persistent: bool = False) -> None:
        with self._lock:
            if persistent:
                self._long_term[key] = value
            else:
                self._short_term[key] = value
        self.logger.debug("memory.updated", key=key, tier="long_term" if persistent else "short_term")

    def get_memory(self, key: str) -> Any:
        """Return the short-term value for ``key``, else the long-term one, else None."""
        with self._lock:
            value = self._short_term.get(key, _MISSING)
            if value is _MISSING:
                value = self._long_term.get(key)
            return value

    def forget(self, key: str) -> None:
        """Drop ``key`` from both tiers."""
        with self._lock:
            self._short_term.pop(key, None)
            self._long_term.pop(key, None)

    def clear_short_term(self) -> None:
        with self._lock:
            self._short_term.clear()

    def append_context(self, entry: str) -> None:
        with self._lock:
            self._context.append(entry)
            if self.max_context_entries is not None:
                overflow = len(self._context) - self.max_context_entries
                if overflow > 0:
                    del self._context[:overflow]

    @property
    def context(self) -> list[str]:
        with self._lock:
            return list(self._context)

    def set_preference(self, key: str, value: Any) -> None:
        with self._lock:
            self._preferences[key] = value

    def get_preference(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._preferences.get(key, default)

    def record_learning(self, key: str, value: Any) -> None:
        with self._lock:
            self._learnings[key] = value

    def get_learning(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._learnings.get(key, default)

    def get_memory_snapshot(self) -> MemorySnapshot:
        with self._lock:
            return MemorySnapshot(
                short_term=dict(self._short_term),
                long_term=dict(self._long_term),
                context=list(self._context),
                preferences=dict(self._preferences),
                learnings=dict(self._learnings),
            )
