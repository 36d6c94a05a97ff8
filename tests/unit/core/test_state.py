"""Unit tests for TaskRegistry, CapabilityRegistry and MemoryStore."""

import threading

import pytest

from yeticore.core.domain.errors import TaskNotFoundError
from yeticore.core.domain.models import Task, TaskStatus
from yeticore.core.state.capabilities import DEFAULT_CAPABILITIES, CapabilityRegistry
from yeticore.core.state.memory import MemoryStore
from yeticore.core.state.registry import TaskRegistry


class TestTaskRegistry:
    def test_add_and_get(self):
        registry = TaskRegistry()
        task = Task(id="task_a", description="a")
        registry.add(task)
        assert registry.get("task_a") is task
        assert "task_a" in registry
        assert len(registry) == 1

    def test_get_unknown_raises(self):
        registry = TaskRegistry()
        with pytest.raises(TaskNotFoundError) as exc_info:
            registry.get("missing")
        assert exc_info.value.task_id == "missing"
        assert registry.find("missing") is None

    def test_list_tasks_preserves_insertion_order_and_filters(self):
        registry = TaskRegistry()
        first = Task(id="t1", description="1")
        second = Task(id="t2", description="2", status=TaskStatus.COMPLETED)
        registry.add(first)
        registry.add(second)
        assert registry.list_tasks() == [first, second]
        assert registry.list_tasks(TaskStatus.COMPLETED) == [second]

    def test_list_tasks_returns_a_copy(self):
        registry = TaskRegistry()
        registry.add(Task(id="t1", description="1"))
        listed = registry.list_tasks()
        listed.clear()
        assert len(registry) == 1

    def test_remove_and_clear(self):
        registry = TaskRegistry()
        registry.add(Task(id="t1", description="1"))
        registry.add(Task(id="t2", description="2"))
        registry.remove("t1")
        assert "t1" not in registry
        with pytest.raises(TaskNotFoundError):
            registry.remove("t1")
        registry.clear()
        assert len(registry) == 0

    def test_concurrent_inserts(self):
        registry = TaskRegistry()

        def insert(start):
            for i in range(start, start + 100):
                registry.add(Task(id=f"t{i}", description=str(i)))

        threads = [threading.Thread(target=insert, args=(n * 100,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(registry) == 400


class TestCapabilityRegistry:
    def test_defaults(self):
        registry = CapabilityRegistry()
        for capability in DEFAULT_CAPABILITIES:
            assert registry.has_capability(capability)
        assert not registry.has_capability("form_fill")

    def test_add_capability(self):
        registry = CapabilityRegistry()
        registry.add_capability("form_fill")
        assert registry.has_capability("form_fill")

    def test_explicit_empty_set(self):
        registry = CapabilityRegistry([])
        assert registry.capabilities() == []


class TestMemoryStore:
    def test_short_term_by_default(self):
        memory = MemoryStore()
        memory.update_memory("k", "v")
        snapshot = memory.get_memory_snapshot()
        assert snapshot.short_term == {"k": "v"}
        assert snapshot.long_term == {}

    def test_persistent_goes_long_term(self):
        memory = MemoryStore()
        memory.update_memory("k", "v", persistent=True)
        snapshot = memory.get_memory_snapshot()
        assert snapshot.long_term == {"k": "v"}
        assert snapshot.short_term == {}

    def test_short_term_shadows_long_term(self):
        memory = MemoryStore()
        memory.update_memory("k", "long", persistent=True)
        assert memory.get_memory("k") == "long"
        memory.update_memory("k", "short")
        assert memory.get_memory("k") == "short"

    def test_falsy_short_term_value_still_wins(self):
        memory = MemoryStore()
        memory.update_memory("k", "long", persistent=True)
        memory.update_memory("k", 0)
        assert memory.get_memory("k") == 0

    def test_missing_key_returns_none(self):
        assert MemoryStore().get_memory("nothing") is None

    def test_repeated_reads_are_equal(self):
        memory = MemoryStore()
        memory.update_memory("k", {"a": [1, 2]})
        assert memory.get_memory("k") == memory.get_memory("k")

    def test_snapshot_is_not_altered_by_later_writes(self):
        memory = MemoryStore()
        memory.update_memory("k", "before")
        memory.append_context("first")
        snapshot = memory.get_memory_snapshot()

        memory.update_memory("k", "after")
        memory.update_memory("new", 1)
        memory.append_context("second")
        memory.set_preference("lang", "de")

        assert snapshot.short_term == {"k": "before"}
        assert snapshot.context == ["first"]
        assert snapshot.preferences == {}

    def test_mutating_snapshot_does_not_touch_store(self):
        memory = MemoryStore()
        memory.update_memory("k", "v")
        snapshot = memory.get_memory_snapshot()
        snapshot.short_term["k"] = "hacked"
        assert memory.get_memory("k") == "v"

    def test_context_unbounded_by_default(self):
        memory = MemoryStore()
        for i in range(50):
            memory.append_context(str(i))
        assert len(memory.context) == 50

    def test_context_cap_drops_oldest(self):
        memory = MemoryStore(max_context_entries=3)
        for i in range(5):
            memory.append_context(str(i))
        assert memory.context == ["2", "3", "4"]

    def test_forget_and_clear(self):
        memory = MemoryStore()
        memory.update_memory("a", 1)
        memory.update_memory("a", 2, persistent=True)
        memory.update_memory("b", 3)
        memory.forget("a")
        assert memory.get_memory("a") is None
        memory.clear_short_term()
        assert memory.get_memory("b") is None

    def test_preferences_and_learnings(self):
        memory = MemoryStore()
        memory.set_preference("language", "en")
        memory.record_learning("web_search", "rate limited at night")
        assert memory.get_preference("language") == "en"
        assert memory.get_preference("theme", "dark") == "dark"
        assert memory.get_learning("web_search") == "rate limited at night"
        snapshot = memory.get_memory_snapshot()
        assert snapshot.learnings == {"web_search": "rate limited at night"}
