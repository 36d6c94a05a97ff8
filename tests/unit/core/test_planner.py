"""Unit tests for TaskPlanner."""

import re
from unittest.mock import MagicMock

import pytest

from yeticore.core.domain.models import ActionType, TaskPriority, TaskStatus
from yeticore.core.planning.classifier import IntentClassifier
from yeticore.core.planning.planner import TaskPlanner, generate_task_id
from yeticore.core.state.registry import TaskRegistry


def test_generate_task_id_format():
    task_id = generate_task_id()
    assert re.fullmatch(r"task_\d{13}_[0-9a-z]{9}", task_id)


def test_generate_task_id_unique():
    ids = {generate_task_id() for _ in range(1000)}
    assert len(ids) == 1000


class TestTaskPlanner:
    def test_plan_task_registers_planning_task(self):
        registry = TaskRegistry()
        planner = TaskPlanner(IntentClassifier(), registry)

        task = planner.plan_task("generate a video of a sunset")

        assert task.status == TaskStatus.PLANNING
        assert task.description == "generate a video of a sunset"
        assert [a.type for a in task.actions] == [ActionType.VIDEO_GENERATION]
        assert task.priority == TaskPriority.HIGH
        assert task.required_permissions == ["video_generation"]
        assert task.estimated_duration == 30
        assert registry.get(task.id) is task

    def test_conversational_task_is_still_registered(self):
        registry = TaskRegistry()
        task = TaskPlanner(IntentClassifier(), registry).plan_task("hi")
        assert task.is_conversational
        assert task.id in registry

    def test_classifier_errors_propagate(self):
        classifier = MagicMock()
        classifier.classify.side_effect = RuntimeError("classifier broke")
        registry = TaskRegistry()

        with pytest.raises(RuntimeError, match="classifier broke"):
            TaskPlanner(classifier, registry).plan_task("anything")
        assert len(registry) == 0
