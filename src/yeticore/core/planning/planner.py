"""Task planner: wraps a classification into a registered Task."""

import random
import string
import time

import structlog

from yeticore.core.domain.models import Task, TaskStatus
from yeticore.core.planning.classifier import IntentClassifier
from yeticore.core.state.registry import TaskRegistry

_BASE36 = string.digits + string.ascii_lowercase


def generate_task_id() -> str:
    """Return ``task_<epoch-ms>_<9 base36 chars>``, unique within the process."""
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"task_{int(time.time() * 1000)}_{suffix}"


class TaskPlanner:
    def __init__(self, classifier: IntentClassifier, registry: TaskRegistry):
        self.classifier = classifier
        self.registry = registry
        self.logger = structlog.get_logger().bind(component="task_planner")

    def plan_task(self, text: str) -> Task:
        """
        Plan a Task for a free-text request and register it.

        Args:
            text: The user's request

        Returns:
            The new Task in ``planning`` status
        """
        self.logger.info("task.planning.started", request=text[:100])

        analysis = self.classifier.classify(text)
        task = Task(
            id=generate_task_id(),
            description=text,
            subtasks=analysis.subtasks,
            actions=analysis.actions,
            status=TaskStatus.PLANNING,
            priority=analysis.priority,
            required_permissions=analysis.permissions,
            estimated_duration=analysis.estimated_duration,
        )
        self.registry.add(task)

        self.logger.info(
            "task.planned",
            task_id=task.id,
            actions=len(task.actions),
            priority=task.priority.value,
            conversational=task.is_conversational,
        )
        return task
