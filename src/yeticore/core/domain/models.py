"""
Core Domain Models

This module defines the core data models of the planning/execution engine.
These models represent the units of planned work (Task, Action), their
lifecycle states, and the outcome of an execution run.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from yeticore.core.domain.errors import InvalidStateTransitionError


class ActionType(str, Enum):
    """Capability tag identifying which handler performs an action."""

    WEB_SEARCH = "web_search"
    FORM_FILL = "form_fill"
    CODE_DEPLOY = "code_deploy"
    FILE_UPLOAD = "file_upload"
    EMAIL_SEND = "email_send"
    BROWSER_NAVIGATE = "browser_navigate"
    TERMINAL_EXEC = "terminal_exec"
    IMAGE_GENERATION = "image_generation"
    VIDEO_GENERATION = "video_generation"
    WEB_SCRAPING = "web_scraping"


class ActionStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class TaskStatus(str, Enum):
    PLANNING = "planning"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def escalate(self, other: "TaskPriority") -> "TaskPriority":
        """Return the higher of the two priorities."""
        return other if other.rank > self.rank else self


_PRIORITY_RANK = {
    TaskPriority.LOW: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.HIGH: 2,
}

# Allowed forward moves; anything else is a lifecycle violation.
_ACTION_TRANSITIONS: dict[ActionStatus, set[ActionStatus]] = {
    ActionStatus.PENDING: {ActionStatus.RUNNING},
    ActionStatus.RUNNING: {ActionStatus.COMPLETED, ActionStatus.FAILED},
    ActionStatus.COMPLETED: set(),
    ActionStatus.FAILED: set(),
}


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Action:
    """
    A discrete, independently dispatchable unit of work.

    Each action belongs to exactly one Task and maps to exactly one
    capability handler through its ``type``. The lifecycle only moves
    forward: pending -> running -> completed | failed.

    Attributes:
        type: Capability tag used to select the handler
        parameters: Opaque keyword mapping passed to the handler
        id: Unique action identifier
        status: Current lifecycle state
        result: Handler return value (set only when completed)
        error: Failure message (set only when failed)
        timestamp: ISO-8601 creation time
    """

    type: ActionType
    parameters: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: _new_id("action"))
    status: ActionStatus = ActionStatus.PENDING
    result: Any = None
    error: str | None = None
    timestamp: str = field(default_factory=_utc_now_iso)

    def _transition(self, target: ActionStatus) -> None:
        if target not in _ACTION_TRANSITIONS[self.status]:
            raise InvalidStateTransitionError(self.status.value, target.value)
        self.status = target

    def start(self) -> None:
        self._transition(ActionStatus.RUNNING)

    def complete(self, result: Any) -> None:
        self._transition(ActionStatus.COMPLETED)
        self.result = result

    def fail(self, error: str) -> None:
        self._transition(ActionStatus.FAILED)
        self.error = error

    def to_dict(self) -> dict[str, Any]:
        """Convert the Action to a serializable dict."""
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "parameters": dict(self.parameters),
            "status": self.status.value,
            "timestamp": self.timestamp,
        }
        if self.status == ActionStatus.COMPLETED:
            data["result"] = self.result
        if self.status == ActionStatus.FAILED:
            data["error"] = self.error
        return data


@dataclass
class Task:
    """
    Unit of planned work derived from one user request.

    Attributes:
        id: Process-unique task identifier
        description: The original request text
        subtasks: Human-readable labels, in classification order
        actions: Actions in execution order
        status: planning -> executing -> completed | failed
        priority: low, medium or high
        required_permissions: Permission tags, deduplicated, insertion-ordered
        estimated_duration: Informational estimate in seconds
    """

    id: str
    description: str
    subtasks: list[str] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)
    status: TaskStatus = TaskStatus.PLANNING
    priority: TaskPriority = TaskPriority.MEDIUM
    required_permissions: list[str] = field(default_factory=list)
    estimated_duration: int = 0

    @property
    def is_conversational(self) -> bool:
        """True when no automation is planned and the host should just reply."""
        return not self.actions

    @property
    def is_terminal(self) -> bool:
        return self.status in (TaskStatus.COMPLETED, TaskStatus.FAILED)

    def completed_actions(self) -> list[Action]:
        return [a for a in self.actions if a.status == ActionStatus.COMPLETED]

    def failed_actions(self) -> list[Action]:
        return [a for a in self.actions if a.status == ActionStatus.FAILED]

    def to_dict(self) -> dict[str, Any]:
        """Convert the Task to a serializable dict."""
        return {
            "id": self.id,
            "description": self.description,
            "subtasks": list(self.subtasks),
            "actions": [a.to_dict() for a in self.actions],
            "status": self.status.value,
            "priority": self.priority.value,
            "required_permissions": list(self.required_permissions),
            "estimated_duration": self.estimated_duration,
        }


@dataclass
class ExecutionOutcome:
    """
    Result of executing one Task.

    ``success`` reports that the executor ran to completion, not that every
    action succeeded. Inspect ``task.failed_actions()`` or the per-action
    status for the real outcome.

    Attributes:
        task_id: Identifier of the executed Task
        success: Whether the executor loop finished without escaping errors
        results: Return values of completed actions, in execution order
        executed_actions: The completed actions, in execution order
        summary: Human-readable rollup of the run
    """

    task_id: str
    success: bool
    results: list[Any] = field(default_factory=list)
    executed_actions: list[Action] = field(default_factory=list)
    summary: str = ""


@dataclass
class MemorySnapshot:
    """Point-in-time copy of every memory tier."""

    short_term: dict[str, Any]
    long_term: dict[str, Any]
    context: list[str]
    preferences: dict[str, Any]
    learnings: dict[str, Any]
