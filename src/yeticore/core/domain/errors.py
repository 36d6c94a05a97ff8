"""
Engine Errors

TaskNotFoundError and TaskStateError are fatal to the call that raised them.
UnsupportedActionError and HandlerError are caught inside the executor's
per-action loop and only ever degrade that one action to failed.
"""


class YetiCoreError(Exception):
    """Base class for all engine errors."""


class TaskNotFoundError(YetiCoreError):
    """Raised when a task id is not present in the registry."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class TaskStateError(YetiCoreError):
    """Raised when a task is asked to execute outside the planning state."""

    def __init__(self, task_id: str, status: str):
        self.task_id = task_id
        self.status = status
        super().__init__(f"Task {task_id} cannot be executed from status '{status}'")


class UnsupportedActionError(YetiCoreError):
    """Raised when no handler is available for an action type."""

    def __init__(self, action_type: str, reason: str = "no handler registered"):
        self.action_type = action_type
        super().__init__(f"Unsupported action type '{action_type}': {reason}")


class InvalidStateTransitionError(YetiCoreError):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Invalid action status transition: {current} -> {target}")


class HandlerError(YetiCoreError):
    """Raised by capability handlers to report a failed invocation."""
