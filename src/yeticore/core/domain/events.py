"""
Execution Progress Events

Progress updates emitted while a Task runs. Consumers (CLI spinners, API
streams) receive them through an optional callback passed to the executor.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ProgressEventType(str, Enum):
    TASK_STARTED = "task_started"
    ACTION_STARTED = "action_started"
    ACTION_COMPLETED = "action_completed"
    ACTION_FAILED = "action_failed"
    TASK_COMPLETED = "task_completed"
    TASK_FAILED = "task_failed"


@dataclass
class ProgressUpdate:
    """Progress update during execution.

    Attributes:
        event_type: Type of event
        message: Human-readable message describing the event
        details: Additional structured data about the event
        timestamp: When this update occurred
    """

    event_type: ProgressEventType
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


ProgressCallback = Callable[[ProgressUpdate], None]
