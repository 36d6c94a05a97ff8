"""yeticore - agent task planning and execution engine."""

from yeticore.application.engine import AgentEngine
from yeticore.application.factory import EngineFactory
from yeticore.config.settings import EngineSettings
from yeticore.core.domain.errors import (
    HandlerError,
    InvalidStateTransitionError,
    TaskNotFoundError,
    TaskStateError,
    UnsupportedActionError,
    YetiCoreError,
)
from yeticore.core.domain.models import (
    Action,
    ActionStatus,
    ActionType,
    ExecutionOutcome,
    MemorySnapshot,
    Task,
    TaskPriority,
    TaskStatus,
)
from yeticore.core.execution.dispatch import DispatchTable

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionStatus",
    "ActionType",
    "AgentEngine",
    "DispatchTable",
    "EngineFactory",
    "EngineSettings",
    "ExecutionOutcome",
    "HandlerError",
    "InvalidStateTransitionError",
    "MemorySnapshot",
    "Task",
    "TaskNotFoundError",
    "TaskPriority",
    "TaskStateError",
    "TaskStatus",
    "UnsupportedActionError",
    "YetiCoreError",
]
