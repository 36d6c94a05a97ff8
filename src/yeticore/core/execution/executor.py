"""
Action Executor

Runs the Actions of a registered Task strictly one after another, in list
order, awaiting each capability handler before moving on.

Failure isolation:
- A handler that raises, or an action type without a handler, marks only
  that Action as failed. The loop keeps going and the Task still ends
  ``completed``.
- Only an error escaping the loop itself marks the Task ``failed`` and
  yields ``success=False``.
- Cancellation fails the running Action and the Task, then propagates.
"""

import asyncio
import inspect
from typing import Any

import structlog

from yeticore.core.domain.errors import TaskStateError, UnsupportedActionError
from yeticore.core.domain.events import (
    ProgressCallback,
    ProgressEventType,
    ProgressUpdate,
)
from yeticore.core.domain.models import (
    Action,
    ExecutionOutcome,
    TaskStatus,
)
from yeticore.core.execution.dispatch import DispatchTable
from yeticore.core.execution.summary import SummaryGenerator
from yeticore.core.state.capabilities import CapabilityRegistry
from yeticore.core.state.memory import MemoryStore
from yeticore.core.state.registry import TaskRegistry

logger = structlog.get_logger()

CANCELLED_ERROR = "cancelled"


class ActionExecutor:
    def __init__(
        self,
        registry: TaskRegistry,
        dispatch_table: DispatchTable,
        memory: MemoryStore,
        summary_generator: SummaryGenerator | None = None,
        capabilities: CapabilityRegistry | None = None,
        enforce_capabilities: bool = False,
    ):
        """
        Initialize the executor with its collaborators.

        Args:
            registry: Source of the Tasks to execute
            dispatch_table: ActionType -> handler lookup
            memory: Receives ``{"task", "results"}`` under the task id
            summary_generator: Renders the final summary
            capabilities: Declared capability set
            enforce_capabilities: Fail actions whose type is not declared in
                ``capabilities`` instead of dispatching them
        """
        self.registry = registry
        self.dispatch_table = dispatch_table
        self.memory = memory
        self.summary_generator = summary_generator or SummaryGenerator()
        self.capabilities = capabilities
        self.enforce_capabilities = enforce_capabilities
        self.logger = logger.bind(component="action_executor")

    async def execute_task(
        self,
        task_id: str,
        progress_callback: ProgressCallback | None = None,
    ) -> ExecutionOutcome:
        """
        Execute every Action of a planned Task.

        Args:
            task_id: Id returned by the planner
            progress_callback: Optional receiver for progress updates

        Returns:
            ExecutionOutcome; ``success`` means the loop ran to completion

        Raises:
            TaskNotFoundError: If ``task_id`` is not registered
            TaskStateError: If the Task already left the planning state
        """
        task = self.registry.get(task_id)
        if task.status != TaskStatus.PLANNING:
            raise TaskStateError(task.id, task.status.value)

        log = self.logger.bind(task_id=task.id)
        log.info(
            "task.execution.started",
            description=task.description[:100],
            actions=len(task.actions),
        )
        task.status = TaskStatus.EXECUTING
        self._emit(
            progress_callback,
            ProgressEventType.TASK_STARTED,
            f"Executing task: {task.description}",
            task_id=task.id,
        )

        results: list[Any] = []
        executed_actions: list[Action] = []

        try:
            for action in task.actions:
                action.start()
                self._emit(
                    progress_callback,
                    ProgressEventType.ACTION_STARTED,
                    f"Running {action.type.value}",
                    task_id=task.id,
                    action_id=action.id,
                )
                try:
                    result = await self._run_action(action)
                except asyncio.CancelledError:
                    action.fail(CANCELLED_ERROR)
                    task.status = TaskStatus.FAILED
                    log.warning("task.execution.cancelled", action_id=action.id)
                    raise
                except Exception as e:
                    # Some exceptions (bare TimeoutError) stringify to ""
                    error = str(e) or type(e).__name__
                    action.fail(error)
                    log.warning(
                        "action.failed",
                        action_id=action.id,
                        action_type=action.type.value,
                        error=error,
                        error_type=type(e).__name__,
                    )
                    self._emit(
                        progress_callback,
                        ProgressEventType.ACTION_FAILED,
                        f"{action.type.value} failed: {error}",
                        task_id=task.id,
                        action_id=action.id,
                        error=error,
                    )
                    continue

                action.complete(result)
                results.append(result)
                executed_actions.append(action)
                log.info(
                    "action.completed",
                    action_id=action.id,
                    action_type=action.type.value,
                )
                self._emit(
                    progress_callback,
                    ProgressEventType.ACTION_COMPLETED,
                    f"{action.type.value} completed",
                    task_id=task.id,
                    action_id=action.id,
                )

            task.status = TaskStatus.COMPLETED
            self.memory.update_memory(task.id, {"task": task, "results": results})
            summary = self.summary_generator.generate(task, results)

        except Exception as e:
            task.status = TaskStatus.FAILED
            log.error(
                "task.execution.failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            self._emit(
                progress_callback,
                ProgressEventType.TASK_FAILED,
                f"Task failed: {e}",
                task_id=task.id,
                error=str(e),
            )
            return ExecutionOutcome(
                task_id=task.id,
                success=False,
                results=results,
                executed_actions=executed_actions,
                summary=f"Task failed: {e}",
            )

        log.info(
            "task.execution.completed",
            completed=len(executed_actions),
            failed=len(task.failed_actions()),
        )
        self._emit(
            progress_callback,
            ProgressEventType.TASK_COMPLETED,
            summary,
            task_id=task.id,
            completed=len(executed_actions),
            total=len(task.actions),
        )
        return ExecutionOutcome(
            task_id=task.id,
            success=True,
            results=results,
            executed_actions=executed_actions,
            summary=summary,
        )

    async def _run_action(self, action: Action) -> Any:
        if (
            self.enforce_capabilities
            and self.capabilities is not None
            and not self.capabilities.has_capability(action.type.value)
        ):
            raise UnsupportedActionError(action.type.value, "capability not declared")

        handler = self.dispatch_table.get(action.type)
        self.logger.debug(
            "action.dispatch",
            action_id=action.id,
            action_type=action.type.value,
            parameters=action.parameters,
        )
        result = handler(action.parameters)
        if inspect.isawaitable(result):
            result = await result
        return result

    @staticmethod
    def _emit(
        callback: ProgressCallback | None,
        event_type: ProgressEventType,
        message: str,
        **details: Any,
    ) -> None:
        if callback is not None:
            callback(ProgressUpdate(event_type=event_type, message=message, details=details))
