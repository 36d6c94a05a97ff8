"""
Application Layer - Agent Engine

Host-facing facade of the planning/execution engine. One instance owns its
task registry, memory store, capability set and dispatch table; hosts
construct it explicitly (usually through ``EngineFactory``) rather than
sharing a module-level instance.
"""

from typing import Any, Optional

import structlog

from yeticore.core.domain.events import ProgressCallback
from yeticore.core.domain.models import ActionType, ExecutionOutcome, MemorySnapshot, Task
from yeticore.core.execution.dispatch import DispatchTable, Handler
from yeticore.core.execution.executor import ActionExecutor
from yeticore.core.execution.summary import SummaryGenerator
from yeticore.core.planning.classifier import IntentClassifier
from yeticore.core.planning.planner import TaskPlanner
from yeticore.core.state.capabilities import CapabilityRegistry
from yeticore.core.state.memory import MemoryStore
from yeticore.core.state.registry import TaskRegistry


class AgentEngine:
    """Plans free-text requests into Tasks and executes them.

    Example:
        >>> engine = AgentEngine(dispatch_table=DispatchTable({ActionType.WEB_SEARCH: search}))
        >>> task = engine.plan_task("search for the latest AI news")
        >>> outcome = await engine.execute_task(task.id)
        >>> outcome.summary
        'Task "search for the latest AI news" completed with 1/1 actions successful. ...'
    """

    def __init__(
        self,
        dispatch_table: Optional[DispatchTable] = None,
        classifier: Optional[IntentClassifier] = None,
        registry: Optional[TaskRegistry] = None,
        memory: Optional[MemoryStore] = None,
        capabilities: Optional[CapabilityRegistry] = None,
        summary_generator: Optional[SummaryGenerator] = None,
        enforce_capabilities: bool = False,
        user_id: Optional[str] = None,
    ):
        """Initialize the engine, creating default collaborators where omitted.

        Args:
            dispatch_table: Handlers per action type (empty if omitted)
            classifier: Intent classifier (default rules if omitted)
            registry: Task registry
            memory: Memory store
            capabilities: Declared capability set (default tags if omitted)
            summary_generator: Result summary renderer
            enforce_capabilities: Reject undeclared action types at dispatch
            user_id: Optional owner of this engine instance
        """
        self.user_id = user_id
        self.dispatch_table = dispatch_table if dispatch_table is not None else DispatchTable()
        self.classifier = classifier if classifier is not None else IntentClassifier()
        self.registry = registry if registry is not None else TaskRegistry()
        self.memory = memory if memory is not None else MemoryStore()
        self.capabilities = capabilities if capabilities is not None else CapabilityRegistry()
        self.summary_generator = (
            summary_generator if summary_generator is not None else SummaryGenerator()
        )

        self.planner = TaskPlanner(self.classifier, self.registry)
        self.executor = ActionExecutor(
            registry=self.registry,
            dispatch_table=self.dispatch_table,
            memory=self.memory,
            summary_generator=self.summary_generator,
            capabilities=self.capabilities,
            enforce_capabilities=enforce_capabilities,
        )
        self.logger = structlog.get_logger().bind(component="agent_engine", user_id=user_id)

    # ---- planning / execution ----

    def plan_task(self, text: str) -> Task:
        return self.planner.plan_task(text)

    async def execute_task(
        self,
        task_id: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ExecutionOutcome:
        return await self.executor.execute_task(task_id, progress_callback=progress_callback)

    async def run(
        self,
        text: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ExecutionOutcome:
        """Plan ``text`` and execute the resulting Task in one call."""
        task = self.plan_task(text)
        self.memory.append_context(text)
        return await self.execute_task(task.id, progress_callback=progress_callback)

    def get_active_tasks(self) -> list[Task]:
        return self.registry.list_tasks()

    def get_task(self, task_id: str) -> Task:
        return self.registry.get(task_id)

    # ---- memory ----

    def update_memory(self, key: str, value: Any, persistent: bool = False) -> None:
        self.memory.update_memory(key, value, persistent=persistent)

    def get_memory(self, key: str) -> Any:
        return self.memory.get_memory(key)

    def get_memory_snapshot(self) -> MemorySnapshot:
        return self.memory.get_memory_snapshot()

    def append_context(self, entry: str) -> None:
        self.memory.append_context(entry)

    # ---- capabilities / handlers ----

    def add_capability(self, capability: str) -> None:
        self.capabilities.add_capability(capability)

    def has_capability(self, capability: str) -> bool:
        return self.capabilities.has_capability(capability)

    def register_handler(self, action_type: ActionType | str, handler: Handler) -> None:
        self.dispatch_table.register(action_type, handler)
        self.logger.debug("handler.registered", action_type=ActionType(action_type).value)
