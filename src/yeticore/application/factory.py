"""
Application Layer - Engine Factory

Wires an AgentEngine from EngineSettings: the simulated handlers are always
registered, the remote function handlers only when a functions endpoint is
configured. Action types left without a handler fail at dispatch time.
"""

from typing import Optional

import structlog

from yeticore.application.engine import AgentEngine
from yeticore.config.settings import EngineSettings
from yeticore.core.domain.models import ActionType
from yeticore.core.execution.dispatch import DispatchTable
from yeticore.core.planning.classifier import IntentClassifier
from yeticore.core.state.capabilities import CapabilityRegistry
from yeticore.core.state.memory import MemoryStore
from yeticore.infrastructure.handlers import (
    FunctionInvoker,
    build_remote_handlers,
    simulated_code_deploy,
    simulated_form_fill,
)


class EngineFactory:
    """Factory for creating engines with dependency injection."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()
        self.logger = structlog.get_logger().bind(component="engine_factory")

    def create_dispatch_table(self) -> DispatchTable:
        table = DispatchTable({
            ActionType.FORM_FILL: simulated_form_fill,
            ActionType.CODE_DEPLOY: simulated_code_deploy,
        })

        if self.settings.functions_base_url:
            invoker = FunctionInvoker(
                base_url=self.settings.functions_base_url,
                api_key=self.settings.functions_api_key,
                timeout_seconds=self.settings.request_timeout_seconds,
            )
            for action_type, handler in build_remote_handlers(invoker).items():
                table.register(action_type, handler)

        return table

    def create_engine(self, user_id: Optional[str] = None) -> AgentEngine:
        """
        Create an engine configured from the factory's settings.

        Args:
            user_id: Optional owner of the engine instance

        Returns:
            AgentEngine with its own registry and memory store
        """
        dispatch_table = self.create_dispatch_table()

        self.logger.info(
            "creating_engine",
            user_id=user_id,
            handlers=[t.value for t in dispatch_table.types()],
            remote_functions=bool(self.settings.functions_base_url),
            enforce_capabilities=self.settings.enforce_capabilities,
        )

        return AgentEngine(
            dispatch_table=dispatch_table,
            classifier=IntentClassifier(seconds_per_action=self.settings.seconds_per_action),
            memory=MemoryStore(max_context_entries=self.settings.max_context_entries),
            capabilities=CapabilityRegistry(self.settings.default_capabilities),
            enforce_capabilities=self.settings.enforce_capabilities,
            user_id=user_id,
        )
