"""Capability dispatch table mapping ActionType to handler callables."""

from collections.abc import Awaitable, Callable
from typing import Any

from yeticore.core.domain.errors import UnsupportedActionError
from yeticore.core.domain.models import ActionType

# A handler receives the action parameters and returns the result, either
# directly or as an awaitable. Raising marks the action failed.
Handler = Callable[[dict[str, Any]], Any | Awaitable[Any]]


class DispatchTable:
    def __init__(self, handlers: dict[ActionType, Handler] | None = None):
        self._handlers: dict[ActionType, Handler] = {}
        for action_type, handler in (handlers or {}).items():
            self.register(action_type, handler)

    def register(self, action_type: ActionType | str, handler: Handler) -> None:
        """Register (or replace) the handler for ``action_type``."""
        self._handlers[ActionType(action_type)] = handler

    def unregister(self, action_type: ActionType | str) -> None:
        self._handlers.pop(ActionType(action_type), None)

    def get(self, action_type: ActionType) -> Handler:
        handler = self._handlers.get(action_type)
        if handler is None:
            raise UnsupportedActionError(ActionType(action_type).value)
        return handler

    def types(self) -> list[ActionType]:
        return list(self._handlers)

    def __contains__(self, action_type: object) -> bool:
        return action_type in self._handlers
