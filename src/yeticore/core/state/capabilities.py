"""Declared capability tags of an engine instance."""

from collections.abc import Iterable

DEFAULT_CAPABILITIES: tuple[str, ...] = (
    "web_search",
    "web_scraping",
    "image_generation",
    "video_generation",
    "text_to_speech",
    "speech_to_text",
    "memory_storage",
    "multi_language",
    "code_analysis",
    "document_analysis",
)


class CapabilityRegistry:
    """
    Set of capability tags the engine advertises.

    Dispatch is keyed on the handler table, not on this set. The executor
    only consults it when capability enforcement is switched on.
    """

    def __init__(self, capabilities: Iterable[str] | None = None):
        self._capabilities: set[str] = set(
            DEFAULT_CAPABILITIES if capabilities is None else capabilities
        )

    def add_capability(self, capability: str) -> None:
        self._capabilities.add(capability)

    def has_capability(self, capability: str) -> bool:
        return capability in self._capabilities

    def capabilities(self) -> list[str]:
        return sorted(self._capabilities)
