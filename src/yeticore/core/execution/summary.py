"""
Task Summary Generator

Builds the deterministic natural-language rollup returned after a Task
runs. Each result is rendered by the first matching entry of an ordered
renderer table; hosts extend the table with ``SummaryGenerator.register``
without touching the executor.
"""

from collections.abc import Callable, Mapping
from typing import Any

from yeticore.core.domain.models import ActionStatus, Task

ResultMatcher = Callable[[Any], bool]
ResultRenderer = Callable[[Any], str]

FALLBACK_RENDERING = "data result"


def _field(result: Any, name: str) -> Any:
    if isinstance(result, Mapping):
        return result.get(name)
    return getattr(result, name, None)


def _search_results(result: Any) -> Any:
    hits = _field(result, "search_results")
    if hits is None:
        hits = _field(result, "searchResults")
    return hits


def _is_media(kind: str) -> ResultMatcher:
    return lambda result: _field(result, "type") == kind


def _is_search(result: Any) -> bool:
    return isinstance(_search_results(result), (list, tuple))


DEFAULT_RENDERERS: tuple[tuple[ResultMatcher, ResultRenderer], ...] = (
    (_is_media("image"), lambda r: f"image ({_field(r, 'prompt')})"),
    (_is_media("video"), lambda r: f"video ({_field(r, 'prompt')})"),
    (_is_search, lambda r: f"web search ({len(_search_results(r))} results)"),
)


class SummaryGenerator:
    def __init__(
        self,
        renderers: tuple[tuple[ResultMatcher, ResultRenderer], ...] | None = None,
    ):
        self._renderers: list[tuple[ResultMatcher, ResultRenderer]] = list(
            DEFAULT_RENDERERS if renderers is None else renderers
        )

    def register(
        self, matcher: ResultMatcher, renderer: ResultRenderer, first: bool = True
    ) -> None:
        """
        Add a result renderer.

        Args:
            matcher: Predicate selecting the results this renderer handles
            renderer: Produces the text for a matched result
            first: Take precedence over the existing renderers (default)
        """
        if first:
            self._renderers.insert(0, (matcher, renderer))
        else:
            self._renderers.append((matcher, renderer))

    def render_result(self, result: Any) -> str:
        for matcher, renderer in self._renderers:
            if matcher(result):
                return renderer(result)
        return FALLBACK_RENDERING

    def generate(self, task: Task, results: list[Any]) -> str:
        completed = sum(1 for a in task.actions if a.status == ActionStatus.COMPLETED)
        total = len(task.actions)

        summary = (
            f'Task "{task.description}" completed with '
            f"{completed}/{total} actions successful."
        )
        if results:
            rendered = ", ".join(self.render_result(r) for r in results)
            summary += f" Generated {len(results)} result(s): {rendered}"
        return summary


_default_generator = SummaryGenerator()


def generate_task_summary(task: Task, results: list[Any]) -> str:
    """Summarize ``task`` with the default renderers."""
    return _default_generator.generate(task, results)
