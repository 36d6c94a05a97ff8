"""
Unit Tests for AgentEngine

End-to-end behaviour of the host-facing facade: plan, execute, inspect
tasks, memory and capabilities.
"""

from unittest.mock import AsyncMock

import pytest

from yeticore.application.engine import AgentEngine
from yeticore.core.domain.errors import TaskNotFoundError
from yeticore.core.domain.models import (
    ActionStatus,
    ActionType,
    TaskPriority,
    TaskStatus,
)


class TestPlanning:
    def test_plan_search_request(self, engine):
        task = engine.plan_task("search for the latest AI news")

        assert task.subtasks == ["Perform web search"]
        assert [a.type for a in task.actions] == [ActionType.WEB_SEARCH]
        assert task.priority == TaskPriority.MEDIUM
        assert task.status == TaskStatus.PLANNING
        assert engine.get_active_tasks() == [task]

    def test_plan_video_and_search_request(self, engine):
        task = engine.plan_task(
            "generate a video of a sunset and also search for video marketing tips"
        )
        types = [a.type for a in task.actions]

        assert types.count(ActionType.VIDEO_GENERATION) == 1
        assert types.count(ActionType.WEB_SEARCH) == 1
        assert task.priority == TaskPriority.HIGH
        assert len(task.subtasks) == 2

    def test_engines_do_not_share_state(self, dispatch_table):
        first = AgentEngine(dispatch_table=dispatch_table)
        second = AgentEngine(dispatch_table=dispatch_table)
        first.plan_task("find cats")
        first.update_memory("k", "v")

        assert second.get_active_tasks() == []
        assert second.get_memory("k") is None


class TestExecution:
    @pytest.mark.asyncio
    async def test_execute_search_task(self, engine, search_handler):
        task = engine.plan_task("search for the latest AI news")

        outcome = await engine.execute_task(task.id)

        assert outcome.success is True
        search_handler.assert_awaited_once_with({"query": "search for the latest AI news"})
        assert outcome.summary == (
            'Task "search for the latest AI news" completed with 1/1 actions successful. '
            "Generated 1 result(s): web search (2 results)"
        )
        assert engine.get_task(task.id).status == TaskStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_rate_limited_search_does_not_block_video(self, engine, search_handler):
        search_handler.side_effect = Exception("rate limited")
        task = engine.plan_task(
            "generate a video of a sunset and also search for video marketing tips"
        )

        outcome = await engine.execute_task(task.id)

        search = next(a for a in task.actions if a.type == ActionType.WEB_SEARCH)
        video = next(a for a in task.actions if a.type == ActionType.VIDEO_GENERATION)
        assert outcome.success is True
        assert task.status == TaskStatus.COMPLETED
        assert search.status == ActionStatus.FAILED
        assert search.error == "rate limited"
        assert search not in outcome.executed_actions
        assert video.status == ActionStatus.COMPLETED
        assert outcome.executed_actions == [video]
        assert len(outcome.results) == 1
        assert outcome.summary.endswith(
            "completed with 1/2 actions successful. Generated 1 result(s): "
            "video (generate a video of a sunset and also search for video marketing tips)"
        )

    @pytest.mark.asyncio
    async def test_unknown_task_id(self, engine):
        engine.plan_task("find a picture")
        size_before = len(engine.get_active_tasks())

        with pytest.raises(TaskNotFoundError):
            await engine.execute_task("task_0_doesnotexist")

        assert len(engine.get_active_tasks()) == size_before

    @pytest.mark.asyncio
    async def test_task_result_is_readable_from_memory(self, engine):
        task = engine.plan_task("find an image of a fox")

        outcome = await engine.execute_task(task.id)

        stored = engine.get_memory(task.id)
        assert stored["task"] is task
        assert stored["results"] == outcome.results

    @pytest.mark.asyncio
    async def test_run_plans_executes_and_records_context(self, engine):
        outcome = await engine.run("find an image of a fox")

        assert outcome.success is True
        assert engine.get_memory_snapshot().context == ["find an image of a fox"]
        assert len(engine.get_active_tasks()) == 1

    @pytest.mark.asyncio
    async def test_register_handler_after_construction(self):
        engine = AgentEngine()
        deploy = AsyncMock(return_value={"status": "deployed"})
        engine.register_handler("code_deploy", deploy)
        task = engine.plan_task("write code for a todo app")

        outcome = await engine.execute_task(task.id)

        deploy.assert_awaited_once_with({"requirements": "write code for a todo app"})
        assert outcome.results == [{"status": "deployed"}]


class TestMemoryAndCapabilities:
    def test_snapshot_copy_on_read(self, engine):
        engine.update_memory("draft", "v1")
        snapshot = engine.get_memory_snapshot()
        engine.update_memory("draft", "v2")
        assert snapshot.short_term["draft"] == "v1"
        assert engine.get_memory("draft") == "v2"

    def test_persistent_memory(self, engine):
        engine.update_memory("name", "Ada", persistent=True)
        assert engine.get_memory("name") == "Ada"
        assert engine.get_memory_snapshot().long_term == {"name": "Ada"}

    def test_capabilities(self, engine):
        assert engine.has_capability("web_search")
        assert not engine.has_capability("form_fill")
        engine.add_capability("form_fill")
        assert engine.has_capability("form_fill")

    def test_user_id(self):
        assert AgentEngine(user_id="user-1").user_id == "user-1"
