"""Shared fixtures for yeticore tests."""

from unittest.mock import AsyncMock

import pytest

from yeticore.application.engine import AgentEngine
from yeticore.core.domain.models import ActionType
from yeticore.core.execution.dispatch import DispatchTable


@pytest.fixture
def search_handler():
    """Async web search handler returning two hits."""
    return AsyncMock(return_value={"search_results": [{"title": "a"}, {"title": "b"}]})


@pytest.fixture
def image_handler():
    async def handler(params):
        return {"type": "image", "url": "https://img.example/1.png", "prompt": params["prompt"]}

    return handler


@pytest.fixture
def video_handler():
    def handler(params):
        return {"type": "video", "url": "https://vid.example/1.mp4", "prompt": params["prompt"]}

    return handler


@pytest.fixture
def dispatch_table(search_handler, image_handler, video_handler):
    return DispatchTable({
        ActionType.WEB_SEARCH: search_handler,
        ActionType.IMAGE_GENERATION: image_handler,
        ActionType.VIDEO_GENERATION: video_handler,
    })


@pytest.fixture
def engine(dispatch_table):
    """Fresh engine per test; nothing is shared between tests."""
    return AgentEngine(dispatch_table=dispatch_table)
