"""
Capability Handler Adapters

Default handlers the factory can wire into a dispatch table:

- simulated handlers for form filling and code deployment, which only echo
  their parameters until real browser/deployment integrations exist
- remote handlers that invoke hosted capability functions over HTTP
  (web search, scraping, image and video generation)
- ``with_timeout`` to bound any handler's run time
"""

import asyncio
import inspect
import json
from typing import Any, Dict, Optional

import aiohttp
import structlog

from yeticore.core.domain.errors import HandlerError
from yeticore.core.domain.models import ActionType
from yeticore.core.execution.dispatch import Handler

logger = structlog.get_logger()

WEB_SCRAPER_FUNCTION = "yeti-web-scraper"
IMAGE_FUNCTION = "yeti-image-generation"
VIDEO_FUNCTION = "yeti-video-generation"


# ============================================
# SIMULATED HANDLERS
# ============================================

async def simulated_form_fill(params: Dict[str, Any]) -> Dict[str, Any]:
    logger.info("handler.simulated", action_type=ActionType.FORM_FILL.value)
    return {"status": "form_fill_simulated", "data": params}


async def simulated_code_deploy(params: Dict[str, Any]) -> Dict[str, Any]:
    logger.info("handler.simulated", action_type=ActionType.CODE_DEPLOY.value)
    return {"status": "code_deploy_simulated", "data": params}


# ============================================
# REMOTE FUNCTION HANDLERS
# ============================================

class FunctionInvoker:
    """POSTs JSON bodies to ``<base_url>/<function name>`` and returns the JSON reply."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout_seconds: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.logger = logger.bind(component="function_invoker")

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def invoke(self, function_name: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/{function_name}"
        self.logger.debug("function.invoke", function=function_name)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    url,
                    json=body,
                    headers=self._headers(),
                    timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                ) as response:
                    if response.status >= 400:
                        text = await response.text()
                        raise HandlerError(
                            f"{function_name} returned HTTP {response.status}"
                            + (f": {_error_message(text)}" if text.strip() else "")
                        )
                    try:
                        data = await response.json(content_type=None)
                    except ValueError as e:
                        raise HandlerError(f"{function_name} returned invalid JSON") from e
        except asyncio.TimeoutError as e:
            raise HandlerError(
                f"{function_name} timed out after {self.timeout_seconds}s"
            ) from e
        except aiohttp.ClientError as e:
            raise HandlerError(f"{function_name} request failed: {e}") from e

        if isinstance(data, dict) and data.get("error"):
            raise HandlerError(str(data["error"]))
        return data


def _error_message(text: str) -> str:
    """Prefer the ``error`` field of a JSON error body, else the raw text."""
    try:
        data = json.loads(text)
    except ValueError:
        return text.strip()[:200]
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return text.strip()[:200]


def _first_url(data: Dict[str, Any], key: str, function_name: str) -> str:
    items = data.get(key) or []
    if not items or not isinstance(items[0], dict) or "url" not in items[0]:
        raise HandlerError(f"{function_name} returned no {key}")
    return items[0]["url"]


def build_remote_handlers(invoker: FunctionInvoker) -> Dict[ActionType, Handler]:
    """Create handlers for the capabilities backed by hosted functions."""

    async def web_search(params: Dict[str, Any]) -> Dict[str, Any]:
        return await invoker.invoke(WEB_SCRAPER_FUNCTION, {
            "action": "search",
            "query": params.get("query") or params.get("url"),
            "searchEngine": "google",
        })

    async def web_scraping(params: Dict[str, Any]) -> Dict[str, Any]:
        return await invoker.invoke(WEB_SCRAPER_FUNCTION, {
            "action": "scrape",
            "url": params.get("url"),
            "extractText": True,
            "takeScreenshot": params.get("screenshot", False),
        })

    async def image_generation(params: Dict[str, Any]) -> Dict[str, Any]:
        data = await invoker.invoke(IMAGE_FUNCTION, {
            "provider": "a4f",
            "model": "flux-1-schnell",
            "prompt": params.get("prompt"),
            "width": params.get("width", 1024),
            "height": params.get("height", 1024),
        })
        url = _first_url(data, "images", IMAGE_FUNCTION)
        return {"type": "image", "url": url, "prompt": params.get("prompt")}

    async def video_generation(params: Dict[str, Any]) -> Dict[str, Any]:
        data = await invoker.invoke(VIDEO_FUNCTION, {
            "provider": "a4f",
            "model": "minimax-video-01",
            "prompt": params.get("prompt"),
            "duration": params.get("duration", 5),
            "fps": params.get("fps", 24),
        })
        url = _first_url(data, "videos", VIDEO_FUNCTION)
        return {"type": "video", "url": url, "prompt": params.get("prompt")}

    return {
        ActionType.WEB_SEARCH: web_search,
        ActionType.WEB_SCRAPING: web_scraping,
        ActionType.IMAGE_GENERATION: image_generation,
        ActionType.VIDEO_GENERATION: video_generation,
    }


# ============================================
# WRAPPERS
# ============================================

def with_timeout(handler: Handler, seconds: float) -> Handler:
    """Wrap ``handler`` so that a run longer than ``seconds`` fails the action."""

    async def wrapped(params: Dict[str, Any]) -> Any:
        async def run() -> Any:
            result = handler(params)
            if inspect.isawaitable(result):
                result = await result
            return result

        try:
            return await asyncio.wait_for(run(), timeout=seconds)
        except asyncio.TimeoutError as e:
            raise HandlerError(f"handler timed out after {seconds}s") from e

    return wrapped
