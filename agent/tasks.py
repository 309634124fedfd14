# =============================================================================
# agent/tasks.py  —  Agent-to-Agent Task Messaging (skills)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Lets ANOTHER AGENT use the wrapper agent.  The other agent doesn't call
#   REST endpoints or MCP tools; it sends a task:
#
#       {"skill": "update_price", "input": {"price_cents": 1499}}
#
#   and gets back a result:
#
#       {"status": "completed", "output": "Done. 'Mug' now costs $14.99."}
#
#   The skill names come from the agent card, published at
#   /.well-known/agent.json, so the caller can discover what this agent can
#   do before asking.
#
# STATE:
#   One TaskHandler wraps one ProductAssistant, so tasks sent to the same
#   server share its memory.  "add_product" followed by "update_price" with
#   no product_id works across two separate HTTP requests.  Skills run one
#   at a time so concurrent tasks never interleave on that memory.
#
# FAILURES:
#   A task never raises back at the caller.  Unknown skills and bad input
#   become {"status": "failed", "error": "..."}.
#
# RUNNING IT:
#   uvicorn agent.tasks:app --port 8090
# =============================================================================

import asyncio
import inspect
import logging
import threading
import uuid
from collections import OrderedDict
from typing import Any, Literal, Optional

import httpx
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from agent.assistant import ProductAssistant
from core.errors import ToolArgumentError, ToolNotFoundError
from core.registry import ToolRegistry

logger = logging.getLogger(__name__)

AGENT_NAME = "product-assistant"
AGENT_VERSION = "0.1.0"
MAX_STORED_RESULTS = 1000


# =============================================================================
# Wire models
# =============================================================================
class Skill(BaseModel):
    id: str
    name: str
    description: str
    input_schema: dict[str, Any] = Field(default_factory=dict)


class AgentCard(BaseModel):
    name: str
    description: str
    url: str
    version: str
    skills: list[Skill] = Field(default_factory=list)


class TaskRequest(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    skill: str
    input: dict[str, Any] = Field(default_factory=dict)


class TaskResult(BaseModel):
    id: str
    skill: str
    status: Literal["completed", "failed"]
    output: Optional[str] = None
    error: Optional[str] = None


# =============================================================================
# Handler
# =============================================================================
class TaskHandler:
    """Dispatches task requests to a ProductAssistant's skills.

    Skill input is validated through a ToolRegistry, the same one used for
    in-process tools, so a task gets the same argument checking a tool call
    does.
    """

    def __init__(self, assistant: ProductAssistant, url: str = "", max_results: int = MAX_STORED_RESULTS):
        self.assistant = assistant
        self.url = url
        self._skills = ToolRegistry()
        for fn in assistant.tools():
            self._skills.register(fn)
        self._lock = threading.Lock()
        self._max_results = max_results
        self._results: "OrderedDict[str, TaskResult]" = OrderedDict()

    def card(self) -> AgentCard:
        skills = [
            Skill(
                id=spec.name,
                name=spec.name.replace("_", " ").capitalize(),
                description=spec.description,
                input_schema=spec.parameters,
            )
            for spec in self._skills.list_tools()
        ]
        return AgentCard(
            name=AGENT_NAME,
            description=inspect.getdoc(ProductAssistant) or "",
            url=self.url,
            version=AGENT_VERSION,
            skills=skills,
        )

    async def handle(self, request: TaskRequest) -> TaskResult:
        logger.info("task %s: %s(%s)", request.id, request.skill, request.input)
        try:
            # The assistant does blocking HTTP; keep it off the event loop.
            output = await asyncio.to_thread(self._run_skill, request.skill, request.input)
        except (ToolNotFoundError, ToolArgumentError) as exc:
            result = TaskResult(id=request.id, skill=request.skill, status="failed", error=str(exc))
        else:
            result = TaskResult(id=request.id, skill=request.skill, status="completed", output=output)
        self._store(result)
        return result

    def _run_skill(self, skill: str, arguments: dict[str, Any]) -> Any:
        with self._lock:
            return self._skills.call(skill, arguments)

    def _store(self, result: TaskResult) -> None:
        # Oldest results are dropped once the cap is reached.
        self._results[result.id] = result
        self._results.move_to_end(result.id)
        while len(self._results) > self._max_results:
            self._results.popitem(last=False)

    def get_result(self, task_id: str) -> Optional[TaskResult]:
        return self._results.get(task_id)


# =============================================================================
# HTTP surface
# =============================================================================
def create_app(handler: TaskHandler) -> FastAPI:
    app = FastAPI(title="product-assistant (agent tasks)")

    @app.get("/.well-known/agent.json", response_model=AgentCard)
    def agent_card():
        return handler.card()

    @app.post("/tasks/send", response_model=TaskResult)
    async def send_task(request: TaskRequest):
        return await handler.handle(request)

    @app.get("/tasks/{task_id}", response_model=TaskResult)
    def get_task(task_id: str):
        result = handler.get_result(task_id)
        if result is None:
            raise HTTPException(status_code=404, detail="task not found")
        return result

    return app


class TaskClient:
    """How another agent talks to this one."""

    def __init__(self, base_url: str, http: Optional[httpx.AsyncClient] = None):
        self._http = http or httpx.AsyncClient(base_url=base_url)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def get_card(self) -> AgentCard:
        response = await self._http.get("/.well-known/agent.json")
        response.raise_for_status()
        return AgentCard.model_validate(response.json())

    async def send_task(self, skill: str, input: Optional[dict[str, Any]] = None) -> TaskResult:
        request = TaskRequest(skill=skill, input=input or {})
        response = await self._http.post("/tasks/send", json=request.model_dump())
        response.raise_for_status()
        return TaskResult.model_validate(response.json())


_app: Optional[FastAPI] = None


def _default_app() -> FastAPI:
    from dotenv import load_dotenv

    from core.client import ProductAPIClient
    from core.config import Settings

    load_dotenv()
    settings = Settings.from_env()
    assistant = ProductAssistant(ProductAPIClient.from_settings(settings))
    return create_app(TaskHandler(assistant, url=settings.agent_server_url))


def __getattr__(name: str):
    # `uvicorn agent.tasks:app` builds the app on first access, so importing
    # this module in tests doesn't create an API client.
    global _app
    if name == "app":
        if _app is None:
            _app = _default_app()
        return _app
    raise AttributeError(name)
