# tests/test_tasks.py
import asyncio
import threading

import httpx
import pytest
from fastapi.testclient import TestClient

from agent.assistant import ProductAssistant
from agent import tasks
from agent.tasks import TaskClient, TaskHandler, TaskRequest, create_app


@pytest.fixture
def handler(api):
    return TaskHandler(ProductAssistant(api), url="http://agent.test")


@pytest.fixture
def agent_http(handler):
    with TestClient(create_app(handler)) as client:
        yield client


def test_agent_card_lists_skills(agent_http):
    card = agent_http.get("/.well-known/agent.json").json()
    assert card["name"] == "product-assistant"
    assert card["url"] == "http://agent.test"
    skills = {s["id"]: s for s in card["skills"]}
    assert {"add_product", "update_price", "remove_product", "find_products"} <= set(skills)
    assert skills["add_product"]["input_schema"]["required"] == ["name", "price_cents"]
    assert skills["update_price"]["name"] == "Update price"


def test_tasks_share_the_assistant_memory(agent_http, api):
    r = agent_http.post("/tasks/send", json={"skill": "add_product", "input": {"name": "Mug", "price_cents": 1299}})
    assert r.status_code == 200
    assert r.json()["status"] == "completed"

    r = agent_http.post("/tasks/send", json={"skill": "update_price", "input": {"price_cents": 1450}})
    result = r.json()
    assert result["status"] == "completed"
    assert result["output"] == "Done. 'Mug' now costs $14.50."
    assert api.list_products()[0].price_cents == 1450

    stored = agent_http.get(f"/tasks/{result['id']}").json()
    assert stored == result


def test_unknown_skill_and_bad_input_fail_cleanly(agent_http):
    r = agent_http.post("/tasks/send", json={"skill": "fly", "input": {}})
    assert r.status_code == 200
    assert r.json()["status"] == "failed"
    assert "unknown tool 'fly'" in r.json()["error"]

    r = agent_http.post("/tasks/send", json={"skill": "add_product", "input": {"name": "Mug"}})
    assert r.json()["status"] == "failed"
    assert "price_cents" in r.json()["error"]


def test_unknown_task_is_404(agent_http):
    assert agent_http.get("/tasks/does-not-exist").status_code == 404


def test_handler_directly(handler):
    result = asyncio.run(handler.handle(TaskRequest(id="t1", skill="list_catalog")))
    assert result.status == "completed"
    assert result.output == "The catalog has no products yet."
    assert handler.get_result("t1") == result


def test_task_client_over_asgi(handler):
    async def scenario():
        transport = httpx.ASGITransport(app=create_app(handler))
        http = httpx.AsyncClient(transport=transport, base_url="http://agent.test")
        client = TaskClient("http://agent.test", http=http)
        try:
            card = await client.get_card()
            added = await client.send_task("add_product", {"name": "Teapot", "price_cents": 2500})
            described = await client.send_task("describe_product")
        finally:
            await client.aclose()
        return card, added, described

    card, added, described = asyncio.run(scenario())
    assert card.name == "product-assistant"
    assert added.status == "completed"
    assert "'Teapot' (general): $25.00" in described.output


class _SlowCatalog:
    """Catalog client whose lookup of one product blocks until released."""

    def __init__(self, api, slow_id):
        self._api = api
        self._slow_id = slow_id
        self.entered = threading.Event()
        self.release = threading.Event()

    def __getattr__(self, name):
        return getattr(self._api, name)

    def get_product(self, product_id):
        if product_id == self._slow_id:
            self.entered.set()
            self.release.wait(5)
        return self._api.get_product(product_id)


def test_concurrent_tasks_do_not_interleave_on_memory(api):
    first = api.add_product("First", 100)
    second = api.add_product("Second", 200)
    catalog = _SlowCatalog(api, first.id)
    assistant = ProductAssistant(catalog)
    handler = TaskHandler(assistant)

    async def scenario():
        slow = asyncio.create_task(
            handler.handle(TaskRequest(skill="describe_product", input={"product_id": first.id}))
        )
        await asyncio.to_thread(catalog.entered.wait, 5)
        fast = asyncio.create_task(
            handler.handle(TaskRequest(skill="describe_product", input={"product_id": second.id}))
        )
        await asyncio.sleep(0.05)
        catalog.release.set()
        return await asyncio.gather(slow, fast)

    slow_result, fast_result = asyncio.run(scenario())
    assert "'First'" in slow_result.output
    assert "'Second'" in fast_result.output
    # The task sent last is the one whose product is remembered.
    assert assistant.memory.last_product_id == second.id


def test_stored_results_are_capped(api):
    handler = TaskHandler(ProductAssistant(api), max_results=2)
    for task_id in ("t1", "t2", "t3"):
        asyncio.run(handler.handle(TaskRequest(id=task_id, skill="list_catalog")))
    assert handler.get_result("t1") is None
    assert handler.get_result("t2").status == "completed"
    assert handler.get_result("t3").status == "completed"


def test_module_app_is_built_once(monkeypatch):
    built = []

    def fake_default_app():
        built.append(object())
        return built[-1]

    monkeypatch.setattr(tasks, "_app", None)
    monkeypatch.setattr(tasks, "_default_app", fake_default_app)
    assert tasks.app is tasks.app
    assert len(built) == 1
