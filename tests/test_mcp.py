# tests/test_mcp.py
import asyncio
import json
from types import SimpleNamespace

import pytest
from fastmcp.exceptions import ToolError

import tools.mcp_client as mcp_client
from tools.mcp_client import ToolProviderClient, run_with_tools, to_openai_tools
from tools.mcp_server import SERVER_NAME, create_server


@pytest.fixture
def server(api):
    return create_server(api)


def _run(server, scenario):
    async def main():
        async with ToolProviderClient(server) as client:
            return await scenario(client)

    return asyncio.run(main())


def test_server_name(server):
    assert server.name == SERVER_NAME


def test_discovery_lists_product_tools(server):
    specs = _run(server, lambda client: client.list_tools())
    names = {spec.name for spec in specs}
    assert names == {
        "add_product", "get_product", "list_products",
        "search_products", "update_product", "delete_product",
    }
    add = next(spec for spec in specs if spec.name == "add_product")
    assert "id" in add.description
    assert set(add.parameters["required"]) == {"name", "price_cents"}

    rendered = to_openai_tools(specs)
    assert all(tool["type"] == "function" for tool in rendered)


def test_invocation_is_stateless(server, api):
    async def scenario(client):
        added = await client.call_tool("add_product", {"name": "Mug", "price_cents": 1299})
        updated = await client.call_tool("update_product", {"product_id": added["id"], "price_cents": 1450})
        listing = await client.call_tool("list_products", {})
        return added, updated, listing

    added, updated, listing = _run(server, scenario)
    assert updated["price_cents"] == 1450
    assert listing["count"] == 1
    assert api.get_product(added["id"]).price_cents == 1450


def test_api_errors_surface_raw(server):
    async def scenario(client):
        with pytest.raises(ToolError) as info:
            await client.call_tool("get_product", {"product_id": "missing"})
        return str(info.value)

    message = _run(server, scenario)
    assert "404: product not found" in message


def _tool_call(call_id, name, arguments):
    return SimpleNamespace(
        id=call_id,
        function=SimpleNamespace(name=name, arguments=json.dumps(arguments)),
    )


def _response(content=None, tool_calls=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def test_llm_loop_executes_tool_calls(server, api, monkeypatch):
    replies = [
        _response(tool_calls=[_tool_call("c1", "add_product", {"name": "Mug", "price_cents": 1299})]),
        _response(tool_calls=[_tool_call("c2", "get_product", {"product_id": "missing"})]),
        _response(content="Added the mug."),
    ]
    seen = []

    async def fake_acompletion(model, messages, tools):
        seen.append([dict(m) for m in messages])
        return replies.pop(0)

    monkeypatch.setattr(mcp_client.litellm, "acompletion", fake_acompletion)

    answer = _run(server, lambda client: run_with_tools(client, "add a mug", model="test-model"))
    assert answer == "Added the mug."
    assert [p.name for p in api.list_products()] == ["Mug"]

    last_messages = seen[-1]
    tool_results = [m for m in last_messages if m["role"] == "tool"]
    assert json.loads(tool_results[0]["content"])["name"] == "Mug"
    assert "404" in json.loads(tool_results[1]["content"])["error"]


def test_llm_loop_gives_up_after_max_rounds(server, monkeypatch):
    async def always_calls(model, messages, tools):
        return _response(tool_calls=[_tool_call("c", "list_products", {})])

    monkeypatch.setattr(mcp_client.litellm, "acompletion", always_calls)

    with pytest.raises(RuntimeError):
        _run(server, lambda client: run_with_tools(client, "loop", model="m", max_rounds=2))
