import json

import pytest

from perfumesearch import mcp_server
from perfumesearch.tool import INPUT_SCHEMA, TOOL_NAME


async def test_list_tools():
    tools = await mcp_server.list_tools()
    assert [t.name for t in tools] == [TOOL_NAME]
    assert tools[0].inputSchema == INPUT_SCHEMA


async def test_dispatch_runs_tool(monkeypatch, fake_clients):
    real_execute = mcp_server.perfume_tool.execute

    async def execute(args, *, settings=None):
        return await real_execute(args, settings=settings, clients=fake_clients)

    monkeypatch.setattr(mcp_server.perfume_tool, "execute", execute)
    result = await mcp_server._dispatch_tool(TOOL_NAME, {"query": "citrus", "topK": 3})
    assert result["success"] is True
    assert len(result["perfumes"]) == 3
    assert set(result) == {"success", "message", "perfumes"}


async def test_unknown_tool():
    with pytest.raises(ValueError):
        await mcp_server._dispatch_tool("nope", {})


async def test_call_tool_reports_schema_errors():
    # Validation fails before any provider or settings are touched.
    content = await mcp_server.call_tool(TOOL_NAME, {"query": "x", "topK": 50})
    assert content[0].text.startswith("Error: Invalid arguments")
    assert "topK" in content[0].text


async def test_call_tool_serializes_envelope(monkeypatch):
    async def fake_dispatch(name, args):
        return {"success": False, "message": "No perfumes found", "perfumes": []}

    monkeypatch.setattr(mcp_server, "_dispatch_tool", fake_dispatch)
    content = await mcp_server.call_tool(TOOL_NAME, {"query": "x"})
    assert json.loads(content[0].text)["perfumes"] == []
