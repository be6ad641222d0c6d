"""End-to-end server tests."""

import pytest
import json

from symtree_mcp.server import server, list_tools, call_tool


@pytest.mark.asyncio
async def test_server_lists_five_tools():
    """Test that server lists all 5 tools."""
    tools = await list_tools()

    assert len(tools) == 5

    names = {t.name for t in tools}
    expected = {
        "analyze_binary", "list_binaries", "get_package_tree",
        "get_package_symbols", "search_symbols"
    }
    assert names == expected


@pytest.mark.asyncio
async def test_get_package_tree_tool_schema():
    """Test get_package_tree tool has correct schema."""
    tools = await list_tools()

    tree = next(t for t in tools if t.name == "get_package_tree")

    props = tree.inputSchema["properties"]
    assert "binary" in props
    assert "package" in props
    assert "max_depth" in props
    assert set(props["order"]["enum"]) == {"name", "size"}
    assert tree.inputSchema["required"] == ["binary"]


@pytest.mark.asyncio
async def test_call_tool_unknown():
    """Test unknown tools report an error."""
    result = await call_tool("index_repo", {})
    data = json.loads(result[0].text)
    assert data == {"error": "Unknown tool: index_repo"}


@pytest.mark.asyncio
async def test_call_tool_missing_argument(tmp_path, monkeypatch):
    """Test missing required arguments are reported, not raised."""
    monkeypatch.setenv("SYMTREE_INDEX_PATH", str(tmp_path))
    result = await call_tool("get_package_tree", {})
    data = json.loads(result[0].text)
    assert "error" in data


@pytest.mark.asyncio
async def test_call_tool_analyze_failure(tmp_path, monkeypatch):
    """Test a failing dump tool is surfaced as an unsuccessful result."""
    monkeypatch.setenv("SYMTREE_INDEX_PATH", str(tmp_path))
    monkeypatch.setenv("SYMTREE_GO", str(tmp_path / "no-such-go"))

    result = await call_tool("analyze_binary", {"binary": "bin/app"})
    data = json.loads(result[0].text)
    assert data["success"] is False
    assert "could not run" in data["error"]


@pytest.mark.asyncio
async def test_call_tool_list_binaries(tmp_path, monkeypatch):
    """Test list_binaries through the server."""
    monkeypatch.setenv("SYMTREE_INDEX_PATH", str(tmp_path))
    result = await call_tool("list_binaries", {})
    data = json.loads(result[0].text)
    assert data == {"count": 0, "binaries": []}
