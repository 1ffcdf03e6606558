import os
import sys

import mcp.types as types
import pytest
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.shared.exceptions import McpError

from gh_mcp.errors import ErrorKind, ToolError, unwrap
from gh_mcp.formatting import text_result
from gh_mcp.server import build_server


def _call(name, arguments):
    return types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )


def test_unwrap_passes_results_through():
    result = text_result("ok")
    assert unwrap(result) is result


@pytest.mark.parametrize("kind", list(ErrorKind))
def test_unwrap_raises_protocol_error_codes(kind):
    with pytest.raises(McpError) as excinfo:
        unwrap(ToolError(kind, "boom"))

    assert excinfo.value.error.code == kind.value
    assert excinfo.value.error.message == "boom"


def test_protocol_codes():
    assert ErrorKind.INVALID_PARAMS.value == -32602
    assert ErrorKind.METHOD_NOT_FOUND.value == -32601
    assert ErrorKind.INTERNAL_ERROR.value == -32603


@pytest.mark.asyncio
async def test_list_tools_handler(dispatcher):
    server = build_server(dispatcher)

    result = await server.request_handlers[types.ListToolsRequest](types.ListToolsRequest(method="tools/list"))

    assert [tool.name for tool in result.root.tools] == ["gh_repo", "gh_pr", "gh_issue"]


@pytest.mark.asyncio
async def test_call_tool_handler_returns_single_text_block(github, dispatcher):
    github.add("POST", "/user/repos", {"html_url": "https://github.com/me/demo"}, status=201)
    server = build_server(dispatcher)

    result = await server.request_handlers[types.CallToolRequest](
        _call("gh_repo", {"action": "create", "name": "demo", "public": False})
    )

    assert result.root.isError is False
    assert [c.text for c in result.root.content] == ["Repository created: https://github.com/me/demo"]


@pytest.mark.asyncio
async def test_call_tool_handler_raises_method_not_found(github, dispatcher):
    server = build_server(dispatcher)

    with pytest.raises(McpError) as excinfo:
        await server.request_handlers[types.CallToolRequest](_call("nonexistent_tool", {}))

    assert excinfo.value.error.code == types.METHOD_NOT_FOUND
    assert github.requests == []


@pytest.mark.asyncio
async def test_call_tool_handler_raises_internal_error(github, dispatcher):
    github.add("GET", "/repos/o/r", {"message": "Not Found"}, status=404)
    server = build_server(dispatcher)

    with pytest.raises(McpError) as excinfo:
        await server.request_handlers[types.CallToolRequest](_call("gh_repo", {"action": "view", "name": "o/r"}))

    assert excinfo.value.error.code == types.INTERNAL_ERROR
    assert "Not Found" in excinfo.value.error.message


@pytest.mark.asyncio
async def test_stdio_end_to_end(tmp_path):
    root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "gh_mcp"],
        env={
            **os.environ,
            "GITHUB_TOKEN": "e2e-token",
            # nothing should be reached; an unroutable address makes that explicit
            "GITHUB_API_URL": "http://127.0.0.1:9",
            "GH_MCP_LOG_FILE": str(tmp_path / "server.log"),
            "PYTHONPATH": root,
        },
        cwd=str(tmp_path),
    )

    async with stdio_client(params) as (read, write):
        async with ClientSession(read, write) as session:
            await session.initialize()

            tools = await session.list_tools()
            by_name = {tool.name: tool for tool in tools.tools}
            assert {"gh_repo", "gh_pr", "gh_issue"} <= set(by_name)
            for tool in by_name.values():
                assert tool.description
                assert "action" in tool.inputSchema["required"]

            with pytest.raises(McpError) as excinfo:
                await session.call_tool("nonexistent_tool", {})
            assert excinfo.value.error.code == types.METHOD_NOT_FOUND

            with pytest.raises(McpError) as excinfo:
                await session.call_tool("gh_repo", {"action": "create"})
            assert excinfo.value.error.code == types.INVALID_PARAMS

    assert "e2e-token" not in (tmp_path / "server.log").read_text()
