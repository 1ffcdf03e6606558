"""MCP server wiring: tools/list and tools/call over stdio."""

import logging

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from gh_mcp import __version__
from gh_mcp.catalog import list_tools
from gh_mcp.config import Settings
from gh_mcp.dispatcher import Dispatcher
from gh_mcp.errors import unwrap
from gh_mcp.github_client import GitHubClient

logger = logging.getLogger(__name__)

SERVER_NAME = "github-mcp"


def build_server(dispatcher: Dispatcher) -> Server:
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """Expose the tools provided by this server."""
        return list(list_tools())

    # Registered directly rather than with @server.call_tool() so that a
    # ToolError reaches the client as a JSON-RPC error with its own code.
    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        outcome = await dispatcher.dispatch(req.params.name, req.params.arguments)
        content = unwrap(outcome)
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def serve(settings: Settings) -> None:
    """Run the MCP server on stdio until the host closes the stream."""
    async with GitHubClient(
        settings.token, base_url=settings.api_url, timeout=settings.timeout
    ) as client:
        server = build_server(Dispatcher(client))
        logger.info("Registered tools: %s", [tool.name for tool in list_tools()])

        async with stdio_server() as (read_stream, write_stream):
            init_options = server.create_initialization_options()
            logger.info("GitHub MCP server running on stdio (api=%s)", settings.api_url)
            await server.run(read_stream, write_stream, init_options)
