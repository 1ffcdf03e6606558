"""Route a tool call to its validated handler and fold failures into ToolError."""

import logging
from typing import Any, Mapping, Optional

from gh_mcp.errors import ErrorKind, GitCommandError, GitHubAPIError, Outcome, ToolError
from gh_mcp.github_client import GitHubClient
from gh_mcp.handlers import HANDLERS, HandlerContext
from gh_mcp.local_git import LocalGit
from gh_mcp.params import parse_arguments

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(self, client: GitHubClient, git: Optional[LocalGit] = None):
        self.context = HandlerContext(client=client, git=git or LocalGit())

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]]) -> Outcome:
        actions = HANDLERS.get(name)
        if actions is None:
            logger.error("Unknown tool called: %s", name)
            return ToolError(ErrorKind.METHOD_NOT_FOUND, f"Unknown tool: {name}")

        params = parse_arguments(name, arguments)
        if isinstance(params, ToolError):
            return params

        logger.info("Tool call %s/%s with %s", name, params.action, sorted(params.model_fields_set))
        handler = actions[params.action]
        try:
            return await handler(self.context, params)
        except GitHubAPIError as e:
            logger.error("%s/%s failed: %s", name, params.action, e)
            return ToolError(ErrorKind.INTERNAL_ERROR, f"GitHub API error: {e}")
        except GitCommandError as e:
            logger.error("%s/%s failed: %s", name, params.action, e)
            return ToolError(ErrorKind.INTERNAL_ERROR, f"git command failed: {e}")
        except Exception as e:
            logger.exception("%s/%s failed unexpectedly", name, params.action)
            return ToolError(ErrorKind.INTERNAL_ERROR, f"Internal error: {type(e).__name__}: {e}")
