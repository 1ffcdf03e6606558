"""Action handlers, one coroutine per (tool, action)."""

from gh_mcp.handlers import issues, pulls, repos
from gh_mcp.handlers.common import HandlerContext

HANDLERS = {
    "gh_repo": repos.ACTIONS,
    "gh_pr": pulls.ACTIONS,
    "gh_issue": issues.ACTIONS,
}

__all__ = ["HANDLERS", "HandlerContext"]
