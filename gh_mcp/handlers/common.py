import logging
from dataclasses import dataclass
from typing import Tuple, Union

from gh_mcp.errors import ToolError
from gh_mcp.github_client import GitHubClient
from gh_mcp.local_git import LocalGit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandlerContext:
    client: GitHubClient
    git: LocalGit


def split_repo(name: str) -> Union[Tuple[str, str], ToolError, None]:
    """Split 'owner/repo'; None means the owner must be looked up."""
    parts = name.split("/")
    if len(parts) > 2 or any(part in ("", ".", "..") for part in parts):
        return ToolError.invalid_params(f"Invalid repository {name!r}. Use 'owner/repo' or 'repo'")
    if len(parts) == 1:
        return None
    return parts[0], parts[1]


async def resolve_repo(ctx: HandlerContext, name: str) -> Union[Tuple[str, str], ToolError]:
    """Return (owner, repo), using the authenticated user when no owner is given."""
    split = split_repo(name)
    if split is not None:
        return split
    user = await ctx.client.get_authenticated_user()
    logger.debug("Resolved owner of %r to authenticated user %r", name, user["login"])
    return user["login"], name
