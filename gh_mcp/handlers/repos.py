"""gh_repo actions."""

import logging

from gh_mcp.errors import Outcome, ToolError
from gh_mcp.formatting import json_result, text_result
from gh_mcp.handlers.common import HandlerContext, resolve_repo
from gh_mcp.params import RepoClone, RepoCreate, RepoDelete, RepoFork, RepoList, RepoView

logger = logging.getLogger(__name__)


def _summary(repo: dict) -> dict:
    return {
        "name": repo.get("full_name"),
        "description": repo.get("description"),
        "private": repo.get("private"),
        "url": repo.get("html_url"),
        "language": repo.get("language"),
        "stars": repo.get("stargazers_count"),
        "updated": repo.get("updated_at"),
    }


async def list_repos(ctx: HandlerContext, params: RepoList) -> Outcome:
    if params.org:
        repos = await ctx.client.list_org_repos(params.org)
    else:
        repos = await ctx.client.list_user_repos()
    logger.info("Listed %d repositories", len(repos))
    return json_result([_summary(repo) for repo in repos])


async def create_repo(ctx: HandlerContext, params: RepoCreate) -> Outcome:
    body = {
        "name": params.name,
        **params.provided("description"),
        "private": not params.public,
        "auto_init": True,
    }
    repo = await ctx.client.create_repo(body, org=params.org)
    text = f"Repository created: {repo['html_url']}"
    if params.clone:
        dest = await ctx.git.clone(repo["clone_url"], params.path)
        text += f"\nCloned to {dest}"
    return text_result(text)


async def view_repo(ctx: HandlerContext, params: RepoView) -> Outcome:
    resolved = await resolve_repo(ctx, params.name)
    if isinstance(resolved, ToolError):
        return resolved
    owner, name = resolved

    repo = await ctx.client.get_repo(owner, name)
    return json_result({
        "name": repo.get("full_name"),
        "description": repo.get("description"),
        "private": repo.get("private"),
        "url": repo.get("html_url"),
        "language": repo.get("language"),
        "stars": repo.get("stargazers_count"),
        "forks": repo.get("forks_count"),
        "issues": repo.get("open_issues_count"),
        "created": repo.get("created_at"),
        "updated": repo.get("updated_at"),
        "topics": repo.get("topics"),
        "default_branch": repo.get("default_branch"),
    })


async def delete_repo(ctx: HandlerContext, params: RepoDelete) -> Outcome:
    resolved = await resolve_repo(ctx, params.name)
    if isinstance(resolved, ToolError):
        return resolved
    owner, name = resolved

    await ctx.client.delete_repo(owner, name)
    logger.warning("Deleted repository %s/%s", owner, name)
    return text_result(f"Repository deleted: {owner}/{name}")


async def fork_repo(ctx: HandlerContext, params: RepoFork) -> Outcome:
    resolved = await resolve_repo(ctx, params.name)
    if isinstance(resolved, ToolError):
        return resolved
    owner, name = resolved

    fork = await ctx.client.fork_repo(owner, name, organization=params.org)
    text = f"Repository forked: {fork['html_url']}"
    if params.clone:
        dest = await ctx.git.clone(fork["clone_url"], params.path)
        text += f"\nCloned to {dest}"
    return text_result(text)


async def clone_repo(ctx: HandlerContext, params: RepoClone) -> Outcome:
    resolved = await resolve_repo(ctx, params.name)
    if isinstance(resolved, ToolError):
        return resolved
    owner, name = resolved

    repo = await ctx.client.get_repo(owner, name)
    dest = await ctx.git.clone(repo["clone_url"], params.path)
    return text_result(f"Repository cloned: {repo['full_name']} -> {dest}")


ACTIONS = {
    "list": list_repos,
    "create": create_repo,
    "view": view_repo,
    "delete": delete_repo,
    "fork": fork_repo,
    "clone": clone_repo,
}
