"""gh_pr actions."""

from gh_mcp.errors import Outcome, ToolError
from gh_mcp.formatting import json_result, login, text_result
from gh_mcp.handlers.common import HandlerContext, resolve_repo
from gh_mcp.params import (
    PullCheckout,
    PullClose,
    PullCreate,
    PullList,
    PullMerge,
    PullReview,
    PullView,
)


async def list_pulls(ctx: HandlerContext, params: PullList) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    pulls = await ctx.client.list_pulls(owner, repo, params.state)
    return json_result([
        {
            "number": pr.get("number"),
            "title": pr.get("title"),
            "state": pr.get("state"),
            "draft": pr.get("draft", False),
            "author": login(pr.get("user")),
            "head": pr["head"]["ref"],
            "base": pr["base"]["ref"],
            "url": pr.get("html_url"),
            "updated": pr.get("updated_at"),
        }
        for pr in pulls
    ])


async def create_pull(ctx: HandlerContext, params: PullCreate) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    body = {
        "title": params.title,
        "head": params.head,
        "base": params.base,
        "draft": params.draft,
        **params.provided("body"),
    }
    pr = await ctx.client.create_pull(owner, repo, body)
    return text_result(f"Pull request created: #{pr['number']} {pr['html_url']}")


async def view_pull(ctx: HandlerContext, params: PullView) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    pr = await ctx.client.get_pull(owner, repo, params.number)
    return json_result({
        "number": pr.get("number"),
        "title": pr.get("title"),
        "state": pr.get("state"),
        "draft": pr.get("draft", False),
        "merged": pr.get("merged"),
        "mergeable": pr.get("mergeable"),
        "author": login(pr.get("user")),
        "head": pr["head"]["ref"],
        "base": pr["base"]["ref"],
        "body": pr.get("body"),
        "url": pr.get("html_url"),
        "created": pr.get("created_at"),
        "updated": pr.get("updated_at"),
        "comments": pr.get("comments"),
        "commits": pr.get("commits"),
        "additions": pr.get("additions"),
        "deletions": pr.get("deletions"),
        "changed_files": pr.get("changed_files"),
    })


async def merge_pull(ctx: HandlerContext, params: PullMerge) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    body = {"merge_method": params.merge_method}
    if params.provided("title"):
        body["commit_title"] = params.title
    result = await ctx.client.merge_pull(owner, repo, params.number, body)
    return text_result(f"Pull request #{params.number} merged: {result.get('sha')}")


async def close_pull(ctx: HandlerContext, params: PullClose) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    pr = await ctx.client.update_pull(owner, repo, params.number, {"state": "closed"})
    return text_result(f"Pull request closed: #{pr['number']} {pr['html_url']}")


async def review_pull(ctx: HandlerContext, params: PullReview) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    body = {"event": params.event, **params.provided("body")}
    review = await ctx.client.create_review(owner, repo, params.number, body)
    return text_result(
        f"Review submitted on pull request #{params.number} "
        f"({review.get('state')}): {review.get('html_url')}"
    )


async def checkout_pull(ctx: HandlerContext, params: PullCheckout) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    pr = await ctx.client.get_pull(owner, repo, params.number)
    branch = pr["head"]["ref"]
    await ctx.git.checkout_pull(params.path, params.number, branch)
    return text_result(
        f"Checked out pull request #{params.number} as branch {branch} in {params.path}"
    )


ACTIONS = {
    "list": list_pulls,
    "create": create_pull,
    "view": view_pull,
    "merge": merge_pull,
    "close": close_pull,
    "review": review_pull,
    "checkout": checkout_pull,
}
