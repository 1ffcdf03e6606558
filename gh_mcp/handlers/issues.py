"""gh_issue actions."""

from gh_mcp.errors import Outcome, ToolError
from gh_mcp.formatting import json_result, login, text_result
from gh_mcp.handlers.common import HandlerContext, resolve_repo
from gh_mcp.params import IssueClose, IssueComment, IssueCreate, IssueList, IssueReopen, IssueView


def _names(items) -> list:
    return [item.get("name") or item.get("login") for item in items or []]


async def list_issues(ctx: HandlerContext, params: IssueList) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    query = {"state": params.state}
    if params.labels:
        query["labels"] = ",".join(params.labels)
    issues = await ctx.client.list_issues(owner, repo, query)
    return json_result([
        {
            "number": issue.get("number"),
            "title": issue.get("title"),
            "state": issue.get("state"),
            "labels": _names(issue.get("labels")),
            "assignees": _names(issue.get("assignees")),
            "author": login(issue.get("user")),
            "comments": issue.get("comments"),
            "url": issue.get("html_url"),
            "updated": issue.get("updated_at"),
        }
        for issue in issues
        if "pull_request" not in issue  # the issues endpoint also returns PRs
    ])


async def create_issue(ctx: HandlerContext, params: IssueCreate) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    body = {"title": params.title, **params.provided("body", "labels", "assignees")}
    issue = await ctx.client.create_issue(owner, repo, body)
    return text_result(f"Issue created: #{issue['number']} {issue['html_url']}")


async def view_issue(ctx: HandlerContext, params: IssueView) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    issue = await ctx.client.get_issue(owner, repo, params.number)
    return json_result({
        "number": issue.get("number"),
        "title": issue.get("title"),
        "state": issue.get("state"),
        "body": issue.get("body"),
        "labels": _names(issue.get("labels")),
        "assignees": _names(issue.get("assignees")),
        "author": login(issue.get("user")),
        "comments": issue.get("comments"),
        "url": issue.get("html_url"),
        "created": issue.get("created_at"),
        "updated": issue.get("updated_at"),
        "closed": issue.get("closed_at"),
    })


async def _set_state(ctx: HandlerContext, repo_name: str, number: int, state: str, verb: str) -> Outcome:
    resolved = await resolve_repo(ctx, repo_name)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    issue = await ctx.client.update_issue(owner, repo, number, {"state": state})
    return text_result(f"Issue {verb}: #{issue['number']} {issue['html_url']}")


async def close_issue(ctx: HandlerContext, params: IssueClose) -> Outcome:
    return await _set_state(ctx, params.repo, params.number, "closed", "closed")


async def reopen_issue(ctx: HandlerContext, params: IssueReopen) -> Outcome:
    return await _set_state(ctx, params.repo, params.number, "open", "reopened")


async def comment_issue(ctx: HandlerContext, params: IssueComment) -> Outcome:
    resolved = await resolve_repo(ctx, params.repo)
    if isinstance(resolved, ToolError):
        return resolved
    owner, repo = resolved

    comment = await ctx.client.create_issue_comment(owner, repo, params.number, params.body)
    return text_result(f"Comment added to issue #{params.number}: {comment['html_url']}")


ACTIONS = {
    "list": list_issues,
    "create": create_issue,
    "view": view_issue,
    "close": close_issue,
    "reopen": reopen_issue,
    "comment": comment_issue,
}
