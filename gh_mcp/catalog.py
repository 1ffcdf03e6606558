"""Static tool catalog advertised on tools/list."""

from typing import Tuple

import mcp.types as types

REPO_ACTIONS = ["list", "create", "clone", "view", "delete", "fork"]
PR_ACTIONS = ["list", "create", "view", "merge", "close", "review", "checkout"]
ISSUE_ACTIONS = ["list", "create", "view", "close", "reopen", "comment"]

_STATE = {
    "type": "string",
    "enum": ["open", "closed", "all"],
    "default": "open",
    "description": "State filter for list",
}
_REPO_REF = {"type": "string", "description": "Repository (owner/repo, or repo for your own)"}


TOOLS: Tuple[types.Tool, ...] = (
    types.Tool(
        name="gh_repo",
        description="Manage GitHub repositories",
        inputSchema={
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": REPO_ACTIONS,
                    "description": "Repository action",
                },
                "name": {
                    "type": "string",
                    "description": "Repository name (owner/repo or just repo); required except for list",
                },
                "description": {"type": "string", "description": "Repository description"},
                "public": {
                    "type": "boolean",
                    "description": "Make repository public",
                    "default": True,
                },
                "org": {
                    "type": "string",
                    "description": "Organization to list, create in, or fork into",
                },
                "path": {"type": "string", "description": "Local path for clone"},
                "clone": {
                    "type": "boolean",
                    "description": "Clone the repository locally after create or fork",
                    "default": False,
                },
            },
            "required": ["action"],
        },
    ),
    types.Tool(
        name="gh_pr",
        description="Manage pull requests",
        inputSchema={
            "type": "object",
            "properties": {
                "action": {"type": "string", "enum": PR_ACTIONS, "description": "PR action"},
                "repo": _REPO_REF,
                "number": {"type": "number", "description": "PR number"},
                "title": {"type": "string", "description": "PR title (or merge commit title)"},
                "body": {"type": "string", "description": "PR body or review comment"},
                "base": {"type": "string", "description": "Base branch"},
                "head": {"type": "string", "description": "Head branch"},
                "state": _STATE,
                "draft": {"type": "boolean", "description": "Open as draft", "default": False},
                "merge_method": {
                    "type": "string",
                    "enum": ["merge", "squash", "rebase"],
                    "description": "Merge method",
                    "default": "merge",
                },
                "event": {
                    "type": "string",
                    "enum": ["APPROVE", "REQUEST_CHANGES", "COMMENT"],
                    "description": "Review verdict",
                    "default": "COMMENT",
                },
                "path": {"type": "string", "description": "Local clone to check the PR out in"},
            },
            "required": ["action"],
        },
    ),
    types.Tool(
        name="gh_issue",
        description="Manage GitHub issues",
        inputSchema={
            "type": "object",
            "properties": {
                "action": {"type": "string", "enum": ISSUE_ACTIONS, "description": "Issue action"},
                "repo": _REPO_REF,
                "number": {"type": "number", "description": "Issue number"},
                "title": {"type": "string", "description": "Issue title"},
                "body": {"type": "string", "description": "Issue body or comment text"},
                "labels": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Issue labels",
                },
                "assignees": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Assignees",
                },
                "state": _STATE,
            },
            "required": ["action"],
        },
    ),
)

TOOLS_BY_NAME = {tool.name: tool for tool in TOOLS}


def list_tools() -> Tuple[types.Tool, ...]:
    return TOOLS


def declared_properties(tool_name: str) -> frozenset:
    return frozenset(TOOLS_BY_NAME[tool_name].inputSchema["properties"])
