"""Error taxonomy shared by the client, the handlers and the server."""

import enum
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import mcp.types as types
from mcp.shared.exceptions import McpError


class ErrorKind(enum.Enum):
    INVALID_PARAMS = types.INVALID_PARAMS
    METHOD_NOT_FOUND = types.METHOD_NOT_FOUND
    INTERNAL_ERROR = types.INTERNAL_ERROR


@dataclass(frozen=True)
class ToolError:
    """A failed tool call, carried as a value up to the server boundary."""

    kind: ErrorKind
    message: str

    @classmethod
    def invalid_params(cls, message: str) -> "ToolError":
        return cls(ErrorKind.INVALID_PARAMS, message)

    def to_mcp_error(self) -> McpError:
        return McpError(types.ErrorData(code=self.kind.value, message=self.message))


ToolResult = List[types.TextContent]
Outcome = Union[ToolResult, ToolError]


class GitHubAPIError(Exception):
    """Transport fault, non-2xx response or unreadable body from the GitHub API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GitCommandError(Exception):
    def __init__(self, args: Sequence[str], returncode: Optional[int], stderr: str = ""):
        command = " ".join(["git", *args])
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"{command}: {detail}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


def unwrap(outcome: Outcome) -> ToolResult:
    """Return the tool result, raising the protocol error for a ToolError."""
    if isinstance(outcome, ToolError):
        raise outcome.to_mcp_error()
    return outcome
