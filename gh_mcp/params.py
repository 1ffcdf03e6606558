"""Per-tool argument parsing.

Each tool's arguments are parsed into one of a closed set of models, picked
by the ``action`` field, before any handler runs. Optional fields that the
caller did not send, or sent as null, are left out by ``provided``, so
"not given" and "given as empty" remain distinguishable.
"""

import logging
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from gh_mcp.catalog import declared_properties
from gh_mcp.errors import ToolError

logger = logging.getLogger(__name__)

NonEmpty = Annotated[str, Field(min_length=1)]
Number = Annotated[int, Field(gt=0)]
State = Literal["open", "closed", "all"]


def _single_segment(value: str) -> str:
    if "/" in value or value in (".", ".."):
        raise ValueError("must be a single name without '/' or dot segments")
    return value


def _not_an_option(value: str) -> str:
    if value.startswith("-"):
        raise ValueError("must not start with '-'")
    return value


Org = Annotated[str, Field(min_length=1), AfterValidator(_single_segment)]
LocalPath = Annotated[str, Field(min_length=1), AfterValidator(_not_an_option)]


class Params(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    def provided(self, *fields: str) -> Dict[str, Any]:
        """The subset of fields the caller actually sent with a value."""
        return {
            f: getattr(self, f)
            for f in fields
            if f in self.model_fields_set and getattr(self, f) is not None
        }


# ----------------------------------------------------------------------
# gh_repo
# ----------------------------------------------------------------------


class RepoList(Params):
    action: Literal["list"]
    org: Optional[Org] = None


class RepoCreate(Params):
    action: Literal["create"]
    name: NonEmpty
    description: Optional[str] = None
    public: bool = True
    org: Optional[Org] = None
    clone: bool = False
    path: Optional[LocalPath] = None


class RepoView(Params):
    action: Literal["view"]
    name: NonEmpty


class RepoDelete(Params):
    action: Literal["delete"]
    name: NonEmpty


class RepoFork(Params):
    action: Literal["fork"]
    name: NonEmpty
    org: Optional[Org] = None
    clone: bool = False
    path: Optional[LocalPath] = None


class RepoClone(Params):
    action: Literal["clone"]
    name: NonEmpty
    path: Optional[LocalPath] = None


RepoParams = Annotated[
    Union[RepoList, RepoCreate, RepoView, RepoDelete, RepoFork, RepoClone],
    Field(discriminator="action"),
]


# ----------------------------------------------------------------------
# gh_pr
# ----------------------------------------------------------------------


class PullList(Params):
    action: Literal["list"]
    repo: NonEmpty
    state: State = "open"


class PullCreate(Params):
    action: Literal["create"]
    repo: NonEmpty
    title: NonEmpty
    head: NonEmpty
    base: NonEmpty
    body: Optional[str] = None
    draft: bool = False


class PullView(Params):
    action: Literal["view"]
    repo: NonEmpty
    number: Number


class PullMerge(Params):
    action: Literal["merge"]
    repo: NonEmpty
    number: Number
    merge_method: Literal["merge", "squash", "rebase"] = "merge"
    title: Optional[str] = None


class PullClose(Params):
    action: Literal["close"]
    repo: NonEmpty
    number: Number


class PullReview(Params):
    action: Literal["review"]
    repo: NonEmpty
    number: Number
    event: Literal["APPROVE", "REQUEST_CHANGES", "COMMENT"] = "COMMENT"
    body: Optional[str] = None


class PullCheckout(Params):
    action: Literal["checkout"]
    repo: NonEmpty
    number: Number
    path: LocalPath


PullParams = Annotated[
    Union[PullList, PullCreate, PullView, PullMerge, PullClose, PullReview, PullCheckout],
    Field(discriminator="action"),
]


# ----------------------------------------------------------------------
# gh_issue
# ----------------------------------------------------------------------


class IssueList(Params):
    action: Literal["list"]
    repo: NonEmpty
    state: State = "open"
    labels: Optional[List[str]] = None


class IssueCreate(Params):
    action: Literal["create"]
    repo: NonEmpty
    title: NonEmpty
    body: Optional[str] = None
    labels: Optional[List[str]] = None
    assignees: Optional[List[str]] = None


class IssueView(Params):
    action: Literal["view"]
    repo: NonEmpty
    number: Number


class IssueClose(Params):
    action: Literal["close"]
    repo: NonEmpty
    number: Number


class IssueReopen(Params):
    action: Literal["reopen"]
    repo: NonEmpty
    number: Number


class IssueComment(Params):
    action: Literal["comment"]
    repo: NonEmpty
    number: Number
    body: NonEmpty


IssueParams = Annotated[
    Union[IssueList, IssueCreate, IssueView, IssueClose, IssueReopen, IssueComment],
    Field(discriminator="action"),
]


PARSERS: Dict[str, TypeAdapter] = {
    "gh_repo": TypeAdapter(RepoParams),
    "gh_pr": TypeAdapter(PullParams),
    "gh_issue": TypeAdapter(IssueParams),
}


def parse_arguments(tool_name: str, raw: Optional[Mapping[str, Any]]) -> Union[Params, ToolError]:
    """Parse raw tool arguments into the model for their action."""
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        return ToolError.invalid_params(f"Arguments for {tool_name} must be an object")

    unknown = sorted(set(raw) - declared_properties(tool_name))
    if unknown:
        return ToolError.invalid_params(
            f"Unknown argument(s) for {tool_name}: {', '.join(unknown)}"
        )

    try:
        return PARSERS[tool_name].validate_python(dict(raw))
    except ValidationError as e:
        logger.warning("Invalid arguments for %s: %s", tool_name, e.errors(include_url=False, include_input=False))
        return ToolError.invalid_params(_describe(tool_name, e))


def _describe(tool_name: str, error: ValidationError) -> str:
    problems = []
    for err in error.errors(include_url=False):
        # first loc item is the union tag (the action) for field errors
        field = ".".join(str(part) for part in err["loc"][1:]) or "action"
        problems.append(f"{field}: {err['msg']}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)
