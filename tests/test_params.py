import pytest

from gh_mcp.errors import ErrorKind, ToolError
from gh_mcp.params import (
    IssueCreate,
    IssueList,
    PullCreate,
    PullMerge,
    PullReview,
    RepoCreate,
    RepoList,
    parse_arguments,
)


def _assert_invalid(result, *fragments):
    assert isinstance(result, ToolError)
    assert result.kind is ErrorKind.INVALID_PARAMS
    for fragment in fragments:
        assert fragment in result.message


def test_action_picks_the_model():
    assert isinstance(parse_arguments("gh_repo", {"action": "list"}), RepoList)
    assert isinstance(parse_arguments("gh_repo", {"action": "create", "name": "demo"}), RepoCreate)


@pytest.mark.parametrize("raw", [{}, {"action": "explode"}, {"action": 3}, None])
def test_missing_or_unknown_action_is_rejected(raw):
    _assert_invalid(parse_arguments("gh_repo", raw), "action")


def test_non_object_arguments_are_rejected():
    _assert_invalid(parse_arguments("gh_pr", ["list"]), "must be an object")


def test_unknown_keys_are_rejected():
    _assert_invalid(
        parse_arguments("gh_repo", {"action": "list", "visibility": "all"}),
        "visibility",
    )


def test_fields_of_other_actions_are_tolerated():
    params = parse_arguments("gh_repo", {"action": "list", "public": False})
    assert isinstance(params, RepoList)


@pytest.mark.parametrize("action", ["create", "view", "delete", "fork", "clone"])
def test_repo_name_required(action):
    _assert_invalid(parse_arguments("gh_repo", {"action": action}), "name")


def test_repo_name_must_not_be_empty():
    _assert_invalid(parse_arguments("gh_repo", {"action": "create", "name": ""}), "name")


def test_repo_create_defaults():
    params = parse_arguments("gh_repo", {"action": "create", "name": "demo"})

    assert params.public is True
    assert params.clone is False
    assert params.provided("description") == {}


def test_explicit_empty_description_is_kept():
    params = parse_arguments("gh_repo", {"action": "create", "name": "demo", "description": ""})
    assert params.provided("description") == {"description": ""}


def test_pull_defaults():
    params = parse_arguments(
        "gh_pr", {"action": "create", "repo": "o/r", "title": "T", "head": "feat", "base": "main"}
    )
    assert isinstance(params, PullCreate)
    assert params.draft is False

    merge = parse_arguments("gh_pr", {"action": "merge", "repo": "o/r", "number": 4})
    assert isinstance(merge, PullMerge)
    assert merge.merge_method == "merge"

    review = parse_arguments("gh_pr", {"action": "review", "repo": "o/r", "number": 4})
    assert isinstance(review, PullReview)
    assert review.event == "COMMENT"


@pytest.mark.parametrize(
    "raw, missing",
    [
        ({"action": "list"}, "repo"),
        ({"action": "view", "repo": "o/r"}, "number"),
        ({"action": "create", "repo": "o/r", "title": "T", "head": "x"}, "base"),
        ({"action": "checkout", "repo": "o/r", "number": 1}, "path"),
    ],
)
def test_pull_required_fields(raw, missing):
    _assert_invalid(parse_arguments("gh_pr", raw), missing)


def test_number_must_be_positive():
    _assert_invalid(parse_arguments("gh_pr", {"action": "view", "repo": "o/r", "number": 0}), "number")


def test_number_accepts_whole_json_numbers():
    params = parse_arguments("gh_issue", {"action": "view", "repo": "o/r", "number": 12.0})
    assert params.number == 12


def test_state_enum_and_default():
    assert parse_arguments("gh_issue", {"action": "list", "repo": "o/r"}).state == "open"
    _assert_invalid(parse_arguments("gh_issue", {"action": "list", "repo": "o/r", "state": "merged"}), "state")


def test_issue_fields():
    params = parse_arguments(
        "gh_issue",
        {"action": "create", "repo": "o/r", "title": "Bug", "labels": ["bug"], "assignees": []},
    )
    assert isinstance(params, IssueCreate)
    assert params.provided("body", "labels", "assignees") == {"labels": ["bug"], "assignees": []}

    listed = parse_arguments("gh_issue", {"action": "list", "repo": "o/r"})
    assert isinstance(listed, IssueList)
    assert listed.labels is None


def test_comment_requires_body():
    _assert_invalid(parse_arguments("gh_issue", {"action": "comment", "repo": "o/r", "number": 1}), "body")


def test_checkout_path_must_not_look_like_an_option():
    _assert_invalid(
        parse_arguments("gh_pr", {"action": "checkout", "repo": "o/r", "number": 1, "path": "-c"}),
        "path",
    )


def test_null_optional_fields_are_not_provided():
    params = parse_arguments("gh_pr", {"action": "review", "repo": "o/r", "number": 1, "body": None})
    assert params.provided("body") == {}

    merge = parse_arguments("gh_pr", {"action": "merge", "repo": "o/r", "number": 1, "title": None})
    assert merge.provided("title") == {}
