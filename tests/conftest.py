import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from gh_mcp.dispatcher import Dispatcher
from gh_mcp.errors import GitCommandError
from gh_mcp.github_client import GitHubClient
from gh_mcp.local_git import default_clone_dir

TOKEN = "ghp_test_token"


class FakeGitHub:
    """Stands in for api.github.com: canned replies keyed by (method, path)."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []
        self.fail_with: Optional[Exception] = None

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def calls(self) -> List[Tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    def sent_json(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


class FakeGit:
    def __init__(self, error: Optional[str] = None):
        self.calls: List[tuple] = []
        self.error = error

    async def clone(self, url: str, dest: Optional[str] = None) -> str:
        self.calls.append(("clone", url, dest))
        if self.error:
            raise GitCommandError(["clone", url], 128, self.error)
        return dest or default_clone_dir(url)

    async def checkout_pull(self, path: str, number: int, branch: str) -> None:
        self.calls.append(("checkout_pull", path, number, branch))
        if self.error:
            raise GitCommandError(["fetch", "origin"], 1, self.error)


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def client(github: FakeGitHub) -> GitHubClient:
    return GitHubClient(TOKEN, transport=httpx.MockTransport(github.handler))


@pytest.fixture
def git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def dispatcher(client: GitHubClient, git: FakeGit) -> Dispatcher:
    return Dispatcher(client, git=git)
